# -*- coding: utf-8 -*-
"""Resource registry and the present/absent reconcile loop used by the modules in library/."""
import logging
from collections import namedtuple
from types import MappingProxyType

from cassandra_provider import grant, keyspace, role
from cassandra_provider.connection import configure

log = logging.getLogger(__name__)

STATE_PRESENT = 'present'
STATE_ABSENT = 'absent'

Resource = namedtuple('Resource', ['parse', 'identify', 'exists', 'create', 'read', 'update', 'delete', 'changed'])

RESOURCES = MappingProxyType({
    'cassandra_keyspace': Resource(
        parse=keyspace.parse_keyspace,
        identify=lambda desired: desired['name'],
        exists=keyspace.keyspace_exists,
        create=keyspace.keyspace_create,
        read=keyspace.keyspace_read,
        update=keyspace.keyspace_update,
        delete=keyspace.keyspace_delete,
        changed=keyspace.keyspace_changed,
    ),
    'cassandra_role': Resource(
        parse=role.parse_role,
        identify=lambda desired: desired['name'],
        exists=role.role_exists,
        create=role.role_create,
        read=role.role_read,
        update=role.role_update,
        delete=role.role_delete,
        changed=role.role_changed,
    ),
    'cassandra_grant': Resource(
        parse=grant.parse_grant,
        identify=lambda desired: desired.id,
        exists=grant.grant_exists,
        create=grant.grant_create,
        read=grant.grant_read,
        update=grant.grant_update,
        delete=grant.grant_delete,
        changed=grant.grant_changed,
    ),
})


def apply(resource_name, params, state=STATE_PRESENT, check_mode=False):
    """Bring one resource to `state` and report what happened.

    Attributes are validated before connecting. In check mode nothing that
    modifies the cluster is executed, but `changed` still reports what would
    happen. Driver errors propagate unchanged.
    """
    resource = RESOURCES[resource_name]
    desired = resource.parse(params)
    config = configure(params)
    result = {'changed': False, 'id': resource.identify(desired)}

    with config.session() as session:
        exists = resource.exists(session, desired)

        if state == STATE_ABSENT:
            if exists:
                result['changed'] = True
                if not check_mode:
                    resource.delete(session, desired)
                    log.info('%s %s deleted', resource_name, result['id'])
            return result

        if not exists:
            result['changed'] = True
            if not check_mode:
                result['id'] = resource.create(session, desired)
                log.info('%s %s created', resource_name, result['id'])
                result['attributes'] = resource.read(session, desired)
            return result

        current = resource.read(session, desired)
        if resource.changed(current, desired):
            result['changed'] = True
            if not check_mode:
                resource.update(session, desired)
                log.info('%s %s updated', resource_name, result['id'])
                current = resource.read(session, desired)
        result['attributes'] = current

    return result
