# -*- coding: utf-8 -*-
"""Cassandra permission grants.

A grant is validated against a static table of the resource types each
privilege applies to, then rendered into one of three statements:

    GRANT <privilege> ON <resource type> ["<keyspace>"][.]["<identifier>"] TO "<grantee>"
    REVOKE ... FROM "<grantee>"
    LIST ... OF "<grantee>"

Grants cannot be updated; changing any attribute means revoking and granting again.
"""
import logging
from collections import namedtuple
from types import MappingProxyType

from cassandra_provider.common import fingerprint, first_row, quote_identifier
from cassandra_provider.errors import ConfigurationError, NotFoundError, ValidationError
from cassandra_provider.keyspace import KEYSPACE_NAME_PATTERN
from cassandra_provider.role import ROLE_NAME_PATTERN
from cassandra_provider.validation import compiles, matches, validate_attributes

log = logging.getLogger(__name__)

CREATE = 'create'
DELETE = 'delete'
READ = 'read'

TEMPLATES = MappingProxyType({
    CREATE: 'GRANT {privilege} ON {resource} TO {grantee}',
    DELETE: 'REVOKE {privilege} ON {resource} FROM {grantee}',
    READ: 'LIST {privilege} ON {resource} OF {grantee}',
})

PRIVILEGE_ALL = 'all'
PRIVILEGE_CREATE = 'create'
PRIVILEGE_ALTER = 'alter'
PRIVILEGE_DROP = 'drop'
PRIVILEGE_SELECT = 'select'
PRIVILEGE_MODIFY = 'modify'
PRIVILEGE_AUTHORIZE = 'authorize'
PRIVILEGE_DESCRIBE = 'describe'
PRIVILEGE_EXECUTE = 'execute'

RESOURCE_ALL_FUNCTIONS = 'all functions'
RESOURCE_ALL_FUNCTIONS_IN_KEYSPACE = 'all functions in keyspace'
RESOURCE_FUNCTION = 'function'
RESOURCE_ALL_KEYSPACES = 'all keyspaces'
RESOURCE_KEYSPACE = 'keyspace'
RESOURCE_TABLE = 'table'
RESOURCE_ALL_ROLES = 'all roles'
RESOURCE_ROLE = 'role'
RESOURCE_ROLES = 'roles'
RESOURCE_MBEAN = 'mbean'
RESOURCE_MBEANS = 'mbeans'
RESOURCE_ALL_MBEANS = 'all mbeans'

IDENTIFIER_FUNCTION_NAME = 'function_name'
IDENTIFIER_TABLE_NAME = 'table_name'
IDENTIFIER_MBEAN_NAME = 'mbean_name'
IDENTIFIER_MBEAN_PATTERN = 'mbean_pattern'
IDENTIFIER_ROLE_NAME = 'role_name'
IDENTIFIER_KEYSPACE_NAME = 'keyspace_name'

PRIVILEGES = (
    PRIVILEGE_ALL,
    PRIVILEGE_SELECT,
    PRIVILEGE_CREATE,
    PRIVILEGE_ALTER,
    PRIVILEGE_DROP,
    PRIVILEGE_MODIFY,
    PRIVILEGE_AUTHORIZE,
    PRIVILEGE_DESCRIBE,
    PRIVILEGE_EXECUTE,
)

RESOURCE_TYPES = (
    RESOURCE_ALL_FUNCTIONS,
    RESOURCE_ALL_FUNCTIONS_IN_KEYSPACE,
    RESOURCE_FUNCTION,
    RESOURCE_ALL_KEYSPACES,
    RESOURCE_KEYSPACE,
    RESOURCE_TABLE,
    RESOURCE_ALL_ROLES,
    RESOURCE_ROLE,
    RESOURCE_ROLES,
    RESOURCE_MBEAN,
    RESOURCE_MBEANS,
    RESOURCE_ALL_MBEANS,
)

PRIVILEGE_RESOURCE_TYPES = MappingProxyType({
    PRIVILEGE_ALL: (RESOURCE_ALL_FUNCTIONS, RESOURCE_ALL_FUNCTIONS_IN_KEYSPACE, RESOURCE_FUNCTION,
                    RESOURCE_ALL_KEYSPACES, RESOURCE_KEYSPACE, RESOURCE_TABLE, RESOURCE_ALL_ROLES, RESOURCE_ROLE),
    PRIVILEGE_CREATE: (RESOURCE_ALL_KEYSPACES, RESOURCE_KEYSPACE, RESOURCE_ALL_FUNCTIONS,
                       RESOURCE_ALL_FUNCTIONS_IN_KEYSPACE, RESOURCE_ALL_ROLES),
    PRIVILEGE_ALTER: (RESOURCE_ALL_KEYSPACES, RESOURCE_KEYSPACE, RESOURCE_TABLE, RESOURCE_ALL_FUNCTIONS,
                      RESOURCE_ALL_FUNCTIONS_IN_KEYSPACE, RESOURCE_FUNCTION, RESOURCE_ALL_ROLES, RESOURCE_ROLE),
    PRIVILEGE_DROP: (RESOURCE_KEYSPACE, RESOURCE_TABLE, RESOURCE_ALL_FUNCTIONS, RESOURCE_ALL_FUNCTIONS_IN_KEYSPACE,
                     RESOURCE_FUNCTION, RESOURCE_ALL_ROLES, RESOURCE_ROLE),
    PRIVILEGE_SELECT: (RESOURCE_ALL_KEYSPACES, RESOURCE_KEYSPACE, RESOURCE_TABLE, RESOURCE_ALL_MBEANS,
                       RESOURCE_MBEANS, RESOURCE_MBEAN),
    PRIVILEGE_MODIFY: (RESOURCE_ALL_KEYSPACES, RESOURCE_KEYSPACE, RESOURCE_TABLE, RESOURCE_ALL_MBEANS,
                       RESOURCE_MBEANS, RESOURCE_MBEAN),
    PRIVILEGE_AUTHORIZE: (RESOURCE_ALL_KEYSPACES, RESOURCE_KEYSPACE, RESOURCE_TABLE, RESOURCE_FUNCTION,
                          RESOURCE_ALL_FUNCTIONS, RESOURCE_ALL_FUNCTIONS_IN_KEYSPACE, RESOURCE_ALL_ROLES,
                          RESOURCE_ROLES),
    PRIVILEGE_DESCRIBE: (RESOURCE_ALL_ROLES, RESOURCE_ALL_MBEANS),
    PRIVILEGE_EXECUTE: (RESOURCE_ALL_FUNCTIONS, RESOURCE_ALL_FUNCTIONS_IN_KEYSPACE, RESOURCE_FUNCTION),
})

RESOURCES_REQUIRING_KEYSPACE = frozenset([
    RESOURCE_ALL_FUNCTIONS_IN_KEYSPACE,
    RESOURCE_FUNCTION,
    RESOURCE_KEYSPACE,
    RESOURCE_TABLE,
])

RESOURCE_IDENTIFIERS = MappingProxyType({
    RESOURCE_FUNCTION: IDENTIFIER_FUNCTION_NAME,
    RESOURCE_MBEAN: IDENTIFIER_MBEAN_NAME,
    RESOURCE_MBEANS: IDENTIFIER_MBEAN_PATTERN,
    RESOURCE_TABLE: IDENTIFIER_TABLE_NAME,
    RESOURCE_ROLE: IDENTIFIER_ROLE_NAME,
})

IDENTIFIER_PATTERN = r'[^"]{1,256}'
TABLE_NAME_PATTERN = r'[a-zA-Z0-9][a-zA-Z0-9_]{0,255}'

GRANT_ARGUMENT_SPEC = {
    'privilege': {
        'required': True,
        'choices': list(PRIVILEGES),
    },
    'resource_type': {
        'required': True,
        'choices': list(RESOURCE_TYPES),
    },
    'grantee': {
        'required': True,
        'type': 'str',
    },
    IDENTIFIER_KEYSPACE_NAME: {'type': 'str'},
    IDENTIFIER_FUNCTION_NAME: {'type': 'str'},
    IDENTIFIER_TABLE_NAME: {'type': 'str'},
    IDENTIFIER_ROLE_NAME: {'type': 'str'},
    IDENTIFIER_MBEAN_NAME: {'type': 'str'},
    IDENTIFIER_MBEAN_PATTERN: {'type': 'str'},
}

GRANT_MUTUALLY_EXCLUSIVE = [
    [IDENTIFIER_FUNCTION_NAME, IDENTIFIER_TABLE_NAME, IDENTIFIER_ROLE_NAME, IDENTIFIER_MBEAN_NAME,
     IDENTIFIER_MBEAN_PATTERN],
    [IDENTIFIER_KEYSPACE_NAME, IDENTIFIER_ROLE_NAME],
    [IDENTIFIER_KEYSPACE_NAME, IDENTIFIER_MBEAN_NAME],
    [IDENTIFIER_KEYSPACE_NAME, IDENTIFIER_MBEAN_PATTERN],
]

GRANT_CHECKS = {
    'grantee': matches(ROLE_NAME_PATTERN, '{value} is not a valid grantee name'),
    IDENTIFIER_KEYSPACE_NAME: matches(KEYSPACE_NAME_PATTERN, '{value} is not a valid keyspace name'),
    IDENTIFIER_FUNCTION_NAME: matches(IDENTIFIER_PATTERN, '{value} is not a valid function name'),
    IDENTIFIER_TABLE_NAME: matches(TABLE_NAME_PATTERN, '{value} is not a valid table name'),
    IDENTIFIER_ROLE_NAME: matches(ROLE_NAME_PATTERN, '{value} is not a valid role name'),
    IDENTIFIER_MBEAN_NAME: matches(IDENTIFIER_PATTERN, '{value} is not a valid mbean name'),
    IDENTIFIER_MBEAN_PATTERN: compiles('{value} is not a valid pattern'),
}


class Grant(namedtuple('Grant', ['privilege', 'resource_type', 'grantee', 'keyspace', 'identifier'])):
    __slots__ = ()

    @property
    def id(self):
        return fingerprint(repr(tuple(self)))

    def attributes(self):
        attributes = {
            'id': self.id,
            'privilege': self.privilege,
            'resource_type': self.resource_type,
            'grantee': self.grantee,
        }
        if self.keyspace:
            attributes[IDENTIFIER_KEYSPACE_NAME] = self.keyspace
        if self.identifier:
            attributes[RESOURCE_IDENTIFIERS[self.resource_type]] = self.identifier
        return attributes


def validate(privilege, resource_type, grantee, keyspace=None, identifier=None):
    """Check a grant against the privilege/resource type table and build it.

    The keyspace is only kept for resource types qualified by a keyspace, and
    the identifier only for resource types naming a single object.
    """
    permitted = PRIVILEGE_RESOURCE_TYPES.get(privilege)

    if not permitted:
        raise ValidationError('%s not one of %s' % (privilege, ', '.join(PRIVILEGES)))

    if resource_type not in permitted:
        raise ValidationError('%s resource not applicable for privilege %s - valid resource types are %s'
                              % (resource_type, privilege, ', '.join(permitted)))

    if not grantee:
        raise ValidationError('grantee must be set')

    if resource_type in RESOURCES_REQUIRING_KEYSPACE:
        if not keyspace:
            raise ValidationError('keyspace name must be set for resource type %s' % resource_type)
    else:
        keyspace = None

    identifier_key = RESOURCE_IDENTIFIERS.get(resource_type)

    if identifier_key:
        if not identifier:
            raise ValidationError('%s needs to be set when resource type = %s' % (identifier_key, resource_type))
    else:
        identifier = None

    return Grant(privilege, resource_type, grantee, keyspace, identifier)


def parse_grant(params):
    attributes = validate_attributes(GRANT_ARGUMENT_SPEC, params,
                                     mutually_exclusive=GRANT_MUTUALLY_EXCLUSIVE,
                                     checks=GRANT_CHECKS)

    resource_type = attributes['resource_type']
    identifier_key = RESOURCE_IDENTIFIERS.get(resource_type)

    return validate(
        attributes['privilege'],
        resource_type,
        attributes['grantee'],
        attributes.get(IDENTIFIER_KEYSPACE_NAME),
        attributes.get(identifier_key) if identifier_key else None,
    )


def render(action, grant):
    try:
        template = TEMPLATES[action]
    except KeyError:
        raise ValueError('unknown grant action %r' % action)

    resource = [grant.resource_type.upper()]
    target = '.'.join(quote_identifier(name) for name in (grant.keyspace, grant.identifier) if name)
    if target:
        resource.append(target)

    return template.format(
        privilege=grant.privilege.upper(),
        resource=' '.join(resource),
        grantee=quote_identifier(grant.grantee),
    )


def grant_exists(session, grant):
    query = render(READ, grant)
    log.debug('Executing query %s', query)
    return first_row(session.execute(query)) is not None


def grant_create(session, grant):
    query = render(CREATE, grant)
    log.debug('Executing query %s', query)
    session.execute(query)
    return grant.id


def grant_read(session, grant):
    if not grant_exists(session, grant):
        raise NotFoundError('Grant does not exist')
    return grant.attributes()


def grant_update(session, grant):
    raise ConfigurationError('Updating of grants is not supported')


def grant_delete(session, grant):
    query = render(DELETE, grant)
    log.debug('Executing query %s', query)
    session.execute(query)


def grant_changed(current, grant):
    # every attribute is part of the grant identity
    return False
