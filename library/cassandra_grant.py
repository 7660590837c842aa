#!/usr/bin/python
# -*- coding: utf-8 -*-


DOCUMENTATION = '''
---
module: cassandra_grant

short_description: Grant Cassandra permissions
description:
    - Grant/revoke a permission on a Cassandra resource to a role
    - A grant cannot be changed in place, remove it and add the new one instead
    - requires `pip install cassandra-provider` (pulls in cassandra-driver)
    - Related Docs: https://docs.datastax.com/en/cql/3.3/cql/cql_reference/cqlGrant.html
author: "Sam Adams"
options:
  privilege:
    description:
      - what permission to grant
    required: true
    choices: ["all", "select", "create", "alter", "drop", "modify", "authorize", "describe", "execute"]
  resource_type:
    description:
      - the kind of resource the permission applies to
      - each privilege only applies to some resource types, e.g. `describe` only to `all roles` and `all mbeans`
    required: true
    choices: ["all functions", "all functions in keyspace", "function", "all keyspaces", "keyspace", "table",
              "all roles", "role", "roles", "mbean", "mbeans", "all mbeans"]
  grantee:
    description:
      - the role receiving the permission
    required: true
  keyspace_name:
    description:
      - required for resource types `all functions in keyspace`, `function`, `keyspace` and `table`
      - conflicts with `role_name`, `mbean_name` and `mbean_pattern`
    required: false
  function_name:
    description:
      - required for resource type `function`
    required: false
  table_name:
    description:
      - required for resource type `table`
    required: false
  role_name:
    description:
      - required for resource type `role`
    required: false
  mbean_name:
    description:
      - required for resource type `mbean`
    required: false
  mbean_pattern:
    description:
      - required for resource type `mbeans`, must be a valid regular expression
    required: false
  login_hosts:
    description:
      - List of hosts to login to Cassandra with
      - falls back to the CASSANDRA_HOSTS environment variable
    required: true
  login_user:
    description:
      - The superuser to login to Cassandra with
    required: false
  login_password:
    description:
      - The superuser password to login to Cassandra with
    required: false
  login_port:
    description:
      - Port to connect to cassandra on
    default: 9042
  use_ssl:
    description:
      - Connect to the cluster over TLS, see also `root_ca` and `min_tls_version`
    default: false
  state:
    description:
      - Whether the permission should be granted. When C(absent), revokes it.
    required: false
    default: present
    choices: [ "present", "absent" ]

notes:
   - "requires cassandra-provider to be installed"

'''

EXAMPLES = '''
# Grant select for all keyspaces
- cassandra_grant: privilege=select resource_type='all keyspaces' grantee=read_only login_hosts=localhost login_password=cassandra login_user=cassandra

# Revoke modify permission on a table
- cassandra_grant: state=absent privilege=modify resource_type=table keyspace_name=foo table_name=bar grantee=no_modify_foo login_hosts=localhost login_password=cassandra login_user=cassandra

# Allow a role to execute one function
- cassandra_grant: privilege=execute resource_type=function keyspace_name=foo function_name=my_avg grantee=reporting login_hosts=localhost login_password=cassandra login_user=cassandra
'''

from cassandra.cluster import NoHostAvailable

from cassandra_provider.connection import CONNECTION_ARGUMENT_SPEC
from cassandra_provider.grant import GRANT_ARGUMENT_SPEC, GRANT_MUTUALLY_EXCLUSIVE
from cassandra_provider.provider import apply


def main():
    argument_spec = dict(CONNECTION_ARGUMENT_SPEC)
    argument_spec.update(GRANT_ARGUMENT_SPEC)
    argument_spec['state'] = {
        'default': 'present',
        'choices': ['absent', 'present']
    }
    module = AnsibleModule(
        argument_spec=argument_spec,
        mutually_exclusive=GRANT_MUTUALLY_EXCLUSIVE,
        supports_check_mode=True
    )

    try:
        result = apply('cassandra_grant', module.params, module.params['state'], module.check_mode)
    except NoHostAvailable as e:
        module.fail_json(
            msg="unable to connect to cassandra, check login_user and login_password are correct. Exception message: %s"
                % e)
    except Exception as e:
        module.fail_json(msg=str(e))

    module.exit_json(grantee=module.params['grantee'], **result)


from ansible.module_utils.basic import *  # NOQA

if __name__ == '__main__':
    main()
