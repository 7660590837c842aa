#!/usr/bin/python
# -*- coding: utf-8 -*-


DOCUMENTATION = '''
---
module: cassandra_role

short_description: Manage Cassandra Roles
description:
    - Add/remove Cassandra Roles
    - requires `pip install cassandra-provider` (pulls in cassandra-driver)
    - Related Docs: https://datastax.github.io/python-driver/api/cassandra/query.html
    - Related Docs: https://docs.datastax.com/en/cql/3.3/cql/cql_reference/create_role.html
author: "Sam Adams"
options:
  name:
    description:
      - name of the role to add or remove, between 1 and 256 characters without single quotes
    required: true
    alias: role
  password:
    description:
      - Set the role's password, between 40 and 512 characters without single quotes
      - when set the role is always reported as changed, the stored hash cannot be compared
    required: false
  super_user:
    description:
      - Allow the role to create and manage other roles
    required: false
    default: False
    alias: superuser
  login:
    description:
      - Enables the role to login
    required: false
    default: True
    alias: enable_login
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
  state:
    description:
      - Whether the role should exist.  When C(absent), removes
        the role.
    required: false
    default: present
    choices: [ "present", "absent" ]

notes:
   - "requires cassandra-provider to be installed"

'''

EXAMPLES = '''
# Create Role
- cassandra_role: name='foo' password='{{ foo_password }}' state=present super_user=False login_hosts=localhost login_password=cassandra login_user=cassandra

# Remove Role
- cassandra_role: name='foo' state=absent login_hosts=localhost login_password=cassandra login_user=cassandra
'''

from cassandra.cluster import NoHostAvailable

from cassandra_provider.connection import CONNECTION_ARGUMENT_SPEC
from cassandra_provider.provider import apply
from cassandra_provider.role import ROLE_ARGUMENT_SPEC


def main():
    argument_spec = dict(CONNECTION_ARGUMENT_SPEC)
    argument_spec.update(ROLE_ARGUMENT_SPEC)
    argument_spec['state'] = {
        'default': 'present',
        'choices': ['absent', 'present']
    }
    module = AnsibleModule(
        argument_spec=argument_spec,
        supports_check_mode=True
    )

    try:
        result = apply('cassandra_role', module.params, module.params['state'], module.check_mode)
    except NoHostAvailable as e:
        module.fail_json(
            msg="unable to connect to cassandra, check login_user and login_password are correct. Exception message: %s"
                % e)
    except Exception as e:
        module.fail_json(msg=str(e))

    module.exit_json(role=module.params['name'], **result)


from ansible.module_utils.basic import *  # NOQA

if __name__ == '__main__':
    main()
