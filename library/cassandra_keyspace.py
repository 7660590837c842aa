#!/usr/bin/python
# -*- coding: utf-8 -*-


DOCUMENTATION = '''
---
module: cassandra_keyspace

short_description: Manage Cassandra Keyspaces
description:
    - Add/alter/remove Cassandra Keyspaces
    - requires `pip install cassandra-provider` (pulls in cassandra-driver)
    - Related Docs: https://docs.datastax.com/en/cql/3.3/cql/cql_reference/cqlCreateKeyspace.html
    - Related Docs: https://docs.datastax.com/en/cql/3.3/cql/cql_reference/cqlAlterKeyspace.html
author: "Sam Adams"
options:
  name:
    description:
      - name of the keyspace, 1 to 48 alphanumeric or underscore characters
      - the `system` keyspace cannot be managed
    required: true
    alias: keyspace
  replication_strategy:
    description:
      - the keyspace's replication strategy class
    required: true
    choices: [ "SimpleStrategy", "NetworkTopologyStrategy" ]
    alias: strategy
  strategy_options:
    description:
      - options for the replication strategy, e.g. `replication_factor` or one entry per datacenter
      - must not be empty
    required: true
    alias: topology
  durable_writes:
    description:
      - Enable or disable durable writes - disabling is not recommended
    default: true
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
      - Whether the keyspace should exist.  When C(absent), drops
        the keyspace.
    required: false
    default: present
    choices: [ "present", "absent" ]

notes:
   - "requires cassandra-provider to be installed"

'''

EXAMPLES = '''
# Create or alter a keyspace replicated across two datacenters
- cassandra_keyspace:
    name: foo
    replication_strategy: NetworkTopologyStrategy
    strategy_options:
      dc1: 3
      dc2: 2
    login_hosts: [localhost]
    login_user: cassandra
    login_password: cassandra

# Drop a keyspace
- cassandra_keyspace: name=foo replication_strategy=SimpleStrategy strategy_options='{"replication_factor": "1"}' state=absent login_hosts=localhost login_password=cassandra login_user=cassandra
'''

from cassandra.cluster import NoHostAvailable

from cassandra_provider.connection import CONNECTION_ARGUMENT_SPEC
from cassandra_provider.keyspace import KEYSPACE_ARGUMENT_SPEC
from cassandra_provider.provider import apply


def main():
    argument_spec = dict(CONNECTION_ARGUMENT_SPEC)
    argument_spec.update(KEYSPACE_ARGUMENT_SPEC)
    argument_spec['state'] = {
        'default': 'present',
        'choices': ['absent', 'present']
    }
    module = AnsibleModule(
        argument_spec=argument_spec,
        supports_check_mode=True
    )

    try:
        result = apply('cassandra_keyspace', module.params, module.params['state'], module.check_mode)
    except NoHostAvailable as e:
        module.fail_json(
            msg="unable to connect to cassandra, check login_user and login_password are correct. Exception message: %s"
                % e)
    except Exception as e:
        module.fail_json(msg=str(e))

    module.exit_json(name=module.params['name'], **result)


from ansible.module_utils.basic import *  # NOQA

if __name__ == '__main__':
    main()
