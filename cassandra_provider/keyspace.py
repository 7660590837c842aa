# -*- coding: utf-8 -*-
import logging
import re

from cassandra.encoder import cql_quote

from cassandra_provider.common import fingerprint, first_row, quote_identifier
from cassandra_provider.errors import ConfigurationError, NotFoundError
from cassandra_provider.validation import validate_attributes

log = logging.getLogger(__name__)

KEYSPACE_NAME_PATTERN = r'[a-zA-Z0-9_]{1,48}'
STRATEGIES = ('SimpleStrategy', 'NetworkTopologyStrategy')
STRATEGY_CLASS_PREFIX = 'org.apache.cassandra.locator.'
STRATEGY_OPTIONS_DOCS = 'https://docs.datastax.com/en/cql/3.3/cql/cql_reference/cqlCreateKeyspace.html'

GET_KEYSPACE = ('SELECT keyspace_name, durable_writes, replication FROM system_schema.keyspaces '
                'WHERE keyspace_name = %s')
KEYSPACE_FORMAT = '{action} KEYSPACE {name} WITH REPLICATION = {replication} AND DURABLE_WRITES = {durable_writes}'
DROP_KEYSPACE_FORMAT = 'DROP KEYSPACE {name}'

KEYSPACE_ARGUMENT_SPEC = {
    'name': {
        'required': True,
        'type': 'str',
        'aliases': ['keyspace'],
    },
    'replication_strategy': {
        'required': True,
        'choices': list(STRATEGIES),
        'aliases': ['strategy'],
    },
    'strategy_options': {
        'required': True,
        'type': 'dict',
        'aliases': ['topology'],
    },
    'durable_writes': {
        'default': True,
        'type': 'bool',
    },
}


def _check_name(name):
    if not re.fullmatch(KEYSPACE_NAME_PATTERN, name):
        return '%s: invalid keyspace name - must match ^%s$' % (name, KEYSPACE_NAME_PATTERN)
    if name == 'system':
        return 'cannot manage system keyspace, it is internal to Cassandra'


def _check_strategy_options(options):
    if not options:
        return 'Must specify strategy options - see %s' % STRATEGY_OPTIONS_DOCS


KEYSPACE_CHECKS = {
    'name': _check_name,
    'strategy_options': _check_strategy_options,
}


def parse_keyspace(params):
    keyspace = validate_attributes(KEYSPACE_ARGUMENT_SPEC, params, checks=KEYSPACE_CHECKS)
    keyspace['strategy_options'] = dict((str(key), str(value))
                                        for key, value in keyspace['strategy_options'].items())
    return keyspace


def strategy_options_hash(options):
    pairs = sorted('"%s"="%s"' % (key, value) for key, value in options.items())
    return fingerprint(', '.join(pairs))


def keyspace_query(create, keyspace):
    options = keyspace['strategy_options']
    message = _check_strategy_options(options)
    if message:
        raise ConfigurationError(message)

    replication = ['%s : %s' % (cql_quote('class'), cql_quote(keyspace['replication_strategy']))]
    for key in sorted(options):
        replication.append('%s : %s' % (cql_quote(key), cql_quote(str(options[key]))))

    return KEYSPACE_FORMAT.format(
        action='CREATE' if create else 'ALTER',
        name=quote_identifier(keyspace['name']),
        replication='{ %s }' % ', '.join(replication),
        durable_writes='true' if keyspace['durable_writes'] else 'false',
    )


def get_keyspace(session, name):
    return first_row(session.execute(GET_KEYSPACE, [name]))


def keyspace_exists(session, keyspace):
    return bool(get_keyspace(session, keyspace['name']))


def keyspace_create(session, keyspace):
    query = keyspace_query(True, keyspace)
    log.debug('Executing query %s', query)
    session.execute(query)
    return keyspace['name']


def keyspace_update(session, keyspace):
    query = keyspace_query(False, keyspace)
    log.debug('Executing query %s', query)
    session.execute(query)


def keyspace_read(session, keyspace):
    existing = get_keyspace(session, keyspace['name'])
    if not existing:
        raise NotFoundError('Keyspace %s does not exist' % keyspace['name'])

    replication = dict(existing['replication'])
    strategy_class = replication.pop('class', '')
    if strategy_class.startswith(STRATEGY_CLASS_PREFIX):
        strategy_class = strategy_class[len(STRATEGY_CLASS_PREFIX):]
    options = dict((key, str(value)) for key, value in replication.items())

    return {
        'id': existing['keyspace_name'],
        'name': existing['keyspace_name'],
        'replication_strategy': strategy_class,
        'strategy_options': options,
        'strategy_options_hash': strategy_options_hash(options),
        'durable_writes': existing['durable_writes'],
    }


def keyspace_delete(session, keyspace):
    query = DROP_KEYSPACE_FORMAT.format(name=quote_identifier(keyspace['name']))
    log.debug('Executing query %s', query)
    session.execute(query)


def keyspace_changed(current, keyspace):
    return (current['replication_strategy'] != keyspace['replication_strategy']
            or current['durable_writes'] != keyspace['durable_writes']
            or current['strategy_options_hash'] != strategy_options_hash(keyspace['strategy_options']))
