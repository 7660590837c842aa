# -*- coding: utf-8 -*-
import logging
import ssl
import time
from contextlib import contextmanager
from types import MappingProxyType

from ansible.module_utils.basic import env_fallback
from cassandra import ConsistencyLevel
from cassandra.auth import PlainTextAuthProvider
from cassandra.cluster import EXEC_PROFILE_DEFAULT, Cluster, ExecutionProfile
from cassandra.query import dict_factory

from cassandra_provider.validation import validate_attributes

log = logging.getLogger(__name__)

SYSTEM_KEYSPACE = 'system'

TLS_VERSIONS = MappingProxyType({
    'SSL3.0': ssl.TLSVersion.SSLv3,
    'TLS1.0': ssl.TLSVersion.TLSv1,
    'TLS1.1': ssl.TLSVersion.TLSv1_1,
    'TLS1.2': ssl.TLSVersion.TLSv1_2,
})

CONNECTION_ARGUMENT_SPEC = {
    'login_hosts': {
        'required': True,
        'type': 'list',
        'elements': 'str',
        'aliases': ['hosts'],
        'fallback': (env_fallback, ['CASSANDRA_HOSTS']),
    },
    'login_user': {
        'type': 'str',
        'aliases': ['username'],
        'fallback': (env_fallback, ['CASSANDRA_USERNAME']),
    },
    'login_password': {
        'type': 'str',
        'no_log': True,
        'fallback': (env_fallback, ['CASSANDRA_PASSWORD']),
    },
    'login_port': {
        'default': 9042,
        'type': 'int',
        'aliases': ['port'],
        'fallback': (env_fallback, ['CASSANDRA_PORT']),
    },
    'cql_version': {
        'default': '3.4.4',
        'type': 'str',
        'fallback': (env_fallback, ['CASSANDRA_CQL_VERSION']),
    },
    'protocol_version': {
        'type': 'int',
        'fallback': (env_fallback, ['CASSANDRA_PROTOCOL_VERSION']),
    },
    'connection_timeout': {
        'default': 1000,
        'type': 'int',
        'fallback': (env_fallback, ['CASSANDRA_CONNECTION_TIMEOUT']),
    },
    'use_ssl': {
        'default': False,
        'type': 'bool',
        'fallback': (env_fallback, ['CASSANDRA_USE_SSL']),
    },
    'root_ca': {
        'type': 'str',
        'fallback': (env_fallback, ['CASSANDRA_ROOT_CA']),
    },
    'min_tls_version': {
        'default': 'TLS1.2',
        'choices': list(TLS_VERSIONS),
        'fallback': (env_fallback, ['CASSANDRA_MIN_TLS_VERSION']),
    },
}


def _check_hosts(hosts):
    if not hosts:
        return 'login_hosts: at least one host is required'


def _check_port(port):
    if port <= 0 or port >= 65535:
        return '%d: invalid value - must be between 1 and 65534' % port


def _check_connection_timeout(timeout):
    if timeout <= 0:
        return '%d: invalid connection timeout - must be a positive number of milliseconds' % timeout


def _check_root_ca(root_ca):
    if not root_ca:
        return
    try:
        ssl.create_default_context(cadata=root_ca)
    except (ssl.SSLError, ValueError):
        return 'root_ca: invalid PEM'


CONNECTION_CHECKS = {
    'login_hosts': _check_hosts,
    'login_port': _check_port,
    'connection_timeout': _check_connection_timeout,
    'root_ca': _check_root_ca,
}


class ProviderConfig(object):
    """Connection settings shared by every resource of one provider."""

    def __init__(self, hosts, port=9042, username=None, password=None, cql_version='3.4.4',
                 protocol_version=None, connection_timeout=1000, use_ssl=False, root_ca=None,
                 min_tls_version='TLS1.2'):
        self.hosts = list(hosts)
        self.port = port
        self.username = username
        self.password = password
        self.cql_version = cql_version
        self.protocol_version = protocol_version
        self.connection_timeout = connection_timeout
        self.use_ssl = use_ssl
        self.root_ca = root_ca
        self.min_tls_version = min_tls_version

    def ssl_context(self):
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        context.check_hostname = False
        context.minimum_version = TLS_VERSIONS[self.min_tls_version]
        if self.root_ca:
            context.load_verify_locations(cadata=self.root_ca)
        else:
            context.load_default_certs()
        return context

    def cluster(self):
        profile = ExecutionProfile(consistency_level=ConsistencyLevel.ALL, row_factory=dict_factory)
        kwargs = {
            'contact_points': self.hosts,
            'port': self.port,
            'connect_timeout': self.connection_timeout / 1000.0,
            'cql_version': self.cql_version,
            'execution_profiles': {EXEC_PROFILE_DEFAULT: profile},
        }
        if self.username:
            kwargs['auth_provider'] = PlainTextAuthProvider(username=self.username, password=self.password)
        if self.protocol_version:
            kwargs['protocol_version'] = self.protocol_version
        if self.use_ssl:
            kwargs['ssl_context'] = self.ssl_context()
        return Cluster(**kwargs)

    @contextmanager
    def session(self):
        """Open a session for a single operation and shut the cluster down afterwards."""
        cluster = self.cluster()
        try:
            start = time.time()
            session = cluster.connect(SYSTEM_KEYSPACE)
            log.debug('Getting a session took %.3fs', time.time() - start)
            yield session
        finally:
            cluster.shutdown()


def configure(params):
    config = validate_attributes(CONNECTION_ARGUMENT_SPEC, params, checks=CONNECTION_CHECKS)

    return ProviderConfig(
        hosts=config['login_hosts'],
        port=config['login_port'],
        username=config.get('login_user'),
        password=config.get('login_password'),
        cql_version=config['cql_version'],
        protocol_version=config.get('protocol_version'),
        connection_timeout=config['connection_timeout'],
        use_ssl=config['use_ssl'],
        root_ca=config.get('root_ca'),
        min_tls_version=config['min_tls_version'],
    )
