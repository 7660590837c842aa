# -*- coding: utf-8 -*-
import logging

from cassandra_provider.common import first_row
from cassandra_provider.errors import NotFoundError
from cassandra_provider.validation import matches, validate_attributes

log = logging.getLogger(__name__)

ROLE_NAME_PATTERN = r"[^']{1,256}"
PASSWORD_PATTERN = r"[^']{40,512}"

GET_ROLE = 'SELECT role, can_login, is_superuser FROM system_auth.roles WHERE role = %s'
DROP_ROLE = 'DROP ROLE %s'
CREATE_ROLE_WITH_PASS = 'CREATE ROLE %s WITH PASSWORD = %s AND LOGIN = %s AND SUPERUSER = %s'
ALTER_ROLE_WITH_PASS = 'ALTER ROLE %s WITH PASSWORD = %s AND LOGIN = %s AND SUPERUSER = %s'
CREATE_ROLE_NO_PASS = 'CREATE ROLE %s WITH LOGIN = %s AND SUPERUSER = %s'
ALTER_ROLE_NO_PASS = 'ALTER ROLE %s WITH LOGIN = %s AND SUPERUSER = %s'

ROLE_ARGUMENT_SPEC = {
    'name': {
        'required': True,
        'type': 'str',
        'aliases': ['role'],
    },
    'password': {
        'type': 'str',
        'no_log': True,
    },
    'super_user': {
        'default': False,
        'type': 'bool',
        'aliases': ['superuser'],
    },
    'login': {
        'default': True,
        'type': 'bool',
        'aliases': ['enable_login'],
    },
}

ROLE_CHECKS = {
    'name': matches(ROLE_NAME_PATTERN,
                    'name must contain between 1 and 256 chars and must not contain single quote character'),
    'password': matches(PASSWORD_PATTERN,
                        'password must contain between 40 and 512 chars and must not contain single quote character'),
}


def parse_role(params):
    return validate_attributes(ROLE_ARGUMENT_SPEC, params, checks=ROLE_CHECKS)


def get_role(session, name):
    return first_row(session.execute(GET_ROLE, [name]))


def role_exists(session, role):
    existing_role = get_role(session, role['name'])
    return bool(existing_role) and existing_role['role'] == role['name']


def do_save(session, create, role):
    if role.get('password'):
        params = (role['name'], role['password'], role['login'], role['super_user'])
        query = CREATE_ROLE_WITH_PASS if create else ALTER_ROLE_WITH_PASS
    else:
        params = (role['name'], role['login'], role['super_user'])
        query = CREATE_ROLE_NO_PASS if create else ALTER_ROLE_NO_PASS

    log.info('%s role %s (login=%s, superuser=%s)', 'Creating' if create else 'Altering',
             role['name'], role['login'], role['super_user'])
    session.execute(query, params)


def role_create(session, role):
    do_save(session, True, role)
    return role['name']


def role_update(session, role):
    do_save(session, False, role)


def role_read(session, role):
    existing_role = get_role(session, role['name'])
    if not existing_role:
        raise NotFoundError('Role %s does not exist' % role['name'])

    return {
        'id': existing_role['role'],
        'name': existing_role['role'],
        'super_user': existing_role['is_superuser'],
        'login': existing_role['can_login'],
    }


def role_delete(session, role):
    log.info('Dropping role %s', role['name'])
    session.execute(DROP_ROLE, [role['name']])


def role_changed(current, role):
    if role.get('password'):
        # even setting the same password updates `salted_hash`, so there is no way to tell
        return True
    return current['login'] != role['login'] or current['super_user'] != role['super_user']
