"""Tests for the present/absent reconcile loop."""
from unittest.mock import MagicMock

import pytest

from cassandra_provider import provider, role
from cassandra_provider.errors import ValidationError
from cassandra_provider.grant import Grant

GRANT_PARAMS = {
    'login_hosts': ['localhost'],
    'privilege': 'select',
    'resource_type': 'table',
    'grantee': 'reader',
    'keyspace_name': 'ks',
    'table_name': 'events',
}

GRANT_ID = Grant('select', 'table', 'reader', 'ks', 'events').id

ROLE_PARAMS = {
    'login_hosts': ['localhost'],
    'name': 'app',
    'login': False,
}

STORED_ROLE = {'role': 'app', 'can_login': True, 'is_superuser': False}


@pytest.fixture
def session(session, monkeypatch):
    config = MagicMock()
    config.session.return_value.__enter__.return_value = session
    monkeypatch.setattr(provider, 'configure', lambda params: config)
    return session


def executed(session):
    return [call[0][0] for call in session.execute.call_args_list]


def test_registry_covers_every_resource():
    assert sorted(provider.RESOURCES) == ['cassandra_grant', 'cassandra_keyspace', 'cassandra_role']


def test_apply_creates_missing_grant(session):
    session.execute.side_effect = [[], None, [{'role': 'reader'}]]

    result = provider.apply('cassandra_grant', GRANT_PARAMS)

    assert result['changed'] is True
    assert result['id'] == GRANT_ID
    assert result['attributes']['table_name'] == 'events'
    assert executed(session) == [
        'LIST SELECT ON TABLE "ks"."events" OF "reader"',
        'GRANT SELECT ON TABLE "ks"."events" TO "reader"',
        'LIST SELECT ON TABLE "ks"."events" OF "reader"',
    ]


def test_apply_leaves_existing_grant_alone(session):
    session.execute.return_value = [{'role': 'reader'}]

    result = provider.apply('cassandra_grant', GRANT_PARAMS)

    assert result['changed'] is False
    assert result['id'] == GRANT_ID
    assert not any(query.startswith('GRANT') for query in executed(session))


def test_apply_check_mode_does_not_grant(session):
    result = provider.apply('cassandra_grant', GRANT_PARAMS, check_mode=True)

    assert result['changed'] is True
    assert executed(session) == ['LIST SELECT ON TABLE "ks"."events" OF "reader"']


def test_apply_revokes_existing_grant(session):
    session.execute.side_effect = [[{'role': 'reader'}], None]

    result = provider.apply('cassandra_grant', GRANT_PARAMS, state=provider.STATE_ABSENT)

    assert result['changed'] is True
    assert executed(session)[-1] == 'REVOKE SELECT ON TABLE "ks"."events" FROM "reader"'


def test_apply_absent_grant_is_unchanged(session):
    result = provider.apply('cassandra_grant', GRANT_PARAMS, state=provider.STATE_ABSENT)

    assert result['changed'] is False
    assert len(executed(session)) == 1


def test_apply_check_mode_does_not_revoke(session):
    session.execute.return_value = [{'role': 'reader'}]

    result = provider.apply('cassandra_grant', GRANT_PARAMS, state=provider.STATE_ABSENT, check_mode=True)

    assert result['changed'] is True
    assert len(executed(session)) == 1


def test_apply_validates_before_connecting(session):
    params = dict(GRANT_PARAMS, privilege='describe')

    with pytest.raises(ValidationError):
        provider.apply('cassandra_grant', params)

    session.execute.assert_not_called()


def test_apply_updates_changed_role(session):
    updated_role = dict(STORED_ROLE, can_login=False)
    session.execute.side_effect = [[STORED_ROLE], [STORED_ROLE], None, [updated_role]]

    result = provider.apply('cassandra_role', ROLE_PARAMS)

    assert result['changed'] is True
    assert result['id'] == 'app'
    assert result['attributes']['login'] is False
    assert session.execute.call_args_list[2][0] == (role.ALTER_ROLE_NO_PASS, ('app', False, False))


def test_apply_unchanged_role(session):
    session.execute.return_value = [dict(STORED_ROLE, can_login=False)]

    result = provider.apply('cassandra_role', ROLE_PARAMS)

    assert result['changed'] is False
    assert executed(session) == [role.GET_ROLE, role.GET_ROLE]


def test_apply_check_mode_does_not_update_role(session):
    session.execute.return_value = [STORED_ROLE]

    result = provider.apply('cassandra_role', ROLE_PARAMS, check_mode=True)

    assert result['changed'] is True
    assert role.ALTER_ROLE_NO_PASS not in executed(session)


def test_apply_drops_keyspace(session):
    session.execute.side_effect = [[{'keyspace_name': 'foo'}], None]

    result = provider.apply('cassandra_keyspace', {
        'login_hosts': ['localhost'],
        'name': 'foo',
        'replication_strategy': 'SimpleStrategy',
        'strategy_options': {'replication_factor': '1'},
    }, state=provider.STATE_ABSENT)

    assert result == {'changed': True, 'id': 'foo'}
    assert executed(session)[-1] == 'DROP KEYSPACE "foo"'


def test_apply_role_result_has_no_password_hash(session):
    session.execute.return_value = [dict(STORED_ROLE, can_login=False, salted_hash='$2a$10$secret')]

    result = provider.apply('cassandra_role', ROLE_PARAMS)

    assert result['attributes'] == {'id': 'app', 'name': 'app', 'super_user': False, 'login': False}
    assert '$2a$10$secret' not in repr(result)
