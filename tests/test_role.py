import pytest

from cassandra_provider import role
from cassandra_provider.errors import NotFoundError, ValidationError

PASSWORD = 'p' * 40

STORED_ROLE = {
    'role': 'app',
    'can_login': True,
    'is_superuser': False,
}


def test_parse_role_defaults():
    result = role.parse_role({'name': 'app'})

    assert result['name'] == 'app'
    assert result['login'] is True
    assert result['super_user'] is False
    assert result.get('password') is None


def test_parse_role_aliases():
    result = role.parse_role({'role': 'app', 'superuser': True, 'enable_login': False})

    assert result['name'] == 'app'
    assert result['super_user'] is True
    assert result['login'] is False


@pytest.mark.parametrize('password', ['short', "'" * 40, 'p' * 513])
def test_parse_role_rejects_invalid_password(password):
    with pytest.raises(ValidationError) as excinfo:
        role.parse_role({'name': 'app', 'password': password})

    assert 'password must contain between 40 and 512 chars' in str(excinfo.value)


@pytest.mark.parametrize('name', ["o'brien", 'x' * 257])
def test_parse_role_rejects_invalid_name(name):
    with pytest.raises(ValidationError):
        role.parse_role({'name': name})


def test_parse_role_requires_name():
    with pytest.raises(ValidationError):
        role.parse_role({'password': PASSWORD})


def test_role_create_with_password(session):
    desired = role.parse_role({'name': 'app', 'password': PASSWORD})

    assert role.role_create(session, desired) == 'app'
    session.execute.assert_called_once_with(role.CREATE_ROLE_WITH_PASS, ('app', PASSWORD, True, False))


def test_role_create_without_password(session):
    desired = role.parse_role({'name': 'app', 'super_user': True})

    role.role_create(session, desired)

    session.execute.assert_called_once_with(role.CREATE_ROLE_NO_PASS, ('app', True, True))


def test_role_update_alters_role(session):
    desired = role.parse_role({'name': 'app', 'password': PASSWORD, 'login': False})

    role.role_update(session, desired)

    session.execute.assert_called_once_with(role.ALTER_ROLE_WITH_PASS, ('app', PASSWORD, False, False))


def test_role_delete(session):
    role.role_delete(session, {'name': 'app'})

    session.execute.assert_called_once_with(role.DROP_ROLE, ['app'])


def test_role_exists(session):
    session.execute.return_value = [STORED_ROLE]

    assert role.role_exists(session, {'name': 'app'}) is True
    session.execute.assert_called_once_with(role.GET_ROLE, ['app'])


def test_role_does_not_exist(session):
    assert role.role_exists(session, {'name': 'app'}) is False


def test_role_read(session):
    session.execute.return_value = [STORED_ROLE]

    result = role.role_read(session, {'name': 'app'})

    assert result == {
        'id': 'app',
        'name': 'app',
        'super_user': False,
        'login': True,
        }


def test_role_read_leaves_out_password_hash(session):
    session.execute.return_value = [dict(STORED_ROLE, salted_hash='$2a$10$abcdef')]

    result = role.role_read(session, {'name': 'app'})

    assert 'salted_hash' not in result
    assert 'salted_hash' not in role.GET_ROLE


def test_role_read_missing_role(session):
    with pytest.raises(NotFoundError):
        role.role_read(session, {'name': 'app'})


def test_role_changed():
    current = {'login': True, 'super_user': False}

    assert role.role_changed(current, {'login': True, 'super_user': False, 'password': None}) is False
    assert role.role_changed(current, {'login': False, 'super_user': False, 'password': None}) is True
    assert role.role_changed(current, {'login': True, 'super_user': True, 'password': None}) is True
    assert role.role_changed(current, {'login': True, 'super_user': False, 'password': PASSWORD}) is True
