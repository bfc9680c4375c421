import pytest
from werkzeug.security import check_password_hash

from perfumery.errors import DuplicateUsernameError, InvalidCredentialsError, ValidationError
from perfumery.models import User, AuthSession, ROLE_USER, ROLE_ADMIN
from perfumery.services import auth
from perfumery.services.sessions import session_store


def test_register_then_authenticate_returns_same_id(app_context):
    user = auth.register('alice', 'pw123', full_name='Alice A')

    principal = auth.authenticate('alice', 'pw123')

    assert principal.id == user.id
    assert principal.username == 'alice'
    assert principal.role == ROLE_USER
    assert principal.full_name == 'Alice A'
    assert principal.photo is None


def test_password_is_stored_as_salted_hash(app_context):
    first = auth.register('alice', 'pw123')
    second = auth.register('bob', 'pw123')

    assert first.password_hash != 'pw123'
    assert first.password_hash.startswith('pbkdf2:sha256')
    # Same password, different salt
    assert first.password_hash != second.password_hash
    assert check_password_hash(first.password_hash, 'pw123')


def test_duplicate_username_creates_no_row(app_context):
    auth.register('alice', 'pw123')

    with pytest.raises(DuplicateUsernameError):
        auth.register('alice', 'other')

    assert User.query.filter_by(username='alice').count() == 1


def test_register_strips_username_and_blank_full_name(app_context):
    user = auth.register('  carol  ', 'pw', full_name='   ')
    assert user.username == 'carol'
    assert user.full_name is None


@pytest.mark.parametrize('username,password', [('', 'pw'), ('   ', 'pw'), ('dave', ''), (None, 'pw')])
def test_register_requires_username_and_password(app_context, username, password):
    with pytest.raises(ValidationError):
        auth.register(username, password)
    assert User.query.count() == 0


def test_register_rejects_unknown_role(app_context):
    with pytest.raises(ValidationError):
        auth.register('eve', 'pw', role='superuser')


def test_register_accepts_admin_role(app_context):
    assert auth.register('root', 'pw', role=ROLE_ADMIN).is_admin


def test_wrong_password_is_rejected(app_context):
    auth.register('alice', 'pw123')
    with pytest.raises(InvalidCredentialsError):
        auth.authenticate('alice', 'wrong')


def test_unknown_user_is_rejected(app_context):
    with pytest.raises(InvalidCredentialsError):
        auth.authenticate('nobody', 'pw123')


def test_blank_credentials_are_rejected(app_context):
    with pytest.raises(InvalidCredentialsError):
        auth.authenticate('', '')


def test_failed_login_is_logged(app_context, caplog):
    auth.register('alice', 'pw123')
    with caplog.at_level('WARNING', logger='perfumery.services.auth'):
        with pytest.raises(InvalidCredentialsError):
            auth.authenticate('alice', 'nope')
    assert 'Failed login' in caplog.text


def test_open_session_and_logout(app_context):
    auth.register('alice', 'pw123')
    principal = auth.open_session(auth.authenticate('alice', 'pw123'))

    assert principal.token
    assert principal.get_id() == principal.token
    assert session_store.load(principal.token).username == 'alice'

    auth.logout(principal)

    assert session_store.load(principal.token) is None
    assert AuthSession.query.count() == 0
