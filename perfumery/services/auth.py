"""
Auth Service

Registration, credential checks and session lifecycle. Passwords are hashed
with Werkzeug's salted PBKDF2; verification goes through
check_password_hash, which compares digests in constant time.
"""

import logging
from functools import lru_cache

from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash

from perfumery.errors import ValidationError, DuplicateUsernameError, InvalidCredentialsError
from perfumery.extensions import db
from perfumery.models import User, ROLES, ROLE_USER
from perfumery.services.helpers import require_text, optional_text, parse_choice, commit
from perfumery.services.sessions import Principal, session_store

logger = logging.getLogger(__name__)

DEFAULT_HASH_METHOD = 'pbkdf2:sha256'
USERNAME_MAX_LENGTH = 80


def _hash_method():
    return current_app.config.get('PASSWORD_HASH_METHOD', DEFAULT_HASH_METHOD)


def hash_password(password):
    return generate_password_hash(password, method=_hash_method())


def verify_password(password_hash, password):
    return check_password_hash(password_hash, password)


@lru_cache(maxsize=4)
def _dummy_hash(method):
    return generate_password_hash('not-a-real-password', method=method)


def validate_username(username):
    username = require_text(username, 'Username')
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(f'Username must be at most {USERNAME_MAX_LENGTH} characters.')
    return username


def username_taken(username, exclude_id=None):
    query = User.query.filter(User.username == username)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return db.session.query(query.exists()).scalar()


def check_new_account(username, password, role=ROLE_USER):
    """Validate registration input and return the cleaned (username, role).

    Raises ValidationError for missing fields or an unknown role and
    DuplicateUsernameError when the username exists.
    """
    username = validate_username(username)
    if not password:
        raise ValidationError('Password is required.')
    role = parse_choice(role or ROLE_USER, ROLES, 'Role')
    if username_taken(username):
        raise DuplicateUsernameError(f'Username "{username}" is already taken.')
    return username, role


def register(username, password, full_name=None, role=ROLE_USER, photo=None):
    """Create an account and return the new User; no row is written on error."""
    username, role = check_new_account(username, password, role)
    duplicate = DuplicateUsernameError(f'Username "{username}" is already taken.')

    user = User(username=username,
                password_hash=hash_password(password),
                full_name=optional_text(full_name),
                photo=photo,
                role=role)
    db.session.add(user)
    commit(on_integrity_error=duplicate)
    logger.info('Registered user %s (role=%s)', user.username, user.role)
    return user


def authenticate(username, password):
    """Check credentials and return a Principal snapshot of the user.

    Unknown usernames still pay for one hash check so both failure paths
    take the same time.
    """
    username = optional_text(username)
    if not username or not password:
        raise InvalidCredentialsError('Please provide both username and password.')

    user = User.query.filter_by(username=username).first()
    if user is None:
        check_password_hash(_dummy_hash(_hash_method()), password)
        logger.warning('Failed login for unknown user %r', username)
        raise InvalidCredentialsError()
    if not verify_password(user.password_hash, password):
        logger.warning('Failed login for user %r: wrong password', username)
        raise InvalidCredentialsError()

    logger.info('User %s authenticated', user.username)
    return Principal.from_user(user)


def open_session(principal):
    """Persist a server-side session and return the principal carrying its token."""
    return session_store.issue(principal)


def refresh_principal(principal, user):
    """Re-snapshot the session after its owner edited their own profile."""
    if principal.token is None:
        return Principal.from_user(user)
    return session_store.refresh(principal.token, user) or Principal.from_user(user, principal.token)


def logout(principal):
    token = getattr(principal, 'token', None)
    session_store.destroy(token)
    logger.info('User %s logged out', getattr(principal, 'username', None))
