"""
User Management

Admin listing/creation/deletion and owner-or-admin editing. Edits are
partial: keys missing from ``fields`` leave the column untouched.
"""

import logging

from perfumery.access import ADMIN_ONLY, require_role, require_owner_or_admin
from perfumery.errors import NotFoundError, SelfDeletionError, DuplicateUsernameError
from perfumery.extensions import db
from perfumery.models import User, ROLES, ROLE_USER
from perfumery.services import auth
from perfumery.services.helpers import optional_text, parse_choice, parse_bool, is_valid_id, commit
from perfumery.services.sessions import session_store
from perfumery.services.uploads import has_file, store_photo

logger = logging.getLogger(__name__)


def list_users(actor):
    """All users, newest first (admin only)."""
    require_role(actor, ADMIN_ONLY)
    return User.query.order_by(User.created_at.desc(), User.id.desc()).all()


def get_user(user_id):
    user = db.session.get(User, user_id) if is_valid_id(user_id) else None
    if user is None:
        raise NotFoundError('User not found.')
    return user


def create_user(actor, fields, photo=None):
    """Admin creation of an account with an optional role and photo."""
    require_role(actor, ADMIN_ONLY)
    username, role = auth.check_new_account(fields.get('username'),
                                            fields.get('password'),
                                            fields.get('role') or ROLE_USER)
    # Only write the file once the account is known to be valid
    photo_ref = store_photo(photo) if has_file(photo) else None
    user = auth.register(username,
                         fields.get('password'),
                         full_name=fields.get('full_name'),
                         role=role,
                         photo=photo_ref)
    logger.info('Admin %s created user %s', actor.username, user.username)
    return user


def update_user(actor, user_id, fields, photo=None):
    """Apply a partial edit to a user.

    A role submitted by a non-admin is ignored, not rejected. ``remove_photo``
    clears the photo and wins over a newly uploaded file.
    """
    require_owner_or_admin(actor, user_id)
    user = get_user(user_id)

    changes = {}
    if fields.get('username') is not None:
        username = auth.validate_username(fields.get('username'))
        if username != user.username and auth.username_taken(username, exclude_id=user.id):
            raise DuplicateUsernameError(f'Username "{username}" is already taken.')
        changes['username'] = username
    if 'full_name' in fields:
        changes['full_name'] = optional_text(fields.get('full_name'))
    if fields.get('role'):
        if actor.is_admin:
            changes['role'] = parse_choice(fields.get('role'), ROLES, 'Role')
        else:
            logger.info('Ignoring role change for user %s submitted by non-admin %s',
                        user.username, actor.username)

    if parse_bool(fields.get('remove_photo'), default=False):
        changes['photo'] = None
    elif has_file(photo):
        changes['photo'] = store_photo(photo)

    for name, value in changes.items():
        setattr(user, name, value)
    commit(on_integrity_error=DuplicateUsernameError())
    logger.info('User %s updated by %s (%s)', user.username, actor.username,
                ', '.join(sorted(changes)) or 'no changes')
    return user


def delete_user(actor, user_id):
    """Delete another user's account together with their sessions."""
    require_role(actor, ADMIN_ONLY)
    if actor.id == user_id:
        raise SelfDeletionError()
    user = get_user(user_id)
    username = user.username
    session_store.purge_user(user.id, commit=False)
    db.session.delete(user)
    commit()
    logger.info('Admin %s deleted user %s', actor.username, username)
