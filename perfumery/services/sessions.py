"""
Session Store

Server-side sessions keyed by an opaque token. The signed Flask cookie only
carries the token (as the Flask-Login user id); the principal snapshot lives
in the auth_sessions table and is looked up on every request.
"""

import logging
import secrets
from datetime import timedelta

from flask_login import UserMixin

from perfumery.extensions import db
from perfumery.models import AuthSession, ROLE_ADMIN
from perfumery.models.mixins import utcnow

logger = logging.getLogger(__name__)

DEFAULT_LIFETIME = timedelta(hours=12)


class Principal(UserMixin):
    """Authenticated identity attached to a session.

    A point-in-time copy of the user row: later edits to the user are not
    seen here until the session is refreshed.
    """

    def __init__(self, id, username, role, full_name=None, photo=None, token=None):
        self.id = id
        self.username = username
        self.role = role
        self.full_name = full_name
        self.photo = photo
        self.token = token

    @classmethod
    def from_user(cls, user, token=None):
        return cls(user.id, user.username, user.role,
                   full_name=user.full_name, photo=user.photo, token=token)

    @classmethod
    def from_session(cls, row):
        return cls(row.user_id, row.username, row.role,
                   full_name=row.full_name, photo=row.photo, token=row.token)

    def get_id(self):
        return self.token

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    @property
    def display_name(self):
        return self.full_name or self.username

    def __repr__(self):
        return f'<Principal {self.username} ({self.role})>'


def _copy_snapshot(row, subject):
    row.user_id = subject.id
    row.username = subject.username
    row.full_name = subject.full_name
    row.photo = subject.photo
    row.role = subject.role


class SessionStore:
    """Issues, resolves and destroys server-side sessions."""

    def __init__(self, app=None):
        self.lifetime = DEFAULT_LIFETIME
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self.lifetime = app.config.get('SESSION_LIFETIME', DEFAULT_LIFETIME)
        app.extensions['session_store'] = self

    def issue(self, subject):
        """Start a session for a User or Principal and return its principal."""
        now = utcnow()
        row = AuthSession(token=secrets.token_urlsafe(32), created_at=now,
                          expires_at=now + self.lifetime)
        _copy_snapshot(row, subject)
        db.session.add(row)
        db.session.commit()
        logger.debug('Issued session for user %s', subject.username)
        return Principal.from_session(row)

    def load(self, token):
        """Principal for ``token``, or None when unknown or expired."""
        if not token:
            return None
        row = db.session.get(AuthSession, token)
        if row is None:
            return None
        if row.is_expired():
            logger.info('Session for user %s expired', row.username)
            db.session.delete(row)
            db.session.commit()
            return None
        return Principal.from_session(row)

    def refresh(self, token, user):
        """Re-snapshot ``user`` into an existing session."""
        row = db.session.get(AuthSession, token)
        if row is None:
            return None
        _copy_snapshot(row, user)
        db.session.commit()
        return Principal.from_session(row)

    def destroy(self, token):
        if not token:
            return
        AuthSession.query.filter_by(token=token).delete()
        db.session.commit()

    def purge_user(self, user_id, commit=True):
        """Drop every session of a user. With ``commit=False`` the caller
        commits as part of its own unit of work."""
        count = AuthSession.query.filter_by(user_id=user_id).delete()
        if commit:
            db.session.commit()
        return count


session_store = SessionStore()
