"""
Auth Session Model

Server-side session rows. The cookie carries only the token; the columns
below are the principal snapshot taken at login.
"""

from perfumery.extensions import db
from perfumery.models.mixins import utcnow


class AuthSession(db.Model):
    __tablename__ = 'auth_sessions'

    token = db.Column(db.String(64), primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'),
                        nullable=False, index=True)
    username = db.Column(db.String(80), nullable=False)
    full_name = db.Column(db.String(120))
    photo = db.Column(db.String(255))
    role = db.Column(db.String(20), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False)

    def is_expired(self, now=None):
        return (now or utcnow()) >= self.expires_at

    def __repr__(self):
        return f'<AuthSession user:{self.user_id} expires:{self.expires_at}>'
