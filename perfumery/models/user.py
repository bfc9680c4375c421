"""
User Model
"""

from perfumery.extensions import db
from perfumery.models.mixins import TimestampMixin

ROLE_ADMIN = 'admin'
ROLE_USER = 'user'
ROLES = (ROLE_ADMIN, ROLE_USER)


class User(TimestampMixin, db.Model):
    """Store account; only the salted password hash is persisted"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(80), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(120))
    photo = db.Column(db.String(255))  # relative reference, e.g. /uploads/<digest>.png
    role = db.Column(db.Enum(*ROLES, name='user_role'), default=ROLE_USER, nullable=False)

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def __repr__(self):
        return f'<User {self.username} ({self.role})>'
