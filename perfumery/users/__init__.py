"""
Users Blueprint

Account management. Every route except edit is admin-only; edit also admits
the account owner (see perfumery.access.ACCESS_RULES).
"""

from flask import Blueprint

users_bp = Blueprint('users', __name__)

from perfumery.users import routes  # noqa: E402, F401
