"""
Auth Blueprint

Login, registration and logout.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from perfumery.auth import routes  # noqa: E402, F401
