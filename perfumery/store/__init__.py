"""
Store Blueprint

Landing page, catalog, cart stub, own profile and uploaded photos.
"""

from flask import Blueprint

store_bp = Blueprint('store', __name__)

from perfumery.store import routes  # noqa: E402, F401
