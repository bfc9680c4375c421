"""
Admin Blueprint

Catalog management: perfumes and their brands, categories and suppliers.
Every endpoint of this blueprint requires the admin role.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from perfumery.admin import routes  # noqa: E402, F401
