"""
Access Control

One rule table maps each endpoint to the capability it requires and one
guard (``enforce_access``) evaluates it before every request. The predicate
functions are also called by the services so operations stay protected when
used outside HTTP.
"""

import logging

from flask import request
from flask_login import current_user

from perfumery.errors import AuthenticationRequired, AuthorizationError
from perfumery.extensions import login_manager
from perfumery.models import ROLE_ADMIN

logger = logging.getLogger(__name__)

PUBLIC = 'public'
AUTHENTICATED = 'authenticated'
ADMIN = 'admin'
OWNER_OR_ADMIN = 'owner_or_admin'

ADMIN_ONLY = frozenset({ROLE_ADMIN})

ACCESS_RULES = {
    'static': PUBLIC,
    'auth.login': PUBLIC,
    'auth.register': PUBLIC,
    'auth.logout': AUTHENTICATED,
    'store.index': AUTHENTICATED,
    'store.catalog': AUTHENTICATED,
    'store.cart': AUTHENTICATED,
    'store.profile': AUTHENTICATED,
    'store.uploaded_photo': PUBLIC,
    'users.list_users': ADMIN,
    'users.add_user': ADMIN,
    'users.edit_user': OWNER_OR_ADMIN,
    'users.delete_user': ADMIN,
}

# Endpoints not listed above inherit their blueprint's capability
BLUEPRINT_DEFAULTS = {
    'admin': ADMIN,
}

DEFAULT_CAPABILITY = ADMIN


def is_authenticated(principal):
    return principal is not None and bool(getattr(principal, 'is_authenticated', False))


def require_authenticated(principal):
    if not is_authenticated(principal):
        raise AuthenticationRequired()


def require_role(principal, allowed_roles):
    """Pass when the principal's role is in ``allowed_roles``.

    Anonymous callers fail with AuthorizationError as well.
    """
    if not is_authenticated(principal) or principal.role not in allowed_roles:
        raise AuthorizationError()


def can_act_on(principal, target_id):
    if not is_authenticated(principal):
        return False
    return principal.role == ROLE_ADMIN or principal.id == target_id


def require_owner_or_admin(principal, target_id):
    if not can_act_on(principal, target_id):
        raise AuthorizationError()


def required_capability(endpoint):
    if endpoint in ACCESS_RULES:
        return ACCESS_RULES[endpoint]
    blueprint = endpoint.rpartition('.')[0]
    return BLUEPRINT_DEFAULTS.get(blueprint, DEFAULT_CAPABILITY)


def check_access(principal, endpoint, view_args=None):
    capability = required_capability(endpoint)
    if capability == PUBLIC:
        return
    require_authenticated(principal)
    if capability == ADMIN:
        require_role(principal, ADMIN_ONLY)
    elif capability == OWNER_OR_ADMIN:
        require_owner_or_admin(principal, (view_args or {}).get('user_id'))


def enforce_access():
    """before_request guard: redirect anonymous users, deny the rest with 403."""
    if request.endpoint is None:
        # Unmatched URL, let the 404 handler answer
        return None
    try:
        check_access(current_user, request.endpoint, request.view_args)
    except AuthenticationRequired:
        return login_manager.unauthorized()
    except AuthorizationError:
        logger.warning('Denied %s %s to %s', request.method, request.path,
                       getattr(current_user, 'username', 'anonymous'))
        raise
    return None
