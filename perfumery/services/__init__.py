"""
Services Package

Exports the session store and the principal type; the service modules
themselves are imported by name (auth, users, catalog, uploads, seed).
"""

from perfumery.services.sessions import Principal, SessionStore, session_store

__all__ = [
    'Principal',
    'SessionStore',
    'session_store',
]
