"""
Flask Extensions

The signed cookie only holds an opaque token; the principal snapshot is kept
server-side by the session store (perfumery.services.sessions) and resolved
by Flask-Login on each request.
"""

import sqlite3

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect
from sqlalchemy import event
from sqlalchemy.engine import Engine

# Database instance
db = SQLAlchemy()

# Login manager, resolves session tokens to principals
login_manager = LoginManager()

# CSRF tokens for every POST form
csrf = CSRFProtect()


@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores REFERENCES clauses unless asked per connection."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()
