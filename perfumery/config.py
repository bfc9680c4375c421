"""
Configuration settings for the Perfumery catalog
"""
import os
from datetime import timedelta


class Config:
    """Flask application configuration"""

    # Flask secret key for signing the session cookie
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'perfumery.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session cookie only carries the opaque token, the principal lives server-side
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_LIFETIME = timedelta(hours=int(os.environ.get('SESSION_LIFETIME_HOURS', 12)))

    # Salted PBKDF2 via werkzeug.security (method[:iterations])
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256'

    # Profile photo uploads
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(basedir, 'instance', 'uploads')
    MAX_PHOTO_BYTES = 5 * 1024 * 1024

    # Application settings
    LANDING_PAGE_SIZE = 6
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Default admin account created when the user table is empty
    SEED_DEFAULT_DATA = True
    ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME') or 'admin'
    ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD') or 'admin123'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SEED_DEFAULT_DATA = False
    WTF_CSRF_ENABLED = False
    # Fewer PBKDF2 rounds keep the suite fast
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'
