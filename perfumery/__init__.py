"""
Perfumery - Application Factory

Server-rendered perfume catalog with session-based login and admin/user
roles. ``create_app`` wires the extensions, blueprints, access guard and
error pages.
"""

import logging
import os

from flask import Flask, render_template, request
from flask_wtf.csrf import CSRFError
from sqlalchemy.engine import make_url

from perfumery.access import enforce_access
from perfumery.config import Config
from perfumery.extensions import db, login_manager, csrf
from perfumery.errors import PerfumeryError, NotFoundError, AuthorizationError, AuthenticationRequired
from perfumery.services.sessions import session_store

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    _configure_logging(app)

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please log in to access this page.'
    login_manager.login_message_category = 'warning'
    session_store.init_app(app)
    csrf.init_app(app)

    # Register blueprints
    from perfumery.auth import auth_bp
    from perfumery.store import store_bp
    from perfumery.users import users_bp
    from perfumery.admin import admin_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(store_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(admin_bp)

    # One guard evaluates the access rule table for every request
    app.before_request(enforce_access)
    _register_error_handlers(app)

    from perfumery.cli import register_commands
    register_commands(app)

    # The cookie stores the session token; resolve it to the stored principal
    @login_manager.user_loader
    def load_principal(token):
        return session_store.load(token)

    with app.app_context():
        _ensure_storage_dirs(app)
        db.create_all()
        if app.config.get('SEED_DEFAULT_DATA'):
            from perfumery.services.seed import ensure_default_admin
            ensure_default_admin(app.config['ADMIN_USERNAME'], app.config['ADMIN_PASSWORD'])

    return app


def _configure_logging(app):
    level = app.config.get('LOG_LEVEL', 'INFO')
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger('perfumery').setLevel(level)


def _ensure_storage_dirs(app):
    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)
    url = make_url(app.config['SQLALCHEMY_DATABASE_URI'])
    if url.get_backend_name() == 'sqlite' and url.database and url.database != ':memory:':
        os.makedirs(os.path.dirname(os.path.abspath(url.database)), exist_ok=True)


def _register_error_handlers(app):
    @app.errorhandler(404)
    @app.errorhandler(NotFoundError)
    def not_found(error):
        message = error.message if isinstance(error, NotFoundError) else None
        return render_template('errors/404.html', message=message), 404

    @app.errorhandler(403)
    @app.errorhandler(AuthorizationError)
    def forbidden(error):
        return render_template('errors/403.html'), 403

    @app.errorhandler(AuthenticationRequired)
    def authentication_required(error):
        return login_manager.unauthorized()

    @app.errorhandler(CSRFError)
    def csrf_error(error):
        logger.warning('CSRF check failed for %s %s: %s', request.method, request.path,
                       error.description)
        return render_template('errors/error.html', message=error.description), 400

    @app.errorhandler(PerfumeryError)
    def domain_error(error):
        return render_template('errors/error.html', message=error.message), error.status_code

    @app.errorhandler(500)
    def internal_error(error):
        logger.error('Internal Server Error: %s', getattr(error, 'original_exception', error))
        db.session.rollback()
        return render_template('errors/500.html'), 500
