import io

import pytest
from werkzeug.datastructures import FileStorage

from perfumery import create_app
from perfumery.config import TestConfig
from perfumery.models import ROLE_ADMIN, ROLE_USER
from perfumery.services import auth
from perfumery.services.sessions import Principal

PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 64


@pytest.fixture()
def app(tmp_path):
    class _Config(TestConfig):
        SQLALCHEMY_DATABASE_URI = 'sqlite:///' + str(tmp_path / 'test.db')
        UPLOAD_FOLDER = str(tmp_path / 'uploads')

    return create_app(_Config)


@pytest.fixture()
def app_context(app):
    # Service-level tests only; HTTP tests must not hold a context open,
    # Flask-Login caches the current user on it.
    with app.app_context():
        yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    """Register a user in its own app context and return the new id."""
    def _make(username, password='secret', role=ROLE_USER, full_name=None):
        with app.app_context():
            return auth.register(username, password, full_name=full_name, role=role).id
    return _make


@pytest.fixture()
def admin(app_context):
    user = auth.register('boss', 'secret', full_name='The Boss', role=ROLE_ADMIN)
    return Principal.from_user(user)


@pytest.fixture()
def shopper(app_context):
    user = auth.register('shopper', 'secret', full_name='Sam Shopper')
    return Principal.from_user(user)


@pytest.fixture()
def login(client):
    def _login(username, password='secret'):
        return client.post('/login', data={'username': username, 'password': password})
    return _login


def image_upload(data=PNG_BYTES, filename='me.png', content_type='image/png'):
    return FileStorage(stream=io.BytesIO(data), filename=filename, content_type=content_type)


@pytest.fixture()
def image_file():
    return image_upload
