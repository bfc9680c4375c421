import os

import pytest

from perfumery.errors import (
    AuthorizationError, DuplicateUsernameError, NotFoundError, SelfDeletionError,
    UploadRejectedError, ValidationError,
)
from perfumery.extensions import db
from perfumery.models import User, AuthSession, ROLE_ADMIN, ROLE_USER
from perfumery.services import users
from perfumery.services.sessions import session_store


def test_list_users_is_admin_only(admin, shopper):
    listed = users.list_users(admin)
    assert {u.username for u in listed} == {'boss', 'shopper'}
    # newest first
    assert listed[0].username == 'shopper'

    with pytest.raises(AuthorizationError):
        users.list_users(shopper)


def test_admin_creates_user_with_role_and_photo(admin, image_file, app_context):
    user = users.create_user(admin, {'username': 'new', 'password': 'pw', 'full_name': 'New One',
                                     'role': ROLE_ADMIN}, photo=image_file())

    assert user.role == ROLE_ADMIN
    assert user.photo.startswith('/uploads/') and user.photo.endswith('.png')
    stored = os.path.join(app_context.config['UPLOAD_FOLDER'], user.photo.rsplit('/', 1)[1])
    assert os.path.exists(stored)


def test_create_user_defaults_to_user_role(admin):
    user = users.create_user(admin, {'username': 'plain', 'password': 'pw'})
    assert user.role == ROLE_USER
    assert user.photo is None


def test_non_admin_cannot_create_users(shopper):
    with pytest.raises(AuthorizationError):
        users.create_user(shopper, {'username': 'x', 'password': 'pw'})
    assert User.query.filter_by(username='x').first() is None


def test_create_user_rejects_non_image(admin, image_file):
    with pytest.raises(UploadRejectedError):
        users.create_user(admin, {'username': 'x', 'password': 'pw'},
                          photo=image_file(b'hello', 'notes.txt', 'text/plain'))
    assert User.query.filter_by(username='x').first() is None


def test_self_edit_ignores_role(shopper):
    user = users.update_user(shopper, shopper.id, {'full_name': 'Sam S.', 'role': ROLE_ADMIN})

    assert user.full_name == 'Sam S.'
    assert user.role == ROLE_USER


def test_admin_edit_applies_role(admin, shopper):
    user = users.update_user(admin, shopper.id, {'role': ROLE_ADMIN})
    assert user.role == ROLE_ADMIN


def test_admin_edit_rejects_unknown_role(admin, shopper):
    with pytest.raises(ValidationError):
        users.update_user(admin, shopper.id, {'role': 'wizard'})


def test_user_cannot_edit_someone_else(admin, shopper):
    with pytest.raises(AuthorizationError):
        users.update_user(shopper, admin.id, {'full_name': 'hacked'})
    assert db.session.get(User, admin.id).full_name == 'The Boss'


def test_update_is_partial(shopper):
    user = users.update_user(shopper, shopper.id, {})
    assert user.username == 'shopper'
    assert user.full_name == 'Sam Shopper'


def test_rename_to_existing_username_fails(admin, shopper):
    with pytest.raises(DuplicateUsernameError):
        users.update_user(shopper, shopper.id, {'username': 'boss'})
    assert db.session.get(User, shopper.id).username == 'shopper'


def test_blank_username_is_rejected(shopper):
    with pytest.raises(ValidationError):
        users.update_user(shopper, shopper.id, {'username': '  '})


def test_photo_upload_and_explicit_removal(shopper, image_file):
    user = users.update_user(shopper, shopper.id, {}, photo=image_file())
    photo = user.photo
    assert photo

    # No new file and no removal flag keeps the photo
    user = users.update_user(shopper, shopper.id, {'full_name': 'Still Sam'}, photo=image_file(b'', ''))
    assert user.photo == photo

    user = users.update_user(shopper, shopper.id, {'remove_photo': 'true'}, photo=image_file())
    assert user.photo is None


def test_update_missing_user(admin):
    with pytest.raises(NotFoundError):
        users.update_user(admin, 999, {'full_name': 'ghost'})


def test_admin_cannot_delete_self(admin):
    with pytest.raises(SelfDeletionError):
        users.delete_user(admin, admin.id)
    assert db.session.get(User, admin.id) is not None


def test_admin_deletes_other_user_and_their_sessions(admin, shopper):
    session_store.issue(shopper)

    users.delete_user(admin, shopper.id)

    assert db.session.get(User, shopper.id) is None
    assert AuthSession.query.filter_by(user_id=shopper.id).count() == 0


def test_non_admin_cannot_delete(admin, shopper):
    with pytest.raises(AuthorizationError):
        users.delete_user(shopper, admin.id)


def test_delete_missing_user(admin):
    with pytest.raises(NotFoundError):
        users.delete_user(admin, 999)


def test_get_user_outside_integer_range(app_context):
    with pytest.raises(NotFoundError):
        users.get_user(2 ** 64)


@pytest.mark.parametrize('fields,error', [
    ({'username': 'shopper', 'password': 'pw'}, DuplicateUsernameError),
    ({'username': 'fresh', 'password': ''}, ValidationError),
    ({'username': 'fresh', 'password': 'pw', 'role': 'wizard'}, ValidationError),
])
def test_rejected_create_leaves_no_photo_behind(admin, shopper, image_file, app_context, fields, error):
    upload_folder = app_context.config['UPLOAD_FOLDER']
    before = set(os.listdir(upload_folder))

    with pytest.raises(error):
        users.create_user(admin, fields, photo=image_file())

    assert set(os.listdir(upload_folder)) == before
