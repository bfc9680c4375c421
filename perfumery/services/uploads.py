"""
Photo Uploads

Uploaded images are stored under their SHA-256 digest, so the same bytes
always map to the same file and concurrent uploads never collide. The value
kept on the user row is the relative URL ``/uploads/<digest><ext>``.
"""

import hashlib
import logging
import mimetypes
import os
import tempfile

from flask import current_app
from werkzeug.utils import secure_filename

from perfumery.errors import UploadRejectedError

logger = logging.getLogger(__name__)

PHOTO_URL_PREFIX = '/uploads/'


def has_file(file_storage):
    """True when the form actually carried a file (browsers send an empty part otherwise)."""
    return file_storage is not None and bool(file_storage.filename)


def photo_filename(data, original_name=None, mimetype=None):
    digest = hashlib.sha256(data).hexdigest()
    ext = os.path.splitext(secure_filename(original_name or ''))[1].lower()
    if not ext and mimetype:
        ext = mimetypes.guess_extension(mimetype) or ''
    return digest + ext


def store_photo(file_storage, upload_folder=None, max_bytes=None):
    """Validate and save an uploaded image, returning its relative URL.

    Raises UploadRejectedError for non-image content types, empty files and
    files over ``max_bytes``.
    """
    if upload_folder is None:
        upload_folder = current_app.config['UPLOAD_FOLDER']
    if max_bytes is None:
        max_bytes = current_app.config['MAX_PHOTO_BYTES']

    mimetype = file_storage.mimetype or ''
    if not mimetype.startswith('image/'):
        logger.warning('Rejected upload %r: content type %r', file_storage.filename, mimetype)
        raise UploadRejectedError('Only image files are allowed.')

    # Read one byte past the limit so oversize files are detected without buffering them whole
    data = file_storage.stream.read(max_bytes + 1)
    if not data:
        raise UploadRejectedError('The uploaded file is empty.')
    if len(data) > max_bytes:
        logger.warning('Rejected upload %r: larger than %d bytes', file_storage.filename, max_bytes)
        raise UploadRejectedError(f'Photos must be at most {max_bytes / (1024 * 1024):g} MB.')

    name = photo_filename(data, file_storage.filename, mimetype)
    os.makedirs(upload_folder, exist_ok=True)
    path = os.path.join(upload_folder, name)
    if not os.path.exists(path):
        fd, tmp_path = tempfile.mkstemp(dir=upload_folder, prefix='.upload-')
        try:
            with os.fdopen(fd, 'wb') as fh:
                fh.write(data)
            os.replace(tmp_path, path)
        except OSError:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        logger.info('Stored photo %s (%d bytes)', name, len(data))
    return PHOTO_URL_PREFIX + name
