"""
Domain Errors

Raised by the services and converted at the handler boundary: form views
re-render with the message and ``status_code``, the app-level handlers render
the 403/404 pages for anything that escapes a view.
"""


class PerfumeryError(Exception):
    """Base class for errors shown to the user"""
    status_code = 400
    default_message = 'The request could not be processed.'

    def __init__(self, message=None):
        super().__init__(message or self.default_message)

    @property
    def message(self):
        return str(self)


class ValidationError(PerfumeryError):
    default_message = 'Please fill in all required fields.'


class UploadRejectedError(ValidationError):
    default_message = 'Only image files up to 5 MB are allowed.'


class DuplicateUsernameError(PerfumeryError):
    status_code = 409
    default_message = 'That username is already taken.'


class InvalidCredentialsError(PerfumeryError):
    status_code = 401
    default_message = 'Invalid username or password.'


class AuthenticationRequired(PerfumeryError):
    status_code = 401
    default_message = 'Please log in to access this page.'


class AuthorizationError(PerfumeryError):
    status_code = 403
    default_message = 'Access denied.'


class NotFoundError(PerfumeryError):
    status_code = 404
    default_message = 'Not found.'


class SelfDeletionError(PerfumeryError):
    default_message = 'You cannot delete your own account.'


class ReferenceInUseError(PerfumeryError):
    status_code = 409
    default_message = 'This record is still used by perfumes in the catalog.'
