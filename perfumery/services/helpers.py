"""
Form parsing and persistence helpers shared by the services.

Every parser accepts raw form values (strings, or plain Python values when
called directly) and raises ValidationError with a user-facing message.
"""

import logging
import math

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from perfumery.errors import ValidationError
from perfumery.extensions import db

logger = logging.getLogger(__name__)

TRUE_VALUES = ('true', 'on', '1', 'yes')
FALSE_VALUES = ('false', 'off', '0', 'no')

# Largest value an INTEGER column holds
MAX_INTEGER = 2 ** 63 - 1


def optional_text(value):
    """Stripped text, or None when blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_text(value, label):
    text = optional_text(value)
    if text is None:
        raise ValidationError(f'{label} is required.')
    return text


def parse_price(value):
    text = require_text(value, 'Price')
    try:
        price = float(text)
    except ValueError:
        raise ValidationError('Price must be a valid number.')
    if not math.isfinite(price) or price < 0:
        raise ValidationError('Price must be a non-negative number.')
    return price


def parse_volume(value):
    text = require_text(value, 'Volume')
    try:
        volume = int(text)
    except ValueError:
        raise ValidationError('Volume must be a whole number of millilitres.')
    if volume <= 0:
        raise ValidationError('Volume must be greater than zero.')
    if volume > MAX_INTEGER:
        raise ValidationError('Volume is too large.')
    return volume


def parse_choice(value, choices, label):
    text = require_text(value, label)
    if text not in choices:
        raise ValidationError(f'{label} must be one of: {", ".join(choices)}.')
    return text


def parse_bool(value, default=False):
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValidationError(f'"{value}" is not a yes/no value.')


def parse_id(value, label):
    text = require_text(value, label)
    try:
        item_id = int(text)
    except ValueError:
        raise ValidationError(f'{label} must be selected from the list.')
    if not is_valid_id(item_id):
        raise ValidationError(f'{label} must be selected from the list.')
    return item_id


def is_valid_id(value):
    """True for ids a primary key column can hold."""
    return 0 < value <= MAX_INTEGER


def commit(on_integrity_error=None):
    """Commit the session, rolling back on failure.

    When ``on_integrity_error`` is given it is raised in place of a
    constraint violation so callers can report a domain error.
    """
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        if on_integrity_error is not None:
            raise on_integrity_error from exc
        logger.exception('Integrity error on commit')
        raise
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception('Database commit failed')
        raise
    except Exception:
        db.session.rollback()
        logger.exception('Unexpected error on commit')
        raise
