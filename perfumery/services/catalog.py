"""
Catalog Service

Perfumes and their reference data (brands, categories, suppliers). Reads
are open to any authenticated caller; every mutation is admin-only.

Reference rows cannot be deleted while a perfume still points at them.
"""

import logging

from sqlalchemy.orm import joinedload

from perfumery.access import ADMIN_ONLY, require_role
from perfumery.errors import NotFoundError, ReferenceInUseError, ValidationError
from perfumery.extensions import db
from perfumery.models import Perfume, Brand, Category, Supplier, GENDERS
from perfumery.services.helpers import (
    require_text, optional_text, parse_price, parse_volume, parse_choice,
    parse_bool, parse_id, is_valid_id, commit,
)

logger = logging.getLogger(__name__)

REFERENCE_MODELS = {
    'brand': Brand,
    'category': Category,
    'supplier': Supplier,
}

# Perfume foreign key column per reference model
_PERFUME_COLUMNS = {
    Brand: Perfume.brand_id,
    Category: Perfume.category_id,
    Supplier: Perfume.supplier_id,
}


# -----------------------------------------------------------------------------
# Reference data
# -----------------------------------------------------------------------------

def list_references(model):
    return model.query.order_by(model.name, model.id).all()


def get_reference(model, item_id):
    item = db.session.get(model, item_id) if is_valid_id(item_id) else None
    if item is None:
        raise NotFoundError(f'{model.label.capitalize()} not found.')
    return item


def _reference_values(model, fields, partial):
    values = {}
    for name in model.fields:
        raw = fields.get(name)
        if partial and raw is None:
            continue
        if name in model.required_fields:
            values[name] = require_text(raw, name.capitalize())
        else:
            values[name] = optional_text(raw)
    return values


def create_reference(actor, model, fields):
    require_role(actor, ADMIN_ONLY)
    item = model(**_reference_values(model, fields, partial=False))
    db.session.add(item)
    commit()
    logger.info('%s "%s" created by %s', model.label.capitalize(), item.name, actor.username)
    return item


def update_reference(actor, model, item_id, fields):
    require_role(actor, ADMIN_ONLY)
    item = get_reference(model, item_id)
    for name, value in _reference_values(model, fields, partial=True).items():
        setattr(item, name, value)
    commit()
    logger.info('%s %s updated by %s', model.label.capitalize(), item.id, actor.username)
    return item


def count_perfumes_using(model, item_id):
    return Perfume.query.filter(_PERFUME_COLUMNS[model] == item_id).count()


def delete_reference(actor, model, item_id):
    require_role(actor, ADMIN_ONLY)
    item = get_reference(model, item_id)
    in_use = count_perfumes_using(model, item.id)
    if in_use:
        raise ReferenceInUseError(
            f'Cannot delete {model.label} "{item.name}": '
            f'{in_use} perfume(s) still reference it.')
    name = item.name
    db.session.delete(item)
    commit()
    logger.info('%s "%s" deleted by %s', model.label.capitalize(), name, actor.username)


def create_brand(actor, name, country=None):
    return create_reference(actor, Brand, {'name': name, 'country': country})


def create_category(actor, name):
    return create_reference(actor, Category, {'name': name})


def create_supplier(actor, name, contact=None):
    return create_reference(actor, Supplier, {'name': name, 'contact': contact})


# -----------------------------------------------------------------------------
# Perfumes
# -----------------------------------------------------------------------------

def _with_references(query):
    return query.options(joinedload(Perfume.brand),
                         joinedload(Perfume.category),
                         joinedload(Perfume.supplier))


def list_perfumes(limit=None):
    """Perfumes with their brand, category and supplier loaded."""
    query = _with_references(Perfume.query).order_by(Perfume.id)
    if limit is not None:
        query = query.limit(limit)
    return query.all()


def get_perfume(perfume_id):
    if not is_valid_id(perfume_id):
        raise NotFoundError('Perfume not found.')
    perfume = _with_references(Perfume.query).filter(Perfume.id == perfume_id).first()
    if perfume is None:
        raise NotFoundError('Perfume not found.')
    return perfume


def _existing_reference_id(model, value):
    label = model.label.capitalize()
    item_id = parse_id(value, label)
    if db.session.get(model, item_id) is None:
        raise ValidationError(f'{label} does not exist.')
    return item_id


_PERFUME_PARSERS = (
    ('name', lambda value: require_text(value, 'Name')),
    ('price', parse_price),
    ('volume', parse_volume),
    ('gender', lambda value: parse_choice(value, GENDERS, 'Gender')),
    ('brand_id', lambda value: _existing_reference_id(Brand, value)),
    ('category_id', lambda value: _existing_reference_id(Category, value)),
    ('supplier_id', lambda value: _existing_reference_id(Supplier, value)),
)


def _perfume_values(fields, partial):
    values = {}
    for key, parse in _PERFUME_PARSERS:
        raw = fields.get(key)
        if partial and raw is None:
            continue
        values[key] = parse(raw)
    in_stock = fields.get('in_stock')
    if in_stock is not None:
        values['in_stock'] = parse_bool(in_stock, default=True)
    elif not partial:
        values['in_stock'] = True
    return values


def create_perfume(actor, fields):
    """Validate every field, then insert; nothing is written on error."""
    require_role(actor, ADMIN_ONLY)
    perfume = Perfume(**_perfume_values(fields, partial=False))
    db.session.add(perfume)
    commit()
    logger.info('Perfume "%s" created by %s', perfume.name, actor.username)
    return perfume


def update_perfume(actor, perfume_id, fields):
    require_role(actor, ADMIN_ONLY)
    perfume = get_perfume(perfume_id)
    for name, value in _perfume_values(fields, partial=True).items():
        setattr(perfume, name, value)
    commit()
    logger.info('Perfume %s updated by %s', perfume.id, actor.username)
    return perfume


def delete_perfume(actor, perfume_id):
    require_role(actor, ADMIN_ONLY)
    perfume = get_perfume(perfume_id)
    name = perfume.name
    db.session.delete(perfume)
    commit()
    logger.info('Perfume "%s" deleted by %s', name, actor.username)
