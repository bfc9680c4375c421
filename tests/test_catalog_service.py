import pytest

from perfumery.errors import AuthorizationError, NotFoundError, ReferenceInUseError, ValidationError
from perfumery.extensions import db
from perfumery.models import Brand, Category, Supplier, Perfume
from perfumery.services import catalog


@pytest.fixture()
def references(admin):
    return {
        'brand_id': catalog.create_brand(admin, 'Chanel', 'France').id,
        'category_id': catalog.create_category(admin, 'Floral').id,
        'supplier_id': catalog.create_supplier(admin, 'LuxCo', 'sales@luxco.example').id,
    }


def perfume_fields(references, **overrides):
    fields = {'name': 'X', 'price': 100, 'volume': 50, 'gender': 'unisex', **references}
    fields.update(overrides)
    return fields


def test_create_perfume_appears_in_list(admin, references):
    perfume = catalog.create_perfume(admin, perfume_fields(references))

    listed = catalog.list_perfumes()
    assert [p.id for p in listed] == [perfume.id]
    assert listed[0].brand.name == 'Chanel'
    assert listed[0].category.name == 'Floral'
    assert listed[0].supplier.name == 'LuxCo'
    assert listed[0].in_stock is True


def test_create_perfume_from_form_strings(admin, references):
    form = {key: str(value) for key, value in perfume_fields(references, price='89.90').items()}
    form['in_stock'] = 'false'
    perfume = catalog.create_perfume(admin, form)
    assert perfume.price == pytest.approx(89.9)
    assert perfume.volume == 50
    assert perfume.in_stock is False


@pytest.mark.parametrize('overrides', [
    {'price': 'abc'},
    {'price': '-1'},
    {'price': 'nan'},
    {'volume': None},
    {'volume': ''},
    {'volume': '0'},
    {'volume': '12.5'},
    {'volume': '99999999999999999999'},
    {'volume': str(2 ** 63)},
    {'gender': 'robot'},
    {'name': ''},
    {'brand_id': '999'},
    {'category_id': 'floral'},
    {'supplier_id': '99999999999999999999'},
])
def test_invalid_perfume_creates_no_row(admin, references, overrides):
    with pytest.raises(ValidationError):
        catalog.create_perfume(admin, perfume_fields(references, **overrides))
    assert Perfume.query.count() == 0


def test_landing_limit(admin, references):
    for i in range(8):
        catalog.create_perfume(admin, perfume_fields(references, name=f'P{i}'))

    assert len(catalog.list_perfumes(limit=6)) == 6
    assert len(catalog.list_perfumes()) == 8


def test_update_perfume_is_partial(admin, references):
    perfume = catalog.create_perfume(admin, perfume_fields(references))

    updated = catalog.update_perfume(admin, perfume.id, {'price': '120.5', 'in_stock': 'off'})

    assert updated.price == pytest.approx(120.5)
    assert updated.in_stock is False
    assert updated.name == 'X'
    assert updated.volume == 50


def test_update_perfume_validates(admin, references):
    perfume = catalog.create_perfume(admin, perfume_fields(references))
    with pytest.raises(ValidationError):
        catalog.update_perfume(admin, perfume.id, {'price': 'free'})
    db.session.rollback()
    assert db.session.get(Perfume, perfume.id).price == 100


def test_delete_perfume(admin, references):
    perfume = catalog.create_perfume(admin, perfume_fields(references))
    catalog.delete_perfume(admin, perfume.id)
    assert Perfume.query.count() == 0
    with pytest.raises(NotFoundError):
        catalog.delete_perfume(admin, perfume.id)


def test_get_missing_perfume(app_context):
    with pytest.raises(NotFoundError):
        catalog.get_perfume(42)


@pytest.mark.parametrize('operation', [
    lambda actor, refs: catalog.create_brand(actor, 'Dior'),
    lambda actor, refs: catalog.create_category(actor, 'Woody'),
    lambda actor, refs: catalog.create_supplier(actor, 'Acme'),
    lambda actor, refs: catalog.create_perfume(actor, perfume_fields(refs)),
    lambda actor, refs: catalog.update_reference(actor, Brand, refs['brand_id'], {'name': 'Y'}),
    lambda actor, refs: catalog.delete_reference(actor, Supplier, refs['supplier_id']),
])
def test_non_admin_is_denied(shopper, references, operation):
    with pytest.raises(AuthorizationError):
        operation(shopper, references)


def test_anonymous_is_denied(references):
    with pytest.raises(AuthorizationError):
        catalog.create_brand(None, 'Dior')


def test_reference_requires_name(admin):
    with pytest.raises(ValidationError):
        catalog.create_brand(admin, '   ')
    assert Brand.query.count() == 0


def test_optional_reference_fields_are_blank_to_none(admin):
    brand = catalog.create_brand(admin, 'Dior', '  ')
    assert brand.country is None


def test_update_reference(admin, references):
    brand = catalog.update_reference(admin, Brand, references['brand_id'], {'country': 'FR'})
    assert brand.name == 'Chanel'
    assert brand.country == 'FR'


def test_referenced_rows_cannot_be_deleted(admin, references):
    catalog.create_perfume(admin, perfume_fields(references))

    for model, key in ((Brand, 'brand_id'), (Category, 'category_id'), (Supplier, 'supplier_id')):
        with pytest.raises(ReferenceInUseError):
            catalog.delete_reference(admin, model, references[key])
        assert db.session.get(model, references[key]) is not None


def test_unreferenced_rows_can_be_deleted(admin, references):
    catalog.delete_reference(admin, Category, references['category_id'])
    assert Category.query.count() == 0
    with pytest.raises(NotFoundError):
        catalog.delete_reference(admin, Category, references['category_id'])


def test_references_listed_by_name(admin):
    for name in ('Guerlain', 'Chanel', 'Dior'):
        catalog.create_brand(admin, name)
    assert [b.name for b in catalog.list_references(Brand)] == ['Chanel', 'Dior', 'Guerlain']


def test_lookups_outside_integer_range_are_not_found(app_context):
    with pytest.raises(NotFoundError):
        catalog.get_perfume(2 ** 64)
    with pytest.raises(NotFoundError):
        catalog.get_reference(Brand, 2 ** 64)
