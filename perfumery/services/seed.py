"""
Default and demo data.
"""

import logging

from perfumery.extensions import db
from perfumery.models import User, Brand, Category, Supplier, Perfume, ROLE_ADMIN, ROLE_USER
from perfumery.services import auth
from perfumery.services.helpers import commit

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {'username': 'admin', 'password': 'admin123', 'full_name': 'System Administrator', 'role': ROLE_ADMIN},
    {'username': 'user', 'password': 'user123', 'full_name': 'Regular User', 'role': ROLE_USER},
]

DEMO_BRANDS = [
    {'name': 'Chanel', 'country': 'France'},
    {'name': 'Dior', 'country': 'France'},
    {'name': 'Guerlain', 'country': 'France'},
]

DEMO_CATEGORIES = ['Floral', 'Oriental', 'Woody']

DEMO_SUPPLIERS = [
    {'name': 'Luxury Perfumes', 'contact': 'info@luxury-perfumes.com'},
    {'name': 'French Fragrances', 'contact': 'contact@french-fragrances.fr'},
]

# (name, price, volume, gender, brand, category, supplier)
DEMO_PERFUMES = [
    ('Chanel No. 5', 8900, 100, 'female', 'Chanel', 'Floral', 'Luxury Perfumes'),
    ('Dior Sauvage', 7500, 100, 'male', 'Dior', 'Woody', 'Luxury Perfumes'),
    ('Shalimar', 9200, 100, 'unisex', 'Guerlain', 'Oriental', 'French Fragrances'),
]


def ensure_default_admin(username, password):
    """Create an admin account when the user table is empty."""
    if User.query.first() is not None:
        return None
    user = auth.register(username, password, full_name='System Administrator', role=ROLE_ADMIN)
    logger.info('Created default admin account %r; change its password after first login', username)
    return user


def promote_or_create_admin(username, password=None, full_name=None):
    """Return (user, created). Existing users are promoted in place."""
    user = User.query.filter_by(username=username).first()
    if user is not None:
        user.role = ROLE_ADMIN
        commit()
        logger.info('Promoted %s to admin', username)
        return user, False
    return auth.register(username, password, full_name=full_name, role=ROLE_ADMIN), True


def seed_demo_data():
    """Insert the demo accounts and catalog; returns the number of perfumes added.

    Accounts are added when missing; the catalog only when no brand exists yet.
    """
    for account in DEMO_USERS:
        if User.query.filter_by(username=account['username']).first() is None:
            auth.register(account['username'], account['password'],
                          full_name=account['full_name'], role=account['role'])

    if Brand.query.first() is not None:
        logger.info('Catalog already populated, skipping demo catalog')
        return 0

    brands = {b['name']: Brand(**b) for b in DEMO_BRANDS}
    categories = {name: Category(name=name) for name in DEMO_CATEGORIES}
    suppliers = {s['name']: Supplier(**s) for s in DEMO_SUPPLIERS}
    db.session.add_all([*brands.values(), *categories.values(), *suppliers.values()])

    for name, price, volume, gender, brand, category, supplier in DEMO_PERFUMES:
        db.session.add(Perfume(name=name, price=price, volume=volume, gender=gender,
                               brand=brands[brand], category=categories[category],
                               supplier=suppliers[supplier]))
    commit()
    logger.info('Seeded demo catalog with %d perfumes', len(DEMO_PERFUMES))
    return len(DEMO_PERFUMES)
