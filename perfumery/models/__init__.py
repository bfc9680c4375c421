"""
Models Package

Exports all models for easy importing.
"""

from perfumery.models.user import User, ROLE_ADMIN, ROLE_USER, ROLES
from perfumery.models.reference import Brand, Category, Supplier
from perfumery.models.perfume import Perfume, GENDERS
from perfumery.models.session import AuthSession

__all__ = [
    'User',
    'ROLE_ADMIN',
    'ROLE_USER',
    'ROLES',
    'Brand',
    'Category',
    'Supplier',
    'Perfume',
    'GENDERS',
    'AuthSession',
]
