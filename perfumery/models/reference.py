"""
Reference Data Models

Brands, categories and suppliers each own many perfumes. The class-level
field lists drive the shared create/edit screens.
"""

from perfumery.extensions import db


class Brand(db.Model):
    """Perfume house"""
    __tablename__ = 'brands'

    label = 'brand'
    fields = ('name', 'country')
    required_fields = ('name',)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    country = db.Column(db.String(100))

    def __repr__(self):
        return f'<Brand {self.name}>'


class Category(db.Model):
    """Fragrance family, e.g. floral or woody"""
    __tablename__ = 'categories'

    label = 'category'
    fields = ('name',)
    required_fields = ('name',)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)

    def __repr__(self):
        return f'<Category {self.name}>'


class Supplier(db.Model):
    """Wholesale supplier"""
    __tablename__ = 'suppliers'

    label = 'supplier'
    fields = ('name', 'contact')
    required_fields = ('name',)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    contact = db.Column(db.String(255))

    def __repr__(self):
        return f'<Supplier {self.name}>'
