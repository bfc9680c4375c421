"""
Perfume Model
"""

from perfumery.extensions import db
from perfumery.models.mixins import TimestampMixin

GENDERS = ('male', 'female', 'unisex')


class Perfume(TimestampMixin, db.Model):
    """Catalog item; always tied to one brand, category and supplier"""
    __tablename__ = 'perfumes'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    price = db.Column(db.Float, nullable=False)
    volume = db.Column(db.Integer, nullable=False)  # mL
    gender = db.Column(db.Enum(*GENDERS, name='perfume_gender'), nullable=False)
    in_stock = db.Column(db.Boolean, default=True, nullable=False)

    brand_id = db.Column(db.Integer, db.ForeignKey('brands.id'), nullable=False, index=True)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=False, index=True)
    supplier_id = db.Column(db.Integer, db.ForeignKey('suppliers.id'), nullable=False, index=True)

    brand = db.relationship('Brand', backref=db.backref('perfumes', lazy=True))
    category = db.relationship('Category', backref=db.backref('perfumes', lazy=True))
    supplier = db.relationship('Supplier', backref=db.backref('perfumes', lazy=True))

    def __repr__(self):
        return f'<Perfume {self.name} {self.volume}ml>'
