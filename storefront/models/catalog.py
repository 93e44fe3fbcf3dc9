"""
Catalog models: Category, Product and Review.
"""
from datetime import datetime
from decimal import Decimal
from ..extensions import db


class Category(db.Model):
    """Product category (e.g. 'Premium Plant Proteins')."""
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    slug = db.Column(db.String(100), nullable=False, unique=True)
    description = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    products = db.relationship('Product', backref='category', lazy='dynamic')

    def __repr__(self):
        return f'<Category {self.slug}>'


class Product(db.Model):
    """
    Sellable product.

    ``price`` is the current list price. Order lines keep their own
    historical price, so this value is only used for display.
    """
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'))

    name = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, unique=True)
    price = db.Column(db.Numeric(10, 2), nullable=False, default=Decimal('0'))
    images = db.Column(db.JSON, default=list)  # ["/elite-protein.png", ...]
    in_stock = db.Column(db.Boolean, default=True, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    reviews = db.relationship('Review', backref='product', lazy='dynamic')

    def __repr__(self):
        return f'<Product {self.slug}>'

    @property
    def primary_image(self):
        return self.images[0] if self.images else None


class Review(db.Model):
    """Customer product review, rating 1-5."""
    __tablename__ = 'reviews'

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id', ondelete='CASCADE'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)

    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_review_rating_range'),
    )

    def __repr__(self):
        return f'<Review {self.product_id}:{self.rating}>'
