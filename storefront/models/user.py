"""
User model.

Customers and administrators share one table; the role column tells them
apart. Credentials live with the identity provider, not here.
"""
from datetime import datetime
from enum import Enum
from ..extensions import db


class UserRole(str, Enum):
    """Account roles."""
    CUSTOMER = 'CUSTOMER'
    ADMIN = 'ADMIN'


class User(db.Model):
    """Storefront account."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255))
    email = db.Column(db.String(255), nullable=False, unique=True)
    phone = db.Column(db.String(50))
    role = db.Column(db.String(20), nullable=False, default=UserRole.CUSTOMER.value, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    orders = db.relationship('Order', backref='user', lazy='dynamic')
    reviews = db.relationship('Review', backref='user', lazy='dynamic')

    def __repr__(self):
        return f'<User {self.email}>'

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'created_at': self.created_at.isoformat() if self.created_at else None
        }
