"""
Order and OrderItem models.
"""
from datetime import datetime
from decimal import Decimal
from enum import Enum
from ..extensions import db


class OrderStatus(str, Enum):
    """Fulfillment status."""
    PENDING = 'PENDING'
    PROCESSING = 'PROCESSING'
    SHIPPED = 'SHIPPED'
    DELIVERED = 'DELIVERED'
    CANCELLED = 'CANCELLED'


class PaymentStatus(str, Enum):
    """Payment status. Only PAID counts toward revenue."""
    PENDING = 'PENDING'
    PAID = 'PAID'
    FAILED = 'FAILED'
    REFUNDED = 'REFUNDED'


class Order(db.Model):
    """Customer order."""
    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    order_number = db.Column(db.String(32), nullable=False, unique=True)  # SPZ-100001
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    total = db.Column(db.Numeric(12, 2), nullable=False, default=Decimal('0'))
    status = db.Column(db.String(20), nullable=False, default=OrderStatus.PENDING.value)
    payment_status = db.Column(db.String(20), nullable=False, default=PaymentStatus.PENDING.value, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    items = db.relationship('OrderItem', backref='order', lazy='dynamic', cascade='all, delete-orphan')

    __table_args__ = (
        db.CheckConstraint('total >= 0', name='ck_order_total_non_negative'),
    )

    def __repr__(self):
        return f'<Order {self.order_number}>'

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID.value


class OrderItem(db.Model):
    """
    One line of an order.

    ``price`` is the price at time of purchase and never follows later
    changes to the product. ``product_id`` is nulled if the product is deleted.
    """
    __tablename__ = 'order_items'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id', ondelete='CASCADE'), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id', ondelete='SET NULL'), index=True)

    quantity = db.Column(db.Integer, nullable=False, default=1)
    price = db.Column(db.Numeric(10, 2), nullable=False)

    product = db.relationship('Product')

    __table_args__ = (
        db.CheckConstraint('quantity > 0', name='ck_order_item_quantity_positive'),
    )

    def __repr__(self):
        return f'<OrderItem {self.order_id}:{self.product_id}x{self.quantity}>'
