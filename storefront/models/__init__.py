"""
Database models for the Springz storefront.
Read by the admin analytics engine; written by the storefront itself.
"""
from .user import User, UserRole
from .catalog import Category, Product, Review
from .order import Order, OrderItem, OrderStatus, PaymentStatus

__all__ = [
    'User',
    'UserRole',
    'Category',
    'Product',
    'Review',
    'Order',
    'OrderItem',
    'OrderStatus',
    'PaymentStatus',
]
