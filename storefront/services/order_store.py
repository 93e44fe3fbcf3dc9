"""
Order store: the read-only persistence handle used by the analytics engine.

The engine never touches ``db.session`` directly. It receives an OrderStore
and calls the narrow set of count/sum/average/group-by reads below, which
lets tests substitute an in-memory store.

Every method returns plain values or frozen dataclasses, never ORM
instances, so results stay valid after the worker's session is removed.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, distinct

from ..extensions import db
from ..models import User, UserRole, Category, Product, Review, Order, OrderItem, PaymentStatus
from .periods import Window


@dataclass(frozen=True)
class OrderRecord:
    """Minimal order projection for time-bucketed series."""
    created_at: datetime
    total: Decimal
    payment_status: str

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID.value


@dataclass(frozen=True)
class LineGroup:
    """Order lines aggregated per product."""
    product_id: Optional[int]
    quantity: int
    revenue: Decimal
    order_count: int


@dataclass(frozen=True)
class ProductInfo:
    id: int
    name: str
    price: Decimal
    image: Optional[str] = None


@dataclass(frozen=True)
class ReviewSummary:
    average_rating: float
    total_reviews: int


@dataclass(frozen=True)
class CategoryCount:
    category_id: int
    name: str
    product_count: int


@dataclass(frozen=True)
class RecentOrder:
    id: int
    order_number: str
    customer_name: Optional[str]
    customer_email: Optional[str]
    total: Decimal
    status: str
    payment_status: str
    item_count: int
    created_at: datetime


def to_decimal(value) -> Decimal:
    """Coerce a driver aggregate (Decimal, float, int or None) to Decimal."""
    if value is None:
        return Decimal('0')
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _status_value(status) -> str:
    return status.value if isinstance(status, PaymentStatus) else status


class OrderStore(ABC):
    """
    Read interface over orders, order lines, products, customers and reviews.

    Window arguments are half-open; ``None`` means all time. Sums and
    averages over an empty set return Decimal('0').
    """

    @abstractmethod
    def count_orders(self, window: Window = None, payment_status=None) -> int:
        ...

    @abstractmethod
    def sum_order_totals(self, window: Window = None, payment_status=None) -> Decimal:
        ...

    @abstractmethod
    def average_order_total(self, window: Window = None, payment_status=None) -> Decimal:
        ...

    @abstractmethod
    def count_customers(self, window: Window = None) -> int:
        """Customers (role CUSTOMER) created inside the window."""

    @abstractmethod
    def count_customers_with_orders(self, window: Window) -> int:
        """Distinct customers with at least one order inside the window."""

    @abstractmethod
    def count_products(self, in_stock: Optional[bool] = None) -> int:
        ...

    @abstractmethod
    def count_categories(self) -> int:
        ...

    @abstractmethod
    def count_users(self) -> int:
        ...

    @abstractmethod
    def group_order_lines(self, window: Window = None) -> List[LineGroup]:
        """One LineGroup per product, unordered. Window applies to the order date."""

    @abstractmethod
    def get_products(self, product_ids: Iterable[int]) -> Dict[int, ProductInfo]:
        """Products that still exist, keyed by id."""

    @abstractmethod
    def list_orders(self, window: Window) -> List[OrderRecord]:
        ...

    @abstractmethod
    def list_customer_signups(self, window: Window) -> List[datetime]:
        ...

    @abstractmethod
    def review_summary(self) -> ReviewSummary:
        ...

    @abstractmethod
    def products_by_category(self) -> List[CategoryCount]:
        ...

    @abstractmethod
    def recent_orders(self, limit: int = 10) -> List[RecentOrder]:
        ...


def _windowed(query, column, window: Optional[Window]):
    if window is not None:
        query = query.filter(column >= window.start, column < window.end)
    return query


class SQLAlchemyOrderStore(OrderStore):
    """
    OrderStore backed by Flask-SQLAlchemy.

    Must be called inside an app context; each fan-out worker pushes its own,
    so every call runs on that worker's scoped session.
    """

    def count_orders(self, window: Window = None, payment_status=None) -> int:
        query = _windowed(db.session.query(func.count(Order.id)), Order.created_at, window)
        if payment_status:
            query = query.filter(Order.payment_status == _status_value(payment_status))
        return query.scalar() or 0

    def sum_order_totals(self, window: Window = None, payment_status=None) -> Decimal:
        query = _windowed(
            db.session.query(func.coalesce(func.sum(Order.total), 0)),
            Order.created_at,
            window
        )
        if payment_status:
            query = query.filter(Order.payment_status == _status_value(payment_status))
        return to_decimal(query.scalar())

    def average_order_total(self, window: Window = None, payment_status=None) -> Decimal:
        query = _windowed(db.session.query(func.avg(Order.total)), Order.created_at, window)
        if payment_status:
            query = query.filter(Order.payment_status == _status_value(payment_status))
        return to_decimal(query.scalar())

    def count_customers(self, window: Window = None) -> int:
        query = db.session.query(func.count(User.id)).filter(
            User.role == UserRole.CUSTOMER.value
        )
        return _windowed(query, User.created_at, window).scalar() or 0

    def count_customers_with_orders(self, window: Window) -> int:
        query = db.session.query(func.count(distinct(Order.user_id))).join(
            User, Order.user_id == User.id
        ).filter(
            User.role == UserRole.CUSTOMER.value
        )
        return _windowed(query, Order.created_at, window).scalar() or 0

    def count_products(self, in_stock: Optional[bool] = None) -> int:
        query = db.session.query(func.count(Product.id))
        if in_stock is not None:
            query = query.filter(Product.in_stock == in_stock)
        return query.scalar() or 0

    def count_categories(self) -> int:
        return db.session.query(func.count(Category.id)).scalar() or 0

    def count_users(self) -> int:
        return db.session.query(func.count(User.id)).scalar() or 0

    def group_order_lines(self, window: Window = None) -> List[LineGroup]:
        query = db.session.query(
            OrderItem.product_id,
            func.coalesce(func.sum(OrderItem.quantity), 0).label('quantity'),
            func.coalesce(func.sum(OrderItem.price), 0).label('revenue'),
            func.count(distinct(OrderItem.order_id)).label('order_count')
        )
        if window is not None:
            query = _windowed(
                query.join(Order, OrderItem.order_id == Order.id),
                Order.created_at,
                window
            )
        rows = query.group_by(OrderItem.product_id).all()

        return [
            LineGroup(
                product_id=row.product_id,
                quantity=int(row.quantity or 0),
                revenue=to_decimal(row.revenue),
                order_count=int(row.order_count or 0)
            )
            for row in rows
        ]

    def get_products(self, product_ids: Iterable[int]) -> Dict[int, ProductInfo]:
        ids = [pid for pid in product_ids if pid is not None]
        if not ids:
            return {}

        products = Product.query.filter(Product.id.in_(ids)).all()
        return {
            product.id: ProductInfo(
                id=product.id,
                name=product.name,
                price=to_decimal(product.price),
                image=product.primary_image
            )
            for product in products
        }

    def list_orders(self, window: Window) -> List[OrderRecord]:
        query = _windowed(
            db.session.query(Order.created_at, Order.total, Order.payment_status),
            Order.created_at,
            window
        )
        return [
            OrderRecord(row.created_at, to_decimal(row.total), row.payment_status)
            for row in query.order_by(Order.created_at).all()
        ]

    def list_customer_signups(self, window: Window) -> List[datetime]:
        query = db.session.query(User.created_at).filter(
            User.role == UserRole.CUSTOMER.value
        )
        return [row.created_at for row in _windowed(query, User.created_at, window).all()]

    def review_summary(self) -> ReviewSummary:
        average, total = db.session.query(
            func.avg(Review.rating),
            func.count(Review.rating)
        ).one()
        return ReviewSummary(float(average or 0), int(total or 0))

    def products_by_category(self) -> List[CategoryCount]:
        rows = db.session.query(
            Category.id,
            Category.name,
            func.count(Product.id).label('product_count')
        ).outerjoin(
            Product, Product.category_id == Category.id
        ).group_by(Category.id, Category.name).order_by(Category.id).all()

        return [CategoryCount(row.id, row.name, int(row.product_count)) for row in rows]

    def recent_orders(self, limit: int = 10) -> List[RecentOrder]:
        rows = db.session.query(Order, User.name, User.email).outerjoin(
            User, Order.user_id == User.id
        ).order_by(Order.created_at.desc(), Order.id.desc()).limit(limit).all()

        order_ids = [order.id for order, _, _ in rows]
        item_counts = {}
        if order_ids:
            item_counts = dict(
                db.session.query(OrderItem.order_id, func.count(OrderItem.id)).filter(
                    OrderItem.order_id.in_(order_ids)
                ).group_by(OrderItem.order_id).all()
            )

        return [
            RecentOrder(
                id=order.id,
                order_number=order.order_number,
                customer_name=name,
                customer_email=email,
                total=to_decimal(order.total),
                status=order.status,
                payment_status=order.payment_status,
                item_count=item_counts.get(order.id, 0),
                created_at=order.created_at
            )
            for order, name, email in rows
        ]
