"""
Shared fixtures for the Springz admin service tests.

- app / client: Flask app on in-memory SQLite
- admin_headers / customer_headers: signed session tokens
- create_order / create_customer / create_product: persisted test data
- memory_store: in-memory OrderStore for engine-level tests
"""
import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

import jwt
import pytest

from storefront import create_app
from storefront.extensions import db
from storefront.models import (
    User, UserRole, Product, Order, OrderItem, PaymentStatus, OrderStatus
)
from storefront.services.order_store import (
    OrderStore, OrderRecord, LineGroup, ProductInfo, ReviewSummary, CategoryCount, RecentOrder, to_decimal
)

TEST_TOKEN_SECRET = 'testing-identity-secret'


# ==================== FLASK APP ====================

@pytest.fixture
def app():
    """Create test application."""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_token(role='ADMIN', sub='1', email='admin@springz.com', expires_in=3600, secret=TEST_TOKEN_SECRET):
    payload = {
        'sub': sub,
        'email': email,
        'role': role,
        'exp': datetime.utcnow() + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret, algorithm='HS256')


@pytest.fixture
def make_token():
    """Factory for signed session tokens."""
    return _make_token


@pytest.fixture
def admin_headers():
    return {'Authorization': f'Bearer {_make_token()}'}


@pytest.fixture
def customer_headers():
    return {'Authorization': f"Bearer {_make_token(role='CUSTOMER', sub='2', email='demo@springz.com')}"}


# ==================== PERSISTED DATA ====================

@pytest.fixture
def create_customer(app):
    """Factory: persist a customer and return its id."""
    def _create(created_at=None, role=UserRole.CUSTOMER):
        unique_id = str(uuid.uuid4())[:8]
        user = User(
            name=f'Customer {unique_id}',
            email=f'customer-{unique_id}@example.com',
            role=role.value,
            created_at=created_at or datetime.utcnow()
        )
        db.session.add(user)
        db.session.commit()
        return user.id
    return _create


@pytest.fixture
def create_product(app):
    """Factory: persist a product and return its id."""
    def _create(name='Elite Protein', price='2499', in_stock=True, category_id=None):
        unique_id = str(uuid.uuid4())[:8]
        product = Product(
            name=name,
            slug=f'{name.lower().replace(" ", "-")}-{unique_id}',
            price=Decimal(price),
            images=[f'/{unique_id}.png'],
            in_stock=in_stock,
            category_id=category_id
        )
        db.session.add(product)
        db.session.commit()
        return product.id
    return _create


@pytest.fixture
def create_order(app, create_customer):
    """
    Factory: persist an order and return its id.

    ``lines`` is a list of (product_id, quantity, price) tuples.
    """
    def _create(total, payment_status=PaymentStatus.PAID, created_at=None, user_id=None, lines=()):
        unique_id = str(uuid.uuid4())[:8]
        order = Order(
            order_number=f'SPZ-{unique_id}',
            user_id=user_id or create_customer(created_at=datetime.utcnow() - timedelta(days=900)),
            total=Decimal(str(total)),
            status=OrderStatus.PROCESSING.value,
            payment_status=payment_status.value,
            created_at=created_at or datetime.utcnow()
        )
        db.session.add(order)
        db.session.flush()
        for product_id, quantity, price in lines:
            db.session.add(OrderItem(
                order_id=order.id,
                product_id=product_id,
                quantity=quantity,
                price=Decimal(str(price))
            ))
        db.session.commit()
        return order.id
    return _create


# ==================== IN-MEMORY STORE ====================

class InMemoryOrderStore(OrderStore):
    """
    OrderStore over plain Python lists.

    Records are SimpleNamespace objects with the same attribute names as the
    models. ``fail_on`` names a method that raises RuntimeError when called.
    """

    def __init__(self, users=(), orders=(), lines=(), products=(), categories=(), ratings=(), fail_on=None):
        self.users = list(users)
        self.orders = list(orders)
        self.lines = list(lines)
        self.products = list(products)
        self.categories = list(categories)
        self.ratings = list(ratings)
        self.fail_on = fail_on
        self.calls = []

    def _track(self, name):
        self.calls.append(name)
        if self.fail_on == name:
            raise RuntimeError(f'store failure in {name}')

    @staticmethod
    def _in(window, ts):
        return window is None or window.contains(ts)

    def _status_ok(self, order, payment_status):
        if payment_status is None:
            return True
        value = payment_status.value if isinstance(payment_status, PaymentStatus) else payment_status
        return order.payment_status == value

    def _orders(self, window, payment_status=None):
        return [
            o for o in self.orders
            if self._in(window, o.created_at) and self._status_ok(o, payment_status)
        ]

    def _customers(self):
        return [u for u in self.users if u.role == UserRole.CUSTOMER.value]

    def count_orders(self, window=None, payment_status=None):
        self._track('count_orders')
        return len(self._orders(window, payment_status))

    def sum_order_totals(self, window=None, payment_status=None):
        self._track('sum_order_totals')
        return sum((to_decimal(o.total) for o in self._orders(window, payment_status)), Decimal('0'))

    def average_order_total(self, window=None, payment_status=None):
        self._track('average_order_total')
        orders = self._orders(window, payment_status)
        if not orders:
            return Decimal('0')
        return sum((to_decimal(o.total) for o in orders), Decimal('0')) / len(orders)

    def count_customers(self, window=None):
        self._track('count_customers')
        return len([u for u in self._customers() if self._in(window, u.created_at)])

    def count_customers_with_orders(self, window):
        self._track('count_customers_with_orders')
        customer_ids = {u.id for u in self._customers()}
        return len({o.user_id for o in self._orders(window) if o.user_id in customer_ids})

    def count_products(self, in_stock=None):
        self._track('count_products')
        return len([p for p in self.products if in_stock is None or p.in_stock == in_stock])

    def count_categories(self):
        self._track('count_categories')
        return len(self.categories)

    def count_users(self):
        self._track('count_users')
        return len(self.users)

    def group_order_lines(self, window=None):
        self._track('group_order_lines')
        order_dates = {o.id: o.created_at for o in self.orders}
        groups = {}
        for line in self.lines:
            if not self._in(window, order_dates[line.order_id]):
                continue
            group = groups.setdefault(line.product_id, {'quantity': 0, 'revenue': Decimal('0'), 'orders': set()})
            group['quantity'] += line.quantity
            group['revenue'] += to_decimal(line.price)
            group['orders'].add(line.order_id)
        return [
            LineGroup(pid, g['quantity'], g['revenue'], len(g['orders']))
            for pid, g in groups.items()
        ]

    def get_products(self, product_ids):
        self._track('get_products')
        wanted = set(product_ids)
        return {
            p.id: ProductInfo(p.id, p.name, to_decimal(p.price), (p.images or [None])[0])
            for p in self.products if p.id in wanted
        }

    def list_orders(self, window):
        self._track('list_orders')
        return [
            OrderRecord(o.created_at, to_decimal(o.total), o.payment_status)
            for o in sorted(self._orders(window), key=lambda o: o.created_at)
        ]

    def list_customer_signups(self, window):
        self._track('list_customer_signups')
        return [u.created_at for u in self._customers() if self._in(window, u.created_at)]

    def review_summary(self):
        self._track('review_summary')
        if not self.ratings:
            return ReviewSummary(0.0, 0)
        return ReviewSummary(sum(self.ratings) / len(self.ratings), len(self.ratings))

    def products_by_category(self):
        self._track('products_by_category')
        return [
            CategoryCount(c.id, c.name, len([p for p in self.products if p.category_id == c.id]))
            for c in self.categories
        ]

    def recent_orders(self, limit=10):
        self._track('recent_orders')
        users = {u.id: u for u in self.users}
        ordered = sorted(self.orders, key=lambda o: (o.created_at, o.id), reverse=True)[:limit]
        return [
            RecentOrder(
                id=o.id,
                order_number=o.order_number,
                customer_name=getattr(users.get(o.user_id), 'name', None),
                customer_email=getattr(users.get(o.user_id), 'email', None),
                total=to_decimal(o.total),
                status=o.status,
                payment_status=o.payment_status,
                item_count=len([line for line in self.lines if line.order_id == o.id]),
                created_at=o.created_at
            )
            for o in ordered
        ]


def order(id, created_at, total, payment_status=PaymentStatus.PAID, user_id=1):
    return SimpleNamespace(
        id=id,
        order_number=f'SPZ-{100000 + id}',
        user_id=user_id,
        created_at=created_at,
        total=Decimal(str(total)),
        payment_status=payment_status.value,
        status=OrderStatus.PROCESSING.value
    )


def customer(id, created_at, role=UserRole.CUSTOMER):
    return SimpleNamespace(id=id, name=f'Customer {id}', email=f'c{id}@example.com',
                           role=role.value, created_at=created_at)


def line(order_id, product_id, quantity, price):
    return SimpleNamespace(order_id=order_id, product_id=product_id, quantity=quantity, price=Decimal(str(price)))


def product(id, name, price='100', in_stock=True, category_id=None):
    return SimpleNamespace(id=id, name=name, price=Decimal(price), in_stock=in_stock,
                           category_id=category_id, images=[f'/{id}.png'])


@pytest.fixture
def records():
    """Record builders for InMemoryOrderStore."""
    return SimpleNamespace(order=order, customer=customer, line=line, product=product,
                           category=lambda id, name: SimpleNamespace(id=id, name=name))


@pytest.fixture
def memory_store():
    """Factory for InMemoryOrderStore."""
    return InMemoryOrderStore


@pytest.fixture
def now():
    """Fixed reference instant for engine tests."""
    return datetime(2026, 10, 19, 12, 0, 0)
