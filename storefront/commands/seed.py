"""
CLI Commands for demo data.

Usage:
    flask seed demo                      # Admin, demo customer, catalog, 120 orders
    flask seed demo --orders 500 --seed 7
    flask seed demo --reset              # Drop existing storefront rows first
"""
import random
from datetime import datetime, timedelta
from decimal import Decimal

import click
from flask.cli import with_appcontext

from ..extensions import db
from ..models import (
    User, UserRole, Category, Product, Review,
    Order, OrderItem, OrderStatus, PaymentStatus
)

DEMO_CATEGORIES = [
    ('Premium Plant Proteins', 'premium-plant-proteins',
     'High-quality plant-based protein powders for optimal nutrition and muscle building'),
    ('Functional Foods', 'functional-foods',
     'Nutritionally enhanced foods that provide health benefits beyond basic nutrition'),
    ('Guilt-Free Snacks', 'guilt-free-snacks',
     'Healthy, delicious snacks that satisfy your cravings without compromise'),
]

# (name, slug, price, category slug)
DEMO_PRODUCTS = [
    ('Elite Protein', 'elite-protein', '2499', 'premium-plant-proteins'),
    ('Native Protein Classic', 'native-protein-classic', '1999', 'premium-plant-proteins'),
    ('Native Protein Chocolate', 'native-protein-chocolate', '2199', 'premium-plant-proteins'),
    ('Nuchhi-Nunde', 'nuchhi-nunde', '899', 'functional-foods'),
    ('Native Protein Peanut Butter Powder Sweetened',
     'native-protein-peanut-butter-powder-sweetened', '799', 'functional-foods'),
    ('Native Protein Peanut Butter Powder Hot and Spicy',
     'native-protein-peanut-butter-powder-hot-spicy', '849', 'functional-foods'),
    ('Kodubale', 'kodubale', '299', 'guilt-free-snacks'),
]

DEMO_ADMIN_EMAIL = 'admin@springz.com'

# Weighted towards settled orders
PAYMENT_WEIGHTS = [
    (PaymentStatus.PAID, 70),
    (PaymentStatus.PENDING, 15),
    (PaymentStatus.FAILED, 10),
    (PaymentStatus.REFUNDED, 5),
]


@click.group('seed')
def seed_cli():
    """Demo data commands."""
    pass


def _reset():
    for model in (OrderItem, Order, Review, Product, Category, User):
        model.query.delete()
    db.session.commit()


@seed_cli.command('demo')
@click.option('--orders', 'order_count', type=int, default=120, help='Number of orders to generate')
@click.option('--customers', 'customer_count', type=int, default=25, help='Number of customers to generate')
@click.option('--seed', 'rng_seed', type=int, default=42, help='Random seed for repeatable data')
@click.option('--reset', is_flag=True, help='Delete existing storefront rows first')
@with_appcontext
def seed_demo(order_count, customer_count, rng_seed, reset):
    """
    Populate the database with a demo catalog and a year of order history.
    """
    rng = random.Random(rng_seed)
    now = datetime.utcnow()

    db.create_all()

    if reset:
        click.echo('Cleaning existing data...')
        _reset()
    elif User.query.filter_by(email=DEMO_ADMIN_EMAIL).first():
        click.echo('Demo data already present, use --reset to reseed')
        return

    admin = User(name='Admin User', email=DEMO_ADMIN_EMAIL, role=UserRole.ADMIN.value)
    db.session.add(admin)

    customers = [
        User(
            name='Demo Customer',
            email='demo@springz.com',
            phone='+91 9876543210',
            role=UserRole.CUSTOMER.value,
            created_at=now - timedelta(days=400)
        )
    ]
    for i in range(1, customer_count):
        customers.append(User(
            name=f'Customer {i}',
            email=f'customer{i}@example.com',
            role=UserRole.CUSTOMER.value,
            created_at=now - timedelta(days=rng.randint(0, 365), minutes=rng.randint(0, 1439))
        ))
    db.session.add_all(customers)

    categories = {}
    for name, slug, description in DEMO_CATEGORIES:
        categories[slug] = Category(name=name, slug=slug, description=description)
    db.session.add_all(categories.values())

    products = []
    for name, slug, price, category_slug in DEMO_PRODUCTS:
        products.append(Product(
            name=name,
            slug=slug,
            price=Decimal(price),
            images=[f'/{slug}.png'],
            category=categories[category_slug],
            in_stock=True
        ))
    db.session.add_all(products)
    db.session.flush()
    click.echo(f'Created admin, {len(customers)} customers, {len(products)} products')

    statuses = [status for status, _ in PAYMENT_WEIGHTS]
    weights = [weight for _, weight in PAYMENT_WEIGHTS]

    for number in range(order_count):
        customer = rng.choice(customers)
        created_at = now - timedelta(days=rng.randint(0, 364), minutes=rng.randint(0, 1439))
        payment_status = rng.choices(statuses, weights)[0]

        order = Order(
            order_number=f'SPZ-{100001 + number}',
            user=customer,
            payment_status=payment_status.value,
            status=(OrderStatus.DELIVERED if payment_status == PaymentStatus.PAID
                    else OrderStatus.CANCELLED if payment_status == PaymentStatus.FAILED
                    else OrderStatus.PENDING).value,
            created_at=created_at
        )

        total = Decimal('0')
        for product in rng.sample(products, rng.randint(1, 3)):
            quantity = rng.randint(1, 3)
            db.session.add(OrderItem(order=order, product=product, quantity=quantity, price=product.price))
            total += product.price * quantity
        order.total = total
        db.session.add(order)

    for product in products:
        for reviewer in rng.sample(customers, min(3, len(customers))):
            db.session.add(Review(product=product, user=reviewer, rating=rng.randint(3, 5)))

    db.session.commit()
    click.echo(f'Created {order_count} orders')


def init_app(app):
    app.cli.add_command(seed_cli)
