"""
Time-bucketed series for the admin charts.

Orders are counted in every bucket; revenue only accumulates for PAID
orders. Buckets are emitted oldest first.
"""
from collections import OrderedDict
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List

from .order_store import OrderRecord
from .periods import trailing_month_windows

MONTH_NAMES = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']


@dataclass
class Bucket:
    label: str
    orders: int = 0
    revenue: Decimal = Decimal('0')
    customers: int = 0


def day_key(ts: datetime) -> str:
    return ts.strftime('%Y-%m-%d')


def month_key(ts: datetime) -> str:
    return ts.strftime('%Y-%m')


def build_daily_series(orders: Iterable[OrderRecord], limit: int = 7) -> List[Bucket]:
    """
    Per-day order counts and paid revenue for the days that had orders.

    Only the most recent ``limit`` active days are kept.
    """
    buckets = {}
    for order in orders:
        key = day_key(order.created_at)
        bucket = buckets.setdefault(key, Bucket(key))
        bucket.orders += 1
        if order.is_paid:
            bucket.revenue += order.total

    ordered = [buckets[key] for key in sorted(buckets)]
    return ordered[-limit:] if limit else []


def build_monthly_series(
    orders: Iterable[OrderRecord],
    signups: Iterable[datetime],
    now: datetime,
    months: int = 12
) -> List[Bucket]:
    """
    Exactly ``months`` calendar-month buckets ending with the current month.

    Months without activity are kept with zero values. Records outside the
    trailing months are ignored.
    """
    buckets = OrderedDict()
    for window in trailing_month_windows(now, months):
        buckets[month_key(window.start)] = Bucket(MONTH_NAMES[window.start.month - 1])

    for order in orders:
        bucket = buckets.get(month_key(order.created_at))
        if bucket is None:
            continue
        bucket.orders += 1
        if order.is_paid:
            bucket.revenue += order.total

    for created_at in signups:
        bucket = buckets.get(month_key(created_at))
        if bucket is not None:
            bucket.customers += 1

    return list(buckets.values())


def build_month_revenue_series(orders: Iterable[OrderRecord]) -> List[Bucket]:
    """Paid revenue and paid order count per ``YYYY-MM``, months with sales only."""
    buckets = {}
    for order in orders:
        if not order.is_paid:
            continue
        key = month_key(order.created_at)
        bucket = buckets.setdefault(key, Bucket(key))
        bucket.orders += 1
        bucket.revenue += order.total

    return [buckets[key] for key in sorted(buckets)]
