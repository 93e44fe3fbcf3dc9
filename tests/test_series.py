"""
Tests for time-bucketed series.
"""
from datetime import datetime
from decimal import Decimal

from storefront.models import PaymentStatus
from storefront.services.order_store import OrderRecord
from storefront.services.series import (
    build_daily_series,
    build_monthly_series,
    build_month_revenue_series,
)

PAID = PaymentStatus.PAID.value
PENDING = PaymentStatus.PENDING.value


class TestDailySeries:
    """Tests for per-day buckets."""

    def test_buckets_by_day_and_counts_unpaid_orders(self):
        orders = [
            OrderRecord(datetime(2026, 10, 18, 9), Decimal('100'), PAID),
            OrderRecord(datetime(2026, 10, 18, 21), Decimal('40'), PENDING),
            OrderRecord(datetime(2026, 10, 19, 1), Decimal('60'), PAID),
        ]

        series = build_daily_series(orders)

        assert [(b.label, b.orders, b.revenue) for b in series] == [
            ('2026-10-18', 2, Decimal('100')),
            ('2026-10-19', 1, Decimal('60')),
        ]

    def test_keeps_most_recent_active_days(self):
        orders = [OrderRecord(datetime(2026, 10, day), Decimal('10'), PAID) for day in range(1, 11)]

        series = build_daily_series(orders, limit=7)

        assert len(series) == 7
        assert series[0].label == '2026-10-04'
        assert series[-1].label == '2026-10-10'

    def test_empty(self):
        assert build_daily_series([]) == []


class TestMonthlySeries:
    """Tests for trailing calendar-month buckets."""

    def test_always_twelve_buckets(self):
        series = build_monthly_series([], [], datetime(2026, 10, 19), months=12)

        assert len(series) == 12
        assert series[0].label == 'Nov'
        assert series[-1].label == 'Oct'
        assert all(b.orders == 0 and b.revenue == 0 and b.customers == 0 for b in series)

    def test_orders_revenue_and_signups(self):
        now = datetime(2026, 10, 19)
        orders = [
            OrderRecord(datetime(2026, 10, 2), Decimal('100'), PAID),
            OrderRecord(datetime(2026, 10, 3), Decimal('70'), PENDING),
            OrderRecord(datetime(2026, 9, 30, 23, 59), Decimal('25'), PAID),
            # Outside the trailing twelve months
            OrderRecord(datetime(2025, 10, 31), Decimal('999'), PAID),
        ]
        signups = [datetime(2026, 10, 5), datetime(2026, 10, 6), datetime(2025, 11, 1)]

        series = build_monthly_series(orders, signups, now)

        october, september, november = series[-1], series[-2], series[0]
        assert (october.orders, october.revenue, october.customers) == (2, Decimal('100'), 2)
        assert (september.orders, september.revenue) == (1, Decimal('25'))
        assert (november.orders, november.customers) == (0, 1)


class TestMonthRevenueSeries:
    """Tests for the year-to-date revenue chart."""

    def test_paid_only_months_with_sales(self):
        orders = [
            OrderRecord(datetime(2026, 1, 15), Decimal('10'), PAID),
            OrderRecord(datetime(2026, 1, 20), Decimal('15'), PAID),
            OrderRecord(datetime(2026, 2, 1), Decimal('50'), PENDING),
            OrderRecord(datetime(2026, 3, 1), Decimal('5'), PAID),
        ]

        series = build_month_revenue_series(orders)

        assert [(b.label, b.orders, b.revenue) for b in series] == [
            ('2026-01', 2, Decimal('25')),
            ('2026-03', 1, Decimal('5')),
        ]
