"""
Scalar metric aggregation over a time window.
"""
from decimal import Decimal
from enum import Enum
from typing import Union

from ..models import PaymentStatus
from .order_store import OrderStore, to_decimal
from .periods import Window


class Metric(str, Enum):
    """Scalar metrics the aggregator knows how to compute."""
    ORDER_COUNT = 'order_count'
    PAID_REVENUE = 'paid_revenue'
    CUSTOMER_COUNT = 'customer_count'
    AVERAGE_ORDER_VALUE = 'average_order_value'


# Money metrics only count settled orders unless told otherwise
_PAID_BY_DEFAULT = {Metric.PAID_REVENUE, Metric.AVERAGE_ORDER_VALUE}


class MetricAggregator:
    """
    Runs one count/sum/average read against the store.

    Usage:
        aggregator = MetricAggregator(store)
        revenue = aggregator.aggregate(Metric.PAID_REVENUE, period.current)
    """

    def __init__(self, store: OrderStore):
        self.store = store

    def aggregate(
        self,
        metric: Metric,
        window: Window = None,
        payment_status: PaymentStatus = None
    ) -> Union[int, Decimal]:
        """
        Compute a metric over a window (None for all time).

        Returns:
            int for counts, Decimal for money. Empty sets give 0, never None.
        """
        metric = Metric(metric)
        if payment_status is None and metric in _PAID_BY_DEFAULT:
            payment_status = PaymentStatus.PAID

        if metric == Metric.ORDER_COUNT:
            return int(self.store.count_orders(window, payment_status=payment_status) or 0)
        if metric == Metric.PAID_REVENUE:
            return to_decimal(self.store.sum_order_totals(window, payment_status=payment_status))
        if metric == Metric.AVERAGE_ORDER_VALUE:
            return to_decimal(self.store.average_order_total(window, payment_status=payment_status))
        return int(self.store.count_customers(window) or 0)
