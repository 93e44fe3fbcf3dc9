"""
Admin Analytics Service.

Composes the two admin reports:
- Analytics report (range selectable): overview, growth trends, monthly and
  daily series, product performance, customer statistics
- Stats report (fixed windows): this month vs last calendar month, catalog
  counts, top sellers, review average, recent activity

Every aggregate in a report is independent, so all of them are issued
through one concurrent fan-out and joined before composing. Product name
lookup is the only read that depends on an earlier result.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List

from ..utils.exceptions import AnalyticsError
from .fanout import QueryFanOut
from .growth import calculate_growth, round_half_up
from .metrics import Metric, MetricAggregator
from .order_store import OrderStore
from .periods import (
    resolve_period,
    trailing_days,
    trailing_month_windows,
    calendar_month_windows,
    year_to_date,
    Window,
)
from .ranking import RankingKey, TopNRanker, RankedProduct
from .series import Bucket, build_daily_series, build_monthly_series, build_month_revenue_series

logger = logging.getLogger(__name__)

DAILY_WINDOW_DAYS = 30
DAILY_SERIES_LENGTH = 7
MONTHLY_SERIES_LENGTH = 12
PRODUCT_PERFORMANCE_LIMIT = 10
TOP_SELLING_LIMIT = 5
RECENT_ORDERS_LIMIT = 10


def _money(value) -> float:
    return float(value or 0)


def _one_decimal(value) -> float:
    return round_half_up(float(value) * 10) / 10


class AnalyticsService:
    """
    Builds admin analytics reports from an injected OrderStore.

    Usage:
        service = AnalyticsService(SQLAlchemyOrderStore(), fanout)
        report = service.get_analytics_report('30days')
        stats = service.get_stats_report()
    """

    def __init__(self, store: OrderStore, fanout: QueryFanOut = None, now: datetime = None):
        self.store = store
        self.fanout = fanout or QueryFanOut()
        self.now = now
        self.metrics = MetricAggregator(store)
        self.ranker = TopNRanker(store)

    def _now(self) -> datetime:
        return self.now or datetime.utcnow()

    def _collect(self, tasks: Dict[str, Any]) -> Dict[str, Any]:
        """Run a fan-out; any failure aborts the report."""
        try:
            return self.fanout.run(tasks)
        except AnalyticsError:
            raise
        except Exception as e:
            raise AnalyticsError(original_error=e) from e

    def _rank(self, groups, limit: int, key: RankingKey) -> List[RankedProduct]:
        try:
            return self.ranker.rank(groups, limit, key)
        except Exception as e:
            raise AnalyticsError(original_error=e) from e

    # ==================== ANALYTICS REPORT ====================

    def get_analytics_report(self, range_token: str = None, strict: bool = False) -> Dict[str, Any]:
        """
        Range-selectable analytics report.

        Args:
            range_token: '7days', '30days', '90days' or '12months'
            strict: Raise InvalidRangeError on unknown tokens instead of defaulting

        Raises:
            InvalidRangeError: strict mode and unknown token
            AnalyticsError: any store failure
        """
        now = self._now()
        period = resolve_period(range_token, now=now, strict=strict)
        current, previous = period.current, period.previous
        months = trailing_month_windows(now, MONTHLY_SERIES_LENGTH)
        monthly_window = Window(months[0].start, now)
        aggregate = self.metrics.aggregate

        results = self._collect({
            'orders_current': lambda: aggregate(Metric.ORDER_COUNT, current),
            'orders_previous': lambda: aggregate(Metric.ORDER_COUNT, previous),
            'revenue_current': lambda: aggregate(Metric.PAID_REVENUE, current),
            'revenue_previous': lambda: aggregate(Metric.PAID_REVENUE, previous),
            'customers_current': lambda: aggregate(Metric.CUSTOMER_COUNT, current),
            'customers_previous': lambda: aggregate(Metric.CUSTOMER_COUNT, previous),
            'average_order_value': lambda: aggregate(Metric.AVERAGE_ORDER_VALUE, current),
            'returning_customers': lambda: self.store.count_customers_with_orders(current),
            'total_customers': lambda: aggregate(Metric.CUSTOMER_COUNT),
            'total_products': lambda: self.store.count_products(in_stock=True),
            'reviews': lambda: self.store.review_summary(),
            'product_sales': lambda: self.store.group_order_lines(),
            'daily_orders': lambda: self.store.list_orders(trailing_days(now, DAILY_WINDOW_DAYS)),
            'monthly_orders': lambda: self.store.list_orders(monthly_window),
            'monthly_signups': lambda: self.store.list_customer_signups(monthly_window),
        })

        product_performance = self._rank(
            results['product_sales'], PRODUCT_PERFORMANCE_LIMIT, RankingKey.REVENUE
        )
        daily = build_daily_series(results['daily_orders'], DAILY_SERIES_LENGTH)
        monthly = build_monthly_series(
            results['monthly_orders'], results['monthly_signups'], now, MONTHLY_SERIES_LENGTH
        )

        orders_current = results['orders_current']
        new_customers = results['customers_current']
        conversion_rate = (orders_current / new_customers * 100) if new_customers > 0 else 0

        logger.debug(
            f"Analytics report {period.range_key}: {orders_current} orders, "
            f"{results['revenue_current']} paid revenue"
        )

        return {
            'range': period.range_key,
            'dateRange': current.to_dict(),
            'overview': {
                'totalRevenue': _money(results['revenue_current']),
                'totalOrders': orders_current,
                'totalCustomers': results['total_customers'],
                'totalProducts': results['total_products'],
                'averageRating': _one_decimal(results['reviews'].average_rating),
            },
            'trends': {
                'revenueGrowth': calculate_growth(results['revenue_current'], results['revenue_previous']),
                'orderGrowth': calculate_growth(orders_current, results['orders_previous']),
                'customerGrowth': calculate_growth(new_customers, results['customers_previous']),
            },
            'salesData': [self._month_point(bucket) for bucket in monthly],
            'productPerformance': [self._performance_point(p) for p in product_performance],
            'recentOrders': [self._day_point(bucket) for bucket in daily],
            'customerStats': {
                'newCustomers': new_customers,
                'returningCustomers': results['returning_customers'],
                'averageOrderValue': _money(results['average_order_value']),
                'conversionRate': _one_decimal(conversion_rate),
            },
        }

    @staticmethod
    def _month_point(bucket: Bucket) -> dict:
        return {
            'month': bucket.label,
            'sales': _money(bucket.revenue),
            'orders': bucket.orders,
            'customers': bucket.customers,
        }

    @staticmethod
    def _day_point(bucket: Bucket) -> dict:
        return {
            'date': bucket.label,
            'orders': bucket.orders,
            'revenue': _money(bucket.revenue),
        }

    @staticmethod
    def _performance_point(product: RankedProduct) -> dict:
        return {
            'productId': product.product_id,
            'name': product.name,
            'sales': _money(product.revenue),
            'orders': product.order_count,
            'quantity': product.quantity,
            'percentage': product.percentage,
        }

    # ==================== STATS REPORT ====================

    def get_stats_report(self) -> Dict[str, Any]:
        """
        Fixed-window dashboard statistics: this month vs last calendar month.

        Raises:
            AnalyticsError: any store failure
        """
        now = self._now()
        this_month, last_month = calendar_month_windows(now)
        aggregate = self.metrics.aggregate

        results = self._collect({
            'total_products': lambda: self.store.count_products(),
            'total_categories': lambda: self.store.count_categories(),
            'total_users': lambda: self.store.count_users(),
            'total_customers': lambda: aggregate(Metric.CUSTOMER_COUNT),
            'total_orders': lambda: aggregate(Metric.ORDER_COUNT),
            'total_revenue': lambda: aggregate(Metric.PAID_REVENUE),
            'revenue_this_month': lambda: aggregate(Metric.PAID_REVENUE, this_month),
            'revenue_last_month': lambda: aggregate(Metric.PAID_REVENUE, last_month),
            'orders_this_month': lambda: aggregate(Metric.ORDER_COUNT, this_month),
            'orders_last_month': lambda: aggregate(Metric.ORDER_COUNT, last_month),
            'customers_this_month': lambda: aggregate(Metric.CUSTOMER_COUNT, this_month),
            'customers_last_month': lambda: aggregate(Metric.CUSTOMER_COUNT, last_month),
            'average_order_value': lambda: aggregate(Metric.AVERAGE_ORDER_VALUE),
            'product_sales': lambda: self.store.group_order_lines(),
            'recent_orders': lambda: self.store.recent_orders(RECENT_ORDERS_LIMIT),
            'year_orders': lambda: self.store.list_orders(year_to_date(now)),
            'categories': lambda: self.store.products_by_category(),
            'reviews': lambda: self.store.review_summary(),
        })

        top_selling = self._rank(results['product_sales'], TOP_SELLING_LIMIT, RankingKey.QUANTITY)
        monthly_revenue = build_month_revenue_series(results['year_orders'])
        total_revenue = _money(results['total_revenue'])
        reviews = results['reviews']

        return {
            'overview': {
                'totalProducts': results['total_products'],
                'totalCategories': results['total_categories'],
                'totalUsers': results['total_users'],
                'totalCustomers': results['total_customers'],
                'totalOrders': results['total_orders'],
                'totalRevenue': total_revenue,
            },
            'revenue': {
                'total': total_revenue,
                'thisMonth': _money(results['revenue_this_month']),
                'lastMonth': _money(results['revenue_last_month']),
                'growth': calculate_growth(results['revenue_this_month'], results['revenue_last_month']),
                'averageOrderValue': _money(results['average_order_value']),
            },
            'orders': {
                'total': results['total_orders'],
                'thisMonth': results['orders_this_month'],
                'lastMonth': results['orders_last_month'],
                'growth': calculate_growth(results['orders_this_month'], results['orders_last_month']),
            },
            'customers': {
                'total': results['total_customers'],
                'newThisMonth': results['customers_this_month'],
                'newLastMonth': results['customers_last_month'],
                'growth': calculate_growth(results['customers_this_month'], results['customers_last_month']),
            },
            'products': {
                'total': results['total_products'],
                'byCategory': [
                    {
                        'categoryId': category.category_id,
                        'categoryName': category.name,
                        'productCount': category.product_count,
                    }
                    for category in results['categories']
                ],
                'topSelling': [
                    {
                        'productId': product.product_id,
                        'name': product.name,
                        'price': _money(product.price),
                        'image': product.image,
                        'totalSold': product.quantity,
                        'orderCount': product.order_count,
                        'revenue': _money(product.revenue),
                        'percentage': product.percentage,
                    }
                    for product in top_selling
                ],
            },
            'reviews': {
                'averageRating': _one_decimal(reviews.average_rating),
                'totalReviews': reviews.total_reviews,
            },
            'charts': {
                'monthlyRevenue': [
                    {'month': bucket.label, 'revenue': _money(bucket.revenue), 'orders': bucket.orders}
                    for bucket in monthly_revenue
                ],
            },
            'recentActivity': {
                'recentOrders': [
                    {
                        'id': order.id,
                        'orderNumber': order.order_number,
                        'customerName': order.customer_name,
                        'customerEmail': order.customer_email,
                        'total': _money(order.total),
                        'status': order.status,
                        'paymentStatus': order.payment_status,
                        'itemCount': order.item_count,
                        'createdAt': order.created_at.isoformat() if order.created_at else None,
                    }
                    for order in results['recent_orders']
                ],
            },
        }


def create_analytics_service(app) -> AnalyticsService:
    """
    Wire the service for a Flask app: SQL store plus a fan-out whose workers
    each run inside their own app context.
    """
    from .order_store import SQLAlchemyOrderStore

    fanout = QueryFanOut(
        max_workers=app.config.get('ANALYTICS_MAX_WORKERS', 8),
        context_factory=app.app_context
    )
    return AnalyticsService(SQLAlchemyOrderStore(), fanout)
