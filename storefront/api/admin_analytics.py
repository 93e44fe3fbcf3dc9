"""
Admin analytics API endpoints.

Read-only reports for the admin dashboard:
- GET /api/admin/analytics?range=7days|30days|90days|12months
- GET /api/admin/stats
"""
import logging
from flask import Blueprint, current_app, jsonify, request

from ..middleware.admin_auth import require_admin
from ..services.analytics_service import create_analytics_service
from ..utils.errors import ErrorCode, bad_request, internal_error
from ..utils.exceptions import InvalidRangeError

logger = logging.getLogger(__name__)

admin_analytics_bp = Blueprint('admin_analytics', __name__)


@admin_analytics_bp.route('/analytics', methods=['GET'])
@require_admin
def get_analytics():
    """
    Analytics report for a selectable range.

    Query params:
        range: '7days', '30days', '90days', '12months' (default: '12months').
               Unknown values fall back to the default unless
               ANALYTICS_STRICT_RANGE is enabled.

    Returns:
        - overview: revenue, orders, customers, in-stock products, average rating
        - trends: revenue/order/customer growth vs the previous period
        - salesData: trailing 12 calendar months
        - recentOrders: last 7 active days
        - productPerformance: top 10 products by revenue
        - customerStats: new vs returning customers, AOV, conversion
    """
    range_token = request.args.get('range')
    strict = current_app.config.get('ANALYTICS_STRICT_RANGE', False)

    try:
        service = create_analytics_service(current_app._get_current_object())
        report = service.get_analytics_report(range_token, strict=strict)
        return jsonify(report)

    except InvalidRangeError as e:
        return bad_request(e.message, ErrorCode.INVALID_FIELD)
    except Exception as e:
        # AnalyticsError wraps store failures; anything else is unexpected
        logger.exception(f"Analytics report error: {getattr(e, 'original_error', None) or e}")
        return internal_error(
            'Failed to fetch analytics data',
            details={'range': range_token},
            code=ErrorCode.ANALYTICS_FAILED
        )


@admin_analytics_bp.route('/stats', methods=['GET'])
@require_admin
def get_stats():
    """
    Dashboard statistics over fixed windows (this month vs last calendar month).

    Returns:
        - overview, revenue, orders, customers totals with month-over-month growth
        - products: per-category counts, top 5 sellers by units
        - reviews: average rating, review count
        - charts.monthlyRevenue: year to date
        - recentActivity.recentOrders: 10 most recent orders
    """
    try:
        service = create_analytics_service(current_app._get_current_object())
        return jsonify(service.get_stats_report())

    except Exception as e:
        logger.exception(f"Admin stats error: {getattr(e, 'original_error', None) or e}")
        return internal_error('Failed to fetch admin statistics', code=ErrorCode.ANALYTICS_FAILED)
