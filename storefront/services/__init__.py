"""
Admin analytics services for the Springz storefront.
"""
from .analytics_service import AnalyticsService, create_analytics_service
from .fanout import QueryFanOut
from .metrics import Metric, MetricAggregator
from .order_store import OrderStore, SQLAlchemyOrderStore
from .ranking import RankingKey, TopNRanker

__all__ = [
    'AnalyticsService',
    'create_analytics_service',
    'QueryFanOut',
    'Metric',
    'MetricAggregator',
    'OrderStore',
    'SQLAlchemyOrderStore',
    'RankingKey',
    'TopNRanker',
]
