"""
Top-N product ranking over grouped order lines.
"""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .growth import percentage_of
from .order_store import LineGroup, OrderStore, ProductInfo
from .periods import Window

UNKNOWN_PRODUCT = 'Unknown Product'


class RankingKey(str, Enum):
    QUANTITY = 'quantity'
    REVENUE = 'revenue'


@dataclass(frozen=True)
class RankedProduct:
    product_id: Optional[int]
    name: str
    price: Decimal
    image: Optional[str]
    quantity: int
    order_count: int
    revenue: Decimal
    percentage: int


def _sort_key(key: RankingKey):
    # Descending by the ranking value, then product id ascending.
    # Lines whose product was deleted (id None) sort last among ties.
    def sort_key(group: LineGroup):
        value = group.quantity if key == RankingKey.QUANTITY else group.revenue
        pid = group.product_id
        return (-value, pid is None, pid if pid is not None else 0)
    return sort_key


def rank_products(
    groups: Iterable[LineGroup],
    products: Dict[int, ProductInfo],
    limit: int,
    key: RankingKey = RankingKey.REVENUE
) -> List[RankedProduct]:
    """
    Sort grouped lines, keep the first ``limit`` and attach product details.

    Percentages are each entry's share of the revenue across the returned
    entries, so they sum to 100 (within rounding) when that revenue is positive.
    """
    key = RankingKey(key)
    top = sorted(groups, key=_sort_key(key))[:max(limit, 0)]
    total_revenue = sum((group.revenue for group in top), Decimal('0'))

    ranked = []
    for group in top:
        product = products.get(group.product_id)
        ranked.append(RankedProduct(
            product_id=group.product_id,
            name=product.name if product else UNKNOWN_PRODUCT,
            price=product.price if product else Decimal('0'),
            image=product.image if product else None,
            quantity=group.quantity,
            order_count=group.order_count,
            revenue=group.revenue,
            percentage=percentage_of(group.revenue, total_revenue)
        ))
    return ranked


class TopNRanker:
    """Groups order lines by product in the store and ranks them."""

    def __init__(self, store: OrderStore):
        self.store = store

    def top_products(
        self,
        limit: int = 5,
        key: RankingKey = RankingKey.QUANTITY,
        window: Window = None
    ) -> List[RankedProduct]:
        groups = self.store.group_order_lines(window)
        return self.rank(groups, limit, key)

    def rank(self, groups: List[LineGroup], limit: int, key: RankingKey) -> List[RankedProduct]:
        """Rank already-grouped lines, resolving names for the survivors only."""
        top_ids = [g.product_id for g in sorted(groups, key=_sort_key(RankingKey(key)))[:limit]]
        products = self.store.get_products(top_ids)
        return rank_products(groups, products, limit, key)
