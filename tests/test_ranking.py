"""
Tests for Top-N product ranking.
"""
from datetime import timedelta
from decimal import Decimal

from storefront.services.order_store import LineGroup, ProductInfo
from storefront.services.periods import Window
from storefront.services.ranking import (
    UNKNOWN_PRODUCT,
    RankingKey,
    TopNRanker,
    rank_products,
)


def _groups():
    return [
        LineGroup(product_id=1, quantity=3, revenue=Decimal('300'), order_count=2),
        LineGroup(product_id=2, quantity=10, revenue=Decimal('100'), order_count=5),
        LineGroup(product_id=3, quantity=3, revenue=Decimal('600'), order_count=1),
    ]


def _products():
    return {
        1: ProductInfo(1, 'Elite Protein', Decimal('100')),
        2: ProductInfo(2, 'Peanut Butter', Decimal('10'), '/peanut.png'),
        3: ProductInfo(3, 'Creatine', Decimal('200')),
    }


class TestRankProducts:
    """Tests for the pure ranking function."""

    def test_by_revenue(self):
        ranked = rank_products(_groups(), _products(), limit=10, key=RankingKey.REVENUE)
        assert [p.product_id for p in ranked] == [3, 1, 2]

    def test_by_quantity_ties_break_on_product_id(self):
        ranked = rank_products(_groups(), _products(), limit=10, key=RankingKey.QUANTITY)
        assert [p.product_id for p in ranked] == [2, 1, 3]

    def test_limit(self):
        ranked = rank_products(_groups(), _products(), limit=2, key=RankingKey.REVENUE)
        assert len(ranked) == 2

    def test_limit_zero(self):
        assert rank_products(_groups(), _products(), limit=0) == []

    def test_percentages_are_share_of_returned_revenue(self):
        ranked = rank_products(_groups(), _products(), limit=10, key=RankingKey.REVENUE)

        assert [p.percentage for p in ranked] == [60, 30, 10]
        assert sum(p.percentage for p in ranked) == 100

    def test_percentages_zero_when_no_revenue(self):
        groups = [LineGroup(1, 2, Decimal('0'), 1)]
        ranked = rank_products(groups, _products(), limit=5)
        assert ranked[0].percentage == 0

    def test_missing_product_is_unknown(self):
        groups = [LineGroup(None, 4, Decimal('80'), 2), LineGroup(9, 1, Decimal('20'), 1)]
        ranked = rank_products(groups, {}, limit=5)

        assert [p.name for p in ranked] == [UNKNOWN_PRODUCT, UNKNOWN_PRODUCT]
        assert ranked[0].price == Decimal('0')
        assert ranked[0].image is None

    def test_deleted_product_sorts_after_ties(self):
        groups = [LineGroup(None, 2, Decimal('50'), 1), LineGroup(7, 2, Decimal('50'), 1)]
        ranked = rank_products(groups, {}, limit=5, key=RankingKey.QUANTITY)
        assert [p.product_id for p in ranked] == [7, None]

    def test_carries_product_details(self):
        ranked = rank_products(_groups(), _products(), limit=10, key=RankingKey.QUANTITY)
        top = ranked[0]

        assert top.name == 'Peanut Butter'
        assert top.image == '/peanut.png'
        assert top.quantity == 10
        assert top.order_count == 5


class TestTopNRanker:
    """Tests for ranking against a store."""

    def test_top_products_from_store(self, memory_store, records, now):
        store = memory_store(
            orders=[records.order(1, now - timedelta(days=1), '500'), records.order(2, now - timedelta(days=60), '500')],
            lines=[
                records.line(1, 10, 2, '200'),
                records.line(1, 11, 1, '300'),
                records.line(2, 10, 5, '500'),
            ],
            products=[records.product(10, 'Oats'), records.product(11, 'Whey')]
        )
        ranker = TopNRanker(store)

        all_time = ranker.top_products(limit=5, key=RankingKey.QUANTITY)
        assert [(p.name, p.quantity, p.order_count) for p in all_time] == [('Oats', 7, 2), ('Whey', 1, 1)]

        recent = ranker.top_products(limit=5, key=RankingKey.REVENUE, window=Window(now - timedelta(days=7), now))
        assert [(p.name, p.revenue) for p in recent] == [('Whey', Decimal('300')), ('Oats', Decimal('200'))]

    def test_only_looks_up_top_products(self, memory_store, records, now):
        store = memory_store(products=[records.product(1, 'A'), records.product(2, 'B'), records.product(3, 'C')])
        looked_up = []
        original = store.get_products

        def spy(ids):
            looked_up.extend(ids)
            return original(ids)
        store.get_products = spy

        ranked = TopNRanker(store).rank(_groups(), limit=1, key=RankingKey.REVENUE)

        assert looked_up == [3]
        assert ranked[0].name == 'C'
