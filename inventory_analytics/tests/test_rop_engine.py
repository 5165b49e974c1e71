"""
Testes para o ponto de encomenda e EOQ.
"""
import pytest

from inventory_analytics.predictive.models import Item
from inventory_analytics.predictive.rop_engine import compute_eoq, compute_reorder_point


@pytest.fixture
def part():
    return Item(id="P", name="Part", price=10.0, quantity=5, min_stock=8)


class TestReorderPoint:

    def test_flat_history(self, part):
        result = compute_reorder_point(part, [10] * 12)

        assert result.reorder_point == 10
        assert result.safety_stock == pytest.approx(0.0)
        assert not result.used_fallback

    @pytest.mark.parametrize("service_level,expected", [
        (0.99, 34),
        (0.95, 27),
        (0.90, 23),
    ])
    def test_service_level_table(self, part, service_level, expected):
        # mean 10, sample std ~10.445
        result = compute_reorder_point(part, [0, 20] * 6, service_level=service_level)
        assert result.reorder_point == expected

    def test_no_history_falls_back_to_min_stock(self):
        item = Item(id="Y", name="Idle", price=5.0, quantity=100, min_stock=20)
        result = compute_reorder_point(item, [])

        assert result.reorder_point == 20
        assert result.used_fallback

    def test_to_dict(self, part):
        data = compute_reorder_point(part, [10] * 12).to_dict()
        assert data["reorderPoint"] == 10
        assert data["zScore"] == 1.645


class TestEOQ:

    def test_flat_history(self, part):
        # sqrt(2 * 120 * 50 / 2.5) = 69.28
        assert compute_eoq(part, [10] * 12) == 69

    def test_annual_demand_override(self, part):
        assert compute_eoq(part, [10] * 12, annual_demand=1000) == 200

    def test_zero_override_uses_history(self, part):
        assert compute_eoq(part, [10] * 12, annual_demand=0) == 69

    def test_zero_price_returns_monthly_demand(self):
        free = Item(id="F", name="Free", price=0.0, quantity=0)
        assert compute_eoq(free, [10] * 12) == 10

    def test_no_history_is_zero(self):
        item = Item(id="Y", name="Idle", price=5.0, quantity=100, min_stock=20)
        assert compute_eoq(item, []) == 0

    def test_negative_price_clamped(self):
        odd = Item(id="N", name="Odd", price=-10.0, quantity=0)
        assert compute_eoq(odd, [10] * 12) == 0
