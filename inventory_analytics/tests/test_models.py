"""
Testes para os registos de entrada/saída e utilitários numéricos.
"""
import pytest

from inventory_analytics.predictive.config import AnalyticsConfig
from inventory_analytics.predictive.models import (
    DemandHistory,
    InvalidRecordError,
    Item,
    RecommendationPriority,
    Transaction,
    TransactionType,
    coerce_items,
)
from inventory_analytics.predictive.stats_utils import round_half_up, sample_std, sample_variance, series_mean


class TestRecords:

    def test_item_from_camel_case_dict(self):
        item = Item.from_dict({"id": "A1", "name": "Bolt", "price": 2, "quantity": 7, "minStock": 3})

        assert item == Item(id="A1", name="Bolt", price=2.0, quantity=7.0, min_stock=3.0)
        assert item.to_dict()["minStock"] == 3.0

    def test_item_without_id_rejected(self):
        with pytest.raises(InvalidRecordError):
            Item.from_dict({"name": "Bolt"})

    def test_transaction_from_dict(self):
        tx = Transaction.from_dict({
            "date": "2024-06-01", "itemName": "Bolt", "type": "Outbound", "quantity": 4,
        })

        assert tx.type == TransactionType.OUTBOUND
        assert tx.is_outbound
        assert tx.to_dict()["itemName"] == "Bolt"

    def test_unknown_transaction_type_rejected(self):
        with pytest.raises(InvalidRecordError, match="Unknown transaction type"):
            Transaction.from_dict({
                "date": "2024-06-01", "itemName": "Bolt", "type": "Sideways", "quantity": 4,
            })

    def test_coerce_accepts_mixed_inputs(self):
        existing = Item(id="A", name="a", price=1, quantity=1)
        items = coerce_items([existing, {"id": "B", "name": "b"}])

        assert items[0] is existing
        assert items[1].price == 0.0

    def test_history_without_matches_has_no_values(self):
        history = DemandHistory(item_id="A", monthly_demand=[0] * 12)

        assert not history.has_history
        assert history.values == []

    def test_priority_rank(self):
        ranks = [p.rank for p in (RecommendationPriority.HIGH, RecommendationPriority.MEDIUM, RecommendationPriority.LOW)]
        assert ranks == [3, 2, 1]


class TestConfig:

    def test_z_score_table(self):
        config = AnalyticsConfig()
        assert config.z_score(0.99) == 2.33
        assert config.z_score(0.95) == 1.645
        assert config.z_score(0.90) == 1.28

    def test_to_dict_stringifies_z_keys(self):
        data = AnalyticsConfig().to_dict()
        assert data["z_scores"] == {"0.99": 2.33, "0.95": 1.645}
        assert data["ordering_cost"] == 50.0


class TestStatsUtils:

    @pytest.mark.parametrize("value,expected", [
        (2.5, 3),
        (2.49, 2),
        (-2.5, -2),
        (0.5, 1),
        (69.28, 69),
    ])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_empty_series(self):
        assert series_mean([]) == 0.0
        assert sample_variance([]) == 0.0
        assert sample_variance([5]) == 0.0

    def test_sample_variance_uses_n_minus_one(self):
        assert sample_variance([2, 4, 4, 4, 5, 5, 7, 9]) == pytest.approx(32 / 7)
        assert sample_std([1, 3]) == pytest.approx(2 ** 0.5)
