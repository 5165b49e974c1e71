"""
Testes para o motor preditivo (previsões por item e snapshot).
"""
import pytest

from inventory_analytics.predictive.models import InvalidRecordError, Item
from inventory_analytics.predictive.prediction_engine import (
    PredictiveAnalyticsEngine,
    compute_stockout,
    create_predictive_engine,
)


class TestStockout:

    def test_half_horizon(self):
        days, risk = compute_stockout(5, 10)
        assert days == pytest.approx(15.0)
        assert risk == pytest.approx(50.0)

    def test_no_demand(self):
        assert compute_stockout(5, 0) == (999.0, 0.0)

    def test_beyond_horizon(self):
        days, risk = compute_stockout(50, 10)
        assert days == pytest.approx(150.0)
        assert risk == 0.0


class TestGeneratePredictions:

    def test_flat_demand_item(self, now, flat_item, flat_transactions):
        engine = PredictiveAnalyticsEngine([flat_item], [], flat_transactions, now=now)

        [pred] = engine.generate_predictions()

        assert pred.item_id == "X"
        assert pred.predicted_demand == 10
        assert pred.recommended_reorder_point == 10
        assert pred.recommended_order_quantity == 69
        assert pred.days_until_stockout == 15
        assert pred.stockout_risk == 50
        assert pred.confidence == 90
        assert pred.seasonal_factor == 1.0
        assert pred.trend_factor == pytest.approx(0.0)

    def test_item_without_transactions(self, now, idle_item):
        engine = PredictiveAnalyticsEngine([idle_item], [], [], now=now)

        [pred] = engine.generate_predictions()

        assert pred.recommended_reorder_point == 20
        assert pred.recommended_order_quantity == 0
        assert pred.predicted_demand == 0
        assert pred.confidence == 0
        assert pred.days_until_stockout == 999
        assert pred.stockout_risk == 0

    def test_one_prediction_per_item_in_order(self, now, flat_item, idle_item, flat_transactions):
        engine = PredictiveAnalyticsEngine([idle_item, flat_item], [], flat_transactions, now=now)

        predictions = engine.generate_predictions()

        assert [p.item_id for p in predictions] == ["Y", "X"]
        for p in predictions:
            assert 0 <= p.stockout_risk <= 100
            assert p.days_until_stockout >= 0
            assert p.recommended_reorder_point >= 0
            assert p.recommended_order_quantity >= 0

    def test_deterministic(self, now, flat_item, idle_item, flat_transactions):
        first = PredictiveAnalyticsEngine([flat_item, idle_item], [], flat_transactions, now=now)
        second = PredictiveAnalyticsEngine([flat_item, idle_item], [], flat_transactions, now=now)

        assert [p.to_dict() for p in first.generate_predictions()] == \
            [p.to_dict() for p in second.generate_predictions()]

    def test_accepts_camel_case_records(self, now):
        engine = create_predictive_engine(
            items=[{"id": "X", "name": "Item X", "price": 10, "quantity": 5, "minStock": 8}],
            movements=[{"id": "MV-1"}],
            transactions=[
                {"date": "2024-06-03", "itemName": "Item X", "type": "Outbound", "quantity": 4},
            ],
            now=now,
        )

        assert engine.get_item("X").min_stock == 8.0
        assert engine.demand_history("X").monthly_demand[-1] == 4
        assert engine.movements == ({"id": "MV-1"},)
        assert engine.to_dict()["itemsWithHistory"] == 1

    def test_invalid_record_rejected(self, now):
        with pytest.raises(InvalidRecordError):
            PredictiveAnalyticsEngine(
                [{"id": "X", "name": "Item X"}],
                transactions=[{"date": "2024-06-03", "itemName": "Item X", "type": "Lost", "quantity": 1}],
                now=now,
            )


class TestSingleItemOperations:

    def test_forecast_and_quantities(self, now, flat_item, flat_transactions):
        engine = PredictiveAnalyticsEngine([flat_item], [], flat_transactions, now=now)

        assert [f.predicted_demand for f in engine.predict_demand("X", 2)] == [10, 10]
        assert engine.calculate_reorder_point("X") == 10
        assert engine.calculate_reorder_point("X", 0.99) == 10
        assert engine.calculate_eoq("X") == 69
        assert engine.calculate_eoq("X", annual_demand=1000) == 200

    def test_unknown_item(self, now, flat_item, flat_transactions):
        engine = PredictiveAnalyticsEngine([flat_item], [], flat_transactions, now=now)

        assert engine.calculate_reorder_point("missing") == 0
        assert engine.calculate_eoq("missing") == 0
        assert all(f.predicted_demand == 0 for f in engine.predict_demand("missing"))
        assert engine.demand_history("missing") is None

    def test_snapshot_is_read_only(self, now, flat_item):
        engine = PredictiveAnalyticsEngine([flat_item], now=now)

        with pytest.raises(TypeError):
            engine._history["X"] = None
        assert isinstance(engine.items, tuple)

    def test_price_change_only_affects_eoq(self, now, monthly_outbound):
        transactions = monthly_outbound("Gear", [10] * 12)
        cheap = Item(id="G", name="Gear", price=10.0, quantity=5)
        dear = Item(id="G", name="Gear", price=40.0, quantity=5)

        [a] = PredictiveAnalyticsEngine([cheap], [], transactions, now=now).generate_predictions()
        [b] = PredictiveAnalyticsEngine([dear], [], transactions, now=now).generate_predictions()

        assert a.recommended_reorder_point == b.recommended_reorder_point
        # sqrt(2 * 120 * 50 / 10) = 34.6
        assert b.recommended_order_quantity == 35
