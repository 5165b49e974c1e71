"""
Fixtures comuns para os testes do motor de analytics.
"""
from datetime import datetime
from typing import Callable, List, Sequence

import pytest
from fastapi.testclient import TestClient

from inventory_analytics.api import app
from inventory_analytics.predictive.demand_history import trailing_month_keys
from inventory_analytics.predictive.models import Item, PredictionResult, Transaction, TransactionType
from inventory_analytics.settings import AnalyticsSettings


NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture(autouse=True)
def reset_settings():
    """Cada teste começa com a configuração recarregada do ambiente."""
    AnalyticsSettings.reset()
    yield
    AnalyticsSettings.reset()


@pytest.fixture
def now() -> datetime:
    """Instante de referência fixo (janela 2023-07 .. 2024-06)."""
    return NOW


@pytest.fixture
def monthly_outbound() -> Callable[[str, Sequence[float]], List[Transaction]]:
    """Fábrica de transações de saída, uma por mês da janela (mais antigo primeiro)."""
    def _make(item_name: str, quantities: Sequence[float]) -> List[Transaction]:
        keys = trailing_month_keys(NOW, len(quantities))
        return [
            Transaction(
                date=f"{key}-10",
                item_name=item_name,
                type=TransactionType.OUTBOUND,
                quantity=qty,
            )
            for key, qty in zip(keys, quantities)
            if qty
        ]
    return _make


@pytest.fixture
def flat_item() -> Item:
    """Item X: preço 10, stock 5, mínimo 8."""
    return Item(id="X", name="Item X", price=10.0, quantity=5, min_stock=8)


@pytest.fixture
def idle_item() -> Item:
    """Item sem transações: stock 100, mínimo 20, preço 5."""
    return Item(id="Y", name="Idle Bolt", price=5.0, quantity=100, min_stock=20)


@pytest.fixture
def flat_transactions(monthly_outbound) -> List[Transaction]:
    """Procura constante de 10 unidades/mês para o item X."""
    return monthly_outbound("Item X", [10] * 12)


@pytest.fixture
def sample_payload() -> dict:
    """Snapshot no formato JSON dos colaboradores (camelCase)."""
    keys = trailing_month_keys(NOW, 12)
    return {
        "items": [
            {"id": "X", "name": "Item X", "price": 10, "quantity": 5, "minStock": 8},
            {"id": "Y", "name": "Idle Bolt", "price": 5, "quantity": 100, "minStock": 20},
        ],
        "movements": [{"id": "MV-1", "type": "Arrival", "transportType": "Truck"}],
        "transactions": [
            {"date": f"{key}-10", "itemName": "Item X", "type": "Outbound", "quantity": 10}
            for key in keys
        ] + [
            {"date": f"{keys[-1]}-02", "itemName": "Idle Bolt", "type": "Inbound", "quantity": 50},
        ],
        "now": NOW.isoformat(),
    }


@pytest.fixture
def make_prediction() -> Callable[..., PredictionResult]:
    """Fábrica de PredictionResult com valores neutros por omissão."""
    def _make(item_id: str = "P1", **overrides) -> PredictionResult:
        values = dict(
            item_id=item_id,
            item_name=f"Part {item_id}",
            current_stock=50.0,
            predicted_demand=10,
            recommended_reorder_point=10,
            recommended_order_quantity=69,
            stockout_risk=0,
            days_until_stockout=150,
            confidence=90,
            seasonal_factor=1.0,
            trend_factor=0.0,
        )
        values.update(overrides)
        return PredictionResult(**values)
    return _make


@pytest.fixture(scope="function")
def test_client() -> TestClient:
    """Cliente de teste FastAPI."""
    return TestClient(app)
