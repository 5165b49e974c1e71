"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    PREDICTIVE ANALYTICS ENGINE
═══════════════════════════════════════════════════════════════════════════════════════════════════════

Per-item rollup of forecast, reorder point, EOQ and stockout risk, plus the
engine object that exposes every analytics operation over one snapshot of
items and transactions.

Stockout risk:
──────────────
    daily_demand        = avg_forecast / 30
    days_until_stockout = stock / daily_demand         (999 when avg_forecast = 0)
    risk                = max(0, (30 - days) / 30 * 100)   when days < 30, else 0

The engine is an immutable snapshot: the demand history is built once at
construction from the records it receives and never changes afterwards.
"""

from __future__ import annotations

import logging
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .abc_analysis import classify_abc
from .config import DEFAULT_CONFIG, AnalyticsConfig
from .decomposition import linear_trend, seasonal_index_at, seasonal_indices
from .demand_forecasting import forecast_demand
from .demand_history import build_demand_history
from .models import (
    ABCClassification,
    DemandForecast,
    DemandHistory,
    InventoryOptimization,
    Item,
    ItemLike,
    PredictionResult,
    TransactionLike,
    coerce_items,
    coerce_transactions,
)
from .optimizer import optimize_inventory
from .rop_engine import compute_eoq, compute_reorder_point
from .stats_utils import round_half_up

logger = logging.getLogger(__name__)


def compute_stockout(
    quantity: float,
    avg_predicted_demand: float,
    config: Optional[AnalyticsConfig] = None,
) -> Tuple[float, float]:
    """
    Days until stockout and stockout risk (unrounded).

    Returns:
        (days_until_stockout, stockout_risk)
    """
    config = config or DEFAULT_CONFIG
    if avg_predicted_demand > 0:
        days = quantity / (avg_predicted_demand / config.days_per_period)
    else:
        days = config.no_stockout_days

    horizon = config.stockout_horizon_days
    risk = max(0.0, (horizon - days) / horizon * 100) if days < horizon else 0.0
    return days, risk


def build_prediction(
    item: Item,
    history: Sequence[float],
    config: Optional[AnalyticsConfig] = None,
) -> PredictionResult:
    """
    Build the PredictionResult for one item.

    Args:
        item: The item
        history: Its monthly demand (empty when it has no history)
        config: Engine configuration

    Returns:
        PredictionResult with rounded demand, risk, days and confidence
    """
    config = config or DEFAULT_CONFIG

    forecasts = forecast_demand(history, config.forecast_periods, config)
    horizon = max(len(forecasts), 1)
    avg_demand = sum(f.predicted_demand for f in forecasts) / horizon
    avg_confidence = sum(f.confidence for f in forecasts) / horizon

    rop = compute_reorder_point(item, history, config=config).reorder_point
    eoq = compute_eoq(item, history, config=config)
    days, risk = compute_stockout(item.quantity, avg_demand, config)

    indices = seasonal_indices(history, config.seasonal_period)
    seasonal_factor = seasonal_index_at(indices, len(indices) - 1)
    trend = linear_trend(history)

    return PredictionResult(
        item_id=item.id,
        item_name=item.name,
        current_stock=item.quantity,
        predicted_demand=round_half_up(avg_demand),
        recommended_reorder_point=rop,
        recommended_order_quantity=eoq,
        stockout_risk=round_half_up(risk),
        days_until_stockout=round_half_up(days),
        confidence=round_half_up(avg_confidence),
        seasonal_factor=seasonal_factor,
        trend_factor=trend.slope,
    )


class PredictiveAnalyticsEngine:
    """
    Analytics over one snapshot of items, movements and transactions.

    Uso:
        engine = PredictiveAnalyticsEngine(items, movements, transactions)
        predictions = engine.generate_predictions()
        plan = engine.optimize_inventory()
        abc = engine.generate_abc_analysis()

    ``movements`` is accepted for interface compatibility and not used.
    """

    def __init__(
        self,
        items: Sequence[ItemLike],
        movements: Optional[Sequence[Mapping[str, Any]]] = None,
        transactions: Optional[Sequence[TransactionLike]] = None,
        config: Optional[AnalyticsConfig] = None,
        now: Optional[datetime] = None,
    ):
        self._config = config or DEFAULT_CONFIG
        self._now = now or datetime.now()
        self._items = tuple(coerce_items(list(items)))
        self._movements = tuple(movements or ())
        self._transactions = tuple(coerce_transactions(list(transactions or [])))
        self._items_by_id = MappingProxyType({item.id: item for item in self._items})
        self._history = MappingProxyType(build_demand_history(
            self._items,
            self._transactions,
            now=self._now,
            months=self._config.history_months,
        ))

    # ------------------------------------------------------------------
    # Snapshot accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> AnalyticsConfig:
        return self._config

    @property
    def now(self) -> datetime:
        return self._now

    @property
    def items(self) -> tuple:
        return self._items

    @property
    def movements(self) -> tuple:
        return self._movements

    def get_item(self, item_id: str) -> Optional[Item]:
        return self._items_by_id.get(item_id)

    def demand_history(self, item_id: str) -> Optional[DemandHistory]:
        return self._history.get(item_id)

    def _series(self, item_id: str) -> List[int]:
        history = self._history.get(item_id)
        return history.values if history is not None else []

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def predict_demand(self, item_id: str, periods_ahead: int = 3) -> List[DemandForecast]:
        """Forecast the next periods for one item (zeros for unknown items)."""
        return forecast_demand(self._series(item_id), periods_ahead, self._config)

    def calculate_reorder_point(self, item_id: str, service_level: Optional[float] = None) -> int:
        """Reorder point for one item; 0 for an unknown item."""
        item = self.get_item(item_id)
        if item is None:
            return 0
        return compute_reorder_point(
            item, self._series(item_id), service_level, self._config
        ).reorder_point

    def calculate_eoq(self, item_id: str, annual_demand: Optional[float] = None) -> int:
        """Economic order quantity for one item; 0 for an unknown item."""
        item = self.get_item(item_id)
        if item is None:
            return 0
        return compute_eoq(item, self._series(item_id), annual_demand, self._config)

    def generate_predictions(self) -> List[PredictionResult]:
        """One PredictionResult per item, in item order."""
        predictions = [
            build_prediction(item, self._series(item.id), self._config)
            for item in self._items
        ]
        at_risk = sum(1 for p in predictions if p.stockout_risk > 0)
        logger.info(f"Generated {len(predictions)} predictions ({at_risk} with stockout risk)")
        return predictions

    def optimize_inventory(self) -> InventoryOptimization:
        return optimize_inventory(self._items, self.generate_predictions(), self._config)

    def generate_abc_analysis(self) -> List[ABCClassification]:
        return classify_abc(self._items, self._history, self._config)

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot summary (for logging / debugging)."""
        return {
            "now": self._now.isoformat(),
            "items": len(self._items),
            "movements": len(self._movements),
            "transactions": len(self._transactions),
            "itemsWithHistory": sum(1 for h in self._history.values() if h.has_history),
        }


def create_predictive_engine(
    items: Sequence[ItemLike],
    movements: Optional[Sequence[Mapping[str, Any]]] = None,
    transactions: Optional[Sequence[TransactionLike]] = None,
    config: Optional[AnalyticsConfig] = None,
    now: Optional[datetime] = None,
) -> PredictiveAnalyticsEngine:
    """Convenience constructor."""
    return PredictiveAnalyticsEngine(items, movements, transactions, config=config, now=now)
