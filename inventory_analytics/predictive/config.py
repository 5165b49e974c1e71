"""
Configuration for the predictive analytics engine.

All constants used by the forecasting, reorder-point, EOQ, cost and alerting
rules live here so they can be varied independently.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict


# Window lengths and divisors; zero or negative values break the arithmetic
POSITIVE_FIELDS = (
    "history_months",
    "seasonal_period",
    "forecast_periods",
    "days_per_period",
    "stockout_horizon_days",
    "confidence_variance_divisor",
)


def _default_z_scores() -> Dict[float, float]:
    return {0.99: 2.33, 0.95: 1.645}


@dataclass(frozen=True)
class AnalyticsConfig:
    """
    Engine configuration.

    Attributes:
        history_months: Length of the trailing monthly demand series
        seasonal_period: Period used for the centered moving average
        forecast_periods: Horizon used when aggregating predictions

        service_level: Default target service level for the reorder point
        z_scores: Service level -> z-score lookup (exact match)
        default_z_score: z-score for any service level not in ``z_scores``
        lead_time_periods: Replenishment lead time, in periods

        ordering_cost: Fixed cost per order (S)
        carrying_cost_rate: Annual carrying cost as a fraction of price (H = price * rate)
        stockout_cost_rate: Fraction of price exposed per point of stockout risk

        days_per_period: Days in one demand period
        stockout_horizon_days: Horizon inside which stockout risk is non-zero
        no_stockout_days: Days-until-stockout reported when no demand is foreseen

        confidence_base: Confidence of the first forecast period with zero variance
        confidence_floor: Lowest confidence reported when history exists
        confidence_decay_per_period: Confidence lost per extra period of horizon
        confidence_variance_divisor: Variance units per confidence point lost

        abc_a_threshold: Cumulative value percentage closing class A
        abc_b_threshold: Cumulative value percentage closing class B

        high_risk_alert_threshold: Stockout risk above which a high alert fires
        low_confidence_alert_threshold: Confidence below which a review alert fires
        high_priority_risk: Stockout risk above which an increase is high priority
        excess_stock_multiplier: Stock above ``multiplier * EOQ`` is excess
    """
    history_months: int = 12
    seasonal_period: int = 12
    forecast_periods: int = 3

    service_level: float = 0.95
    z_scores: Dict[float, float] = field(default_factory=_default_z_scores)
    default_z_score: float = 1.28
    lead_time_periods: float = 1.0

    ordering_cost: float = 50.0
    carrying_cost_rate: float = 0.25
    stockout_cost_rate: float = 0.1

    days_per_period: float = 30.0
    stockout_horizon_days: float = 30.0
    no_stockout_days: float = 999.0

    confidence_base: float = 95.0
    confidence_floor: float = 60.0
    confidence_decay_per_period: float = 5.0
    confidence_variance_divisor: float = 100.0

    abc_a_threshold: float = 80.0
    abc_b_threshold: float = 95.0

    high_risk_alert_threshold: float = 70.0
    low_confidence_alert_threshold: float = 70.0
    high_priority_risk: float = 50.0
    excess_stock_multiplier: float = 2.0

    def __post_init__(self):
        for name in POSITIVE_FIELDS:
            if getattr(self, name) <= 0:
                raise ValueError(f"AnalyticsConfig.{name} must be positive, got {getattr(self, name)}")

    def z_score(self, service_level: float) -> float:
        """Coarse z-score table, not a normal quantile."""
        return self.z_scores.get(service_level, self.default_z_score)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["z_scores"] = {str(k): v for k, v in self.z_scores.items()}
        return data


DEFAULT_CONFIG = AnalyticsConfig()
