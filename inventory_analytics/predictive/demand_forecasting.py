"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    DEMAND FORECASTING (Previsão de consumo)
═══════════════════════════════════════════════════════════════════════════════════════════════════════

Forecast of the next periods from the monthly demand series.

Mathematical Formulation:
─────────────────────────
    level = y(n-1)                      (last observed period)
    F(i)  = (level + slope * (i+1)) * S((n+i) mod p),   i = 0..k-1
    F(i)  = max(0, round(F(i)))

    Confidence (decreases with volatility and with horizon):
        C(i) = max(60, 95 - Var(y)/100 - 5i)
    where Var is the sample variance (n-1 divisor).

    Empty history: F(i) = 0 and C(i) = 0 for every period.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .config import DEFAULT_CONFIG, AnalyticsConfig
from .decomposition import linear_trend, seasonal_index_at, seasonal_indices
from .models import DemandForecast
from .stats_utils import round_half_up, sample_variance

logger = logging.getLogger(__name__)


def forecast_confidence(variance: float, offset: int, config: Optional[AnalyticsConfig] = None) -> int:
    """
    Confidence (%) of the forecast ``offset`` periods ahead (0-indexed).

    Args:
        variance: Sample variance of the history
        offset: Period offset, 0 for the next period
        config: Confidence parameters

    Returns:
        Confidence rounded to an integer, never below the configured floor
    """
    config = config or DEFAULT_CONFIG
    raw = (
        config.confidence_base
        - variance / config.confidence_variance_divisor
        - offset * config.confidence_decay_per_period
    )
    return round_half_up(max(config.confidence_floor, raw))


def forecast_demand(
    history: Sequence[float],
    periods_ahead: int = 3,
    config: Optional[AnalyticsConfig] = None,
) -> List[DemandForecast]:
    """
    Forecast demand for the next ``periods_ahead`` periods.

    Args:
        history: Monthly demand, oldest first (empty when the item has no history)
        periods_ahead: Number of future periods
        config: Engine configuration (seasonal period, confidence parameters)

    Returns:
        One DemandForecast per period, in horizon order
    """
    config = config or DEFAULT_CONFIG

    if len(history) == 0:
        return [
            DemandForecast(
                period=f"Month {i + 1}",
                predicted_demand=0,
                confidence=0,
                seasonal_index=1.0,
                trend_component=0.0,
            )
            for i in range(periods_ahead)
        ]

    n = len(history)
    period = config.seasonal_period
    indices = seasonal_indices(history, period)
    trend = linear_trend(history)
    variance = sample_variance(history)
    level = float(history[-1])

    forecasts = []
    for i in range(periods_ahead):
        seasonal_index = seasonal_index_at(indices, (n + i) % period)
        value = (level + trend.slope * (i + 1)) * seasonal_index

        forecasts.append(DemandForecast(
            period=f"Month {i + 1}",
            predicted_demand=max(0, round_half_up(value)),
            confidence=forecast_confidence(variance, i, config),
            seasonal_index=seasonal_index,
            trend_component=trend.slope,
        ))

    logger.debug(
        f"Forecast over {periods_ahead} periods: level={level:.1f}, "
        f"slope={trend.slope:.3f}, variance={variance:.1f}"
    )
    return forecasts
