"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    DECOMPOSITION (Sazonalidade e Tendência)
═══════════════════════════════════════════════════════════════════════════════════════════════════════

Mathematical Formulation:
─────────────────────────
    Centered moving average (period p, h = floor(p/2)):
        MA(i) = (1/p) * Σ y(j),  j ∈ [i - h, i + ceil(p/2))     for h <= i < n - h
        MA(i) = y(i)                                             otherwise

    Seasonal index:
        S(i) = y(i) / MA(i)        (1 when MA(i) = 0)

    Linear trend (OLS on x = 0..n-1):
        slope     = (n Σxy - Σx Σy) / (n Σx² - (Σx)²)
        intercept = (Σy - slope Σx) / n
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np


@dataclass(frozen=True)
class TrendEstimate:
    slope: float
    intercept: float

    def to_dict(self) -> dict:
        return {"slope": self.slope, "intercept": self.intercept}


def centered_moving_average(data: Sequence[float], period: int = 12) -> List[float]:
    """Centered moving average; edge points keep their raw value."""
    values = np.asarray(data, dtype=float)
    n = len(values)
    half = period // 2
    upper = math.ceil(period / 2)

    averages = values.copy()
    for i in range(half, n - half):
        averages[i] = values[i - half:i + upper].sum() / period
    return averages.tolist()


def seasonal_indices(data: Sequence[float], period: int = 12) -> List[float]:
    """
    Seasonal index per point of the series.

    Args:
        data: Demand series, oldest first
        period: Season length

    Returns:
        Index per input point (all 1.0 when the series is shorter than one period)
    """
    if len(data) < period:
        return [1.0] * len(data)

    averages = centered_moving_average(data, period)
    return [
        float(value) / avg if avg > 0 else 1.0
        for value, avg in zip(data, averages)
    ]


def seasonal_index_at(indices: Sequence[float], position: int) -> float:
    """Index at ``position``; a missing or zero index reads as 1."""
    if 0 <= position < len(indices) and indices[position]:
        return float(indices[position])
    return 1.0


def linear_trend(data: Sequence[float]) -> TrendEstimate:
    """Ordinary least squares of demand against the time index."""
    n = len(data)
    if n < 2:
        return TrendEstimate(slope=0.0, intercept=float(data[0]) if n else 0.0)

    y = np.asarray(data, dtype=float)
    x = np.arange(n, dtype=float)

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xy = (x * y).sum()
    sum_x2 = (x * x).sum()

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return TrendEstimate(slope=float(slope), intercept=float(intercept))
