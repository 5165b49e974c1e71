"""Small numeric helpers shared by the demand statistics."""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 always going up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def series_mean(data: Sequence[float]) -> float:
    if len(data) == 0:
        return 0.0
    return float(np.mean(np.asarray(data, dtype=float)))


def sample_variance(data: Sequence[float]) -> float:
    """Bessel-corrected variance; 0 for fewer than two points."""
    if len(data) < 2:
        return 0.0
    return float(np.var(np.asarray(data, dtype=float), ddof=1))


def sample_std(data: Sequence[float]) -> float:
    return math.sqrt(sample_variance(data))
