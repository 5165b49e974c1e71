"""
ABC classification (by annual value).

    annual_value = avg_monthly_demand * 12 * price
    (avg_monthly_demand = quantity / 12 when the item has no demand history)

Items are ranked by annual value; the running share of total value closes
class A at 80% and class B at 95%. Everything after is class C. The
highest-value item is always class A, even when it alone holds more than 80%.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Sequence

import pandas as pd

from .config import DEFAULT_CONFIG, AnalyticsConfig
from .models import ABCCategory, ABCClassification, DemandHistory, Item
from .stats_utils import series_mean

logger = logging.getLogger(__name__)


def annual_value(item: Item, history: Optional[DemandHistory]) -> float:
    if history is not None and history.has_history:
        monthly = series_mean(history.monthly_demand)
    else:
        monthly = item.quantity / 12
    return monthly * 12 * item.price


def assign_category(cumulative_pct: float, config: Optional[AnalyticsConfig] = None) -> ABCCategory:
    config = config or DEFAULT_CONFIG
    if cumulative_pct <= config.abc_a_threshold:
        return ABCCategory.A
    elif cumulative_pct <= config.abc_b_threshold:
        return ABCCategory.B
    return ABCCategory.C


def classify_abc(
    items: Sequence[Item],
    histories: Mapping[str, DemandHistory],
    config: Optional[AnalyticsConfig] = None,
) -> List[ABCClassification]:
    """
    Compute ABC classification for inventory items.

    Args:
        items: Items to classify
        histories: Demand history per item id
        config: ABC thresholds

    Returns:
        One classification per item, sorted by descending annual value
    """
    config = config or DEFAULT_CONFIG
    if not items:
        return []

    df = pd.DataFrame({
        "item_id": [item.id for item in items],
        "item_name": [item.name for item in items],
        "annual_value": [annual_value(item, histories.get(item.id)) for item in items],
    })

    # mergesort is stable: equal values keep item order
    df = df.sort_values("annual_value", ascending=False, kind="mergesort")
    df["cumulative_value"] = df["annual_value"].cumsum()
    total_value = df["annual_value"].sum()

    if total_value > 0:
        df["cumulative_pct"] = df["cumulative_value"] / total_value * 100
    else:
        df["cumulative_pct"] = 100.0

    results = []
    for rank, row in enumerate(df.itertuples(index=False)):
        pct = float(row.cumulative_pct)
        category = assign_category(pct, config)
        if rank == 0 and total_value > 0:
            # the top item alone may cross the A threshold; it still anchors class A
            category = ABCCategory.A
        results.append(ABCClassification(
            item_id=row.item_id,
            item_name=row.item_name,
            annual_value=float(row.annual_value),
            category=category,
            cumulative_percentage=round(pct, 2),
        ))

    counts = {c.value: sum(1 for r in results if r.category == c) for c in ABCCategory}
    logger.info(f"ABC analysis over {len(results)} items: {counts}")
    return results
