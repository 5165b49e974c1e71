"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    DEMAND HISTORY (Série mensal de consumo)
═══════════════════════════════════════════════════════════════════════════════════════════════════════

Builds, for every item, the trailing monthly outbound quantity series that
feeds the forecasting and reorder-point calculations.

Matching rule:
──────────────
    A transaction belongs to an item when it is Outbound and its ``itemName``
    contains the item's ``name`` as a case-insensitive substring.

    Two items whose names are substrings of each other will both receive the
    same transaction. Transactions do not carry an item id, so this is the
    only available link.

Window:
───────
    The last ``months`` calendar months, current month included, oldest first.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

import pandas as pd

from .models import DemandHistory, Item, Transaction
from .stats_utils import round_half_up

logger = logging.getLogger(__name__)


def trailing_month_keys(now: datetime, months: int = 12) -> List[str]:
    """``YYYY-MM`` keys of the trailing window, oldest first (aware ``now`` read in UTC)."""
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)
    periods = pd.period_range(end=pd.Period(now, freq="M"), periods=months, freq="M")
    return [p.strftime("%Y-%m") for p in periods]


def _outbound_frame(transactions: Sequence[Transaction]) -> pd.DataFrame:
    outbound = [t for t in transactions if t.is_outbound]
    frame = pd.DataFrame(
        {
            "item_name": [t.item_name.lower() for t in outbound],
            "date": [t.date for t in outbound],
            "quantity": [float(t.quantity) for t in outbound],
        },
        columns=["item_name", "date", "quantity"],
    )
    parsed = pd.to_datetime(frame["date"], errors="coerce", utc=True, format="ISO8601")
    unparsed = int(parsed.isna().sum())
    if unparsed:
        logger.warning(f"{unparsed} outbound transaction(s) with unparseable dates ignored")
    frame["month"] = parsed.dt.tz_localize(None).dt.strftime("%Y-%m")
    return frame


def build_demand_history(
    items: Sequence[Item],
    transactions: Sequence[Transaction],
    now: Optional[datetime] = None,
    months: int = 12,
) -> Dict[str, DemandHistory]:
    """
    Build the monthly demand series for every item.

    Args:
        items: Items to build series for
        transactions: All known transactions (inbound ones are ignored)
        now: Reference instant; the current month closes the window
        months: Window length

    Returns:
        Dict item_id -> DemandHistory, in item order
    """
    now = now or datetime.now()
    keys = trailing_month_keys(now, months)

    frame = _outbound_frame(transactions)
    in_window = frame[frame["month"].isin(keys)]

    histories: Dict[str, DemandHistory] = {}
    for item in items:
        if in_window.empty:
            histories[item.id] = DemandHistory(item_id=item.id, monthly_demand=[0] * len(keys))
            continue

        mask = in_window["item_name"].str.contains(item.name.lower(), regex=False)
        matched = in_window[mask]
        totals = matched.groupby("month")["quantity"].sum()

        series = [round_half_up(float(totals.get(key, 0.0))) for key in keys]
        histories[item.id] = DemandHistory(
            item_id=item.id,
            monthly_demand=series,
            matched_transactions=int(len(matched)),
        )
        logger.debug(f"Demand history {item.id} ({item.name}): {series}")

    logger.info(
        f"Built demand history for {len(histories)} items from "
        f"{len(frame)} outbound transactions ({keys[0]}..{keys[-1]})"
    )
    return histories
