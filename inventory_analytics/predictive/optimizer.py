"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    INVENTORY OPTIMIZER (Custos e Recomendações)
═══════════════════════════════════════════════════════════════════════════════════════════════════════

Cost model (per item):
──────────────────────
    carrying = quantity * price * carrying_rate
    ordering = (predicted_demand * 12 / EOQ) * ordering_cost     (0 when EOQ = 0)
    stockout = stockout_risk * price * stockout_rate

Recommendation policy (first match wins):
─────────────────────────────────────────
    stock < ROP        -> increase to ROP + EOQ   (high if risk > 50, else medium)
    stock > 2 * EOQ    -> decrease to EOQ         (medium)
    otherwise          -> maintain                (low)

Recommendations are ordered high -> medium -> low; ties keep item order.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .config import DEFAULT_CONFIG, AnalyticsConfig
from .models import (
    InventoryOptimization,
    Item,
    PredictionResult,
    Recommendation,
    RecommendationAction,
    RecommendationPriority,
)

logger = logging.getLogger(__name__)


def recommend(prediction: PredictionResult, config: Optional[AnalyticsConfig] = None) -> Recommendation:
    """Apply the increase / decrease / maintain policy to one prediction."""
    config = config or DEFAULT_CONFIG
    stock = prediction.current_stock
    rop = prediction.recommended_reorder_point
    eoq = prediction.recommended_order_quantity

    if stock < rop:
        priority = (
            RecommendationPriority.HIGH
            if prediction.stockout_risk > config.high_priority_risk
            else RecommendationPriority.MEDIUM
        )
        return Recommendation(
            item_id=prediction.item_id,
            action=RecommendationAction.INCREASE,
            current_level=stock,
            recommended_level=rop + eoq,
            reasoning=f"Stock below reorder point. Risk of stockout in {prediction.days_until_stockout} days",
            priority=priority,
        )

    if stock > eoq * config.excess_stock_multiplier:
        return Recommendation(
            item_id=prediction.item_id,
            action=RecommendationAction.DECREASE,
            current_level=stock,
            recommended_level=eoq,
            reasoning="Excess inventory detected. Consider reducing stock to optimize carrying costs",
            priority=RecommendationPriority.MEDIUM,
        )

    return Recommendation(
        item_id=prediction.item_id,
        action=RecommendationAction.MAINTAIN,
        current_level=stock,
        recommended_level=stock,
        reasoning="Current stock level is optimal",
        priority=RecommendationPriority.LOW,
    )


def optimize_inventory(
    items: Sequence[Item],
    predictions: Sequence[PredictionResult],
    config: Optional[AnalyticsConfig] = None,
) -> InventoryOptimization:
    """
    Cost totals and restocking recommendations.

    Args:
        items: Items the predictions refer to (price and quantity source)
        predictions: One prediction per item
        config: Cost rates and policy thresholds

    Returns:
        InventoryOptimization with recommendations sorted by priority
    """
    config = config or DEFAULT_CONFIG
    items_by_id: Dict[str, Item] = {item.id: item for item in items}

    carrying_total = 0.0
    ordering_total = 0.0
    stockout_total = 0.0
    recommendations: List[Recommendation] = []

    for pred in predictions:
        item = items_by_id.get(pred.item_id)
        if item is None:
            logger.warning(f"Prediction for unknown item {pred.item_id} skipped")
            continue

        carrying_total += item.quantity * item.price * config.carrying_cost_rate

        eoq = pred.recommended_order_quantity
        if eoq > 0:
            orders_per_year = pred.predicted_demand * 12 / eoq
            ordering_total += orders_per_year * config.ordering_cost

        stockout_total += pred.stockout_risk * item.price * config.stockout_cost_rate

        recommendations.append(recommend(pred, config))

    levels = {rec.item_id: rec.recommended_level for rec in recommendations}
    optimized_value = sum(
        levels.get(item.id, item.quantity) * item.price for item in items
    )

    # sorted() is stable: ties keep prediction order
    recommendations = sorted(recommendations, key=lambda r: r.priority.rank, reverse=True)

    by_action = {a.value: 0 for a in RecommendationAction}
    for rec in recommendations:
        by_action[rec.action.value] += 1
    logger.info(f"Inventory optimization: {by_action}")

    return InventoryOptimization(
        total_carrying_cost=carrying_total,
        total_ordering_cost=ordering_total,
        total_stockout_cost=stockout_total,
        optimized_inventory_value=optimized_value,
        recommendations=recommendations,
    )
