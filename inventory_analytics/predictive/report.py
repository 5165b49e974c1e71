"""
Analytics report payload.

Collects what the printable inventory report shows from the analytics
engine: a predictions table, the cost summary and the high-priority
recommendations. Rendering (PDF/HTML) is done by the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from .models import InventoryOptimization, PredictionResult, RecommendationPriority

logger = logging.getLogger(__name__)

MAX_PREDICTION_ROWS = 20
MAX_HIGH_PRIORITY_RECOMMENDATIONS = 10


def _truncate(text: str, limit: int) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


@dataclass
class AnalyticsReport:
    generated_at: datetime
    prediction_rows: List[Dict[str, Any]] = field(default_factory=list)
    cost_summary: Dict[str, float] = field(default_factory=dict)
    high_priority_recommendations: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generatedAt": self.generated_at.isoformat(),
            "predictions": self.prediction_rows,
            "costSummary": self.cost_summary,
            "highPriorityRecommendations": self.high_priority_recommendations,
        }


def build_report(
    predictions: Sequence[PredictionResult],
    optimization: Optional[InventoryOptimization] = None,
    generated_at: Optional[datetime] = None,
) -> AnalyticsReport:
    """
    Build the report payload.

    Args:
        predictions: Predictions in the order they should be listed
        optimization: Optimization result (cost summary and recommendations)
        generated_at: Report timestamp (defaults to now)

    Returns:
        AnalyticsReport
    """
    report = AnalyticsReport(generated_at=generated_at or datetime.now())

    for pred in predictions[:MAX_PREDICTION_ROWS]:
        report.prediction_rows.append({
            "itemName": _truncate(pred.item_name, 25),
            "currentStock": pred.current_stock,
            "predictedDemand": pred.predicted_demand,
            "reorderPoint": pred.recommended_reorder_point,
            "orderQuantity": pred.recommended_order_quantity,
            "stockoutRisk": f"{pred.stockout_risk}%",
            "confidence": f"{pred.confidence}%",
        })

    if optimization is not None:
        report.cost_summary = {
            "totalCarryingCost": optimization.total_carrying_cost,
            "totalOrderingCost": optimization.total_ordering_cost,
            "totalStockoutCost": optimization.total_stockout_cost,
            "optimizedInventoryValue": optimization.optimized_inventory_value,
        }
        high = [
            rec for rec in optimization.recommendations
            if rec.priority == RecommendationPriority.HIGH
        ]
        report.high_priority_recommendations = [
            {**rec.to_dict(), "reasoning": _truncate(rec.reasoning, 60)}
            for rec in high[:MAX_HIGH_PRIORITY_RECOMMENDATIONS]
        ]

    logger.debug(
        f"Report: {len(report.prediction_rows)} prediction rows, "
        f"{len(report.high_priority_recommendations)} high-priority recommendations"
    )
    return report
