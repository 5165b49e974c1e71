"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    PREDICTIVE ALERTS (Alertas)
═══════════════════════════════════════════════════════════════════════════════════════════════════════

Rules evaluated per prediction; every matching rule emits an alert:
    - Risco de ruptura > 70%         -> HIGH, ação necessária
    - Confiança do forecast < 70%    -> MEDIUM, revisão manual
    - Stock <= ROP                   -> CRITICAL, ação necessária
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .config import DEFAULT_CONFIG, AnalyticsConfig
from .models import Alert, AlertSeverity, PredictionResult

logger = logging.getLogger(__name__)


def alerts_for_prediction(
    pred: PredictionResult,
    config: Optional[AnalyticsConfig] = None,
) -> List[Alert]:
    config = config or DEFAULT_CONFIG
    alerts = []

    if pred.stockout_risk > config.high_risk_alert_threshold:
        alerts.append(Alert(
            id=f"stockout_risk_{pred.item_id}",
            severity=AlertSeverity.HIGH,
            title="High Stockout Risk",
            message=(
                f"{pred.item_name} has {pred.stockout_risk}% stockout risk. "
                f"Consider reordering {pred.recommended_order_quantity} units."
            ),
            item_id=pred.item_id,
            action_required=True,
        ))

    if pred.confidence < config.low_confidence_alert_threshold:
        alerts.append(Alert(
            id=f"low_confidence_{pred.item_id}",
            severity=AlertSeverity.MEDIUM,
            title="Low Prediction Confidence",
            message=(
                f"Demand prediction for {pred.item_name} has low confidence "
                f"({pred.confidence}%). Consider manual review."
            ),
            item_id=pred.item_id,
            action_required=False,
        ))

    if pred.current_stock <= pred.recommended_reorder_point:
        alerts.append(Alert(
            id=f"reorder_needed_{pred.item_id}",
            severity=AlertSeverity.CRITICAL,
            title="Reorder Point Reached",
            message=(
                f"{pred.item_name} has reached reorder point. "
                f"Current: {_fmt(pred.current_stock)}, Reorder at: {pred.recommended_reorder_point}"
            ),
            item_id=pred.item_id,
            action_required=True,
        ))

    return alerts


def _fmt(value: float) -> str:
    # 5.0 -> "5"
    return str(int(value)) if float(value).is_integer() else str(value)


def generate_predictive_alerts(
    predictions: Sequence[PredictionResult],
    config: Optional[AnalyticsConfig] = None,
) -> List[Alert]:
    """
    Generate alerts for a list of predictions.

    Args:
        predictions: Predictions, typically from ``generate_predictions()``
        config: Alert thresholds

    Returns:
        Alerts in prediction order; rules for one item are not exclusive
    """
    alerts: List[Alert] = []
    for pred in predictions:
        alerts.extend(alerts_for_prediction(pred, config))

    critical = sum(1 for a in alerts if a.severity == AlertSeverity.CRITICAL)
    logger.info(f"Generated {len(alerts)} predictive alerts ({critical} critical)")
    return alerts
