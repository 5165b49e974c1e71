"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    PREDICTIVE ANALYTICS — RECORDS
═══════════════════════════════════════════════════════════════════════════════════════════════════════

Input records (supplied by the inventory CRUD layer) and output records
(consumed by dashboards, reports and alerting).

Every record serializes to the camelCase JSON shape used on the wire via
``to_dict()``. Input records are also built from that shape via ``from_dict()``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)


class InvalidRecordError(ValueError):
    """Raised when an input record lacks a required field."""


def _require(data: Mapping[str, Any], key: str, record: str) -> Any:
    if key not in data or data[key] is None:
        raise InvalidRecordError(f"{record} record is missing required field '{key}'")
    return data[key]


# ═══════════════════════════════════════════════════════════════════════════════
# ENUMS
# ═══════════════════════════════════════════════════════════════════════════════

class TransactionType(str, Enum):
    """Direction of a stock transaction."""
    INBOUND = "Inbound"
    OUTBOUND = "Outbound"


class RecommendationAction(str, Enum):
    INCREASE = "increase"
    DECREASE = "decrease"
    MAINTAIN = "maintain"


class RecommendationPriority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort weight, higher is more urgent."""
        return {"high": 3, "medium": 2, "low": 1}[self.value]


class ABCCategory(str, Enum):
    """ABC classification (by annual value)."""
    A = "A"  # first ~80% of value
    B = "B"  # next ~15%
    C = "C"  # remaining ~5%


class AlertSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# ═══════════════════════════════════════════════════════════════════════════════
# INPUT RECORDS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Item:
    """
    Inventory item as exposed by the items collaborator.

    Attributes:
        id: Stable item identifier
        name: Display name, also used to match transactions
        price: Unit price
        quantity: Units currently on hand
        min_stock: Configured minimum stock (reorder fallback)
    """
    id: str
    name: str
    price: float
    quantity: float
    min_stock: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Item":
        return cls(
            id=str(_require(data, "id", "Item")),
            name=str(_require(data, "name", "Item")),
            price=float(data.get("price", 0) or 0),
            quantity=float(data.get("quantity", 0) or 0),
            min_stock=float(data.get("minStock", data.get("min_stock", 0)) or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "minStock": self.min_stock,
        }


@dataclass(frozen=True)
class Transaction:
    """
    Stock transaction.

    Only outbound transactions feed the demand history. ``date`` is kept as
    the ISO-8601 string received from the collaborator; parsing happens when
    the history is built.
    """
    date: str
    item_name: str
    type: TransactionType
    quantity: float
    id: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Transaction":
        raw_type = _require(data, "type", "Transaction")
        try:
            tx_type = TransactionType(raw_type)
        except ValueError:
            raise InvalidRecordError(f"Unknown transaction type: {raw_type!r}")
        item_name = data.get("itemName", data.get("item_name"))
        if item_name is None:
            raise InvalidRecordError("Transaction record is missing required field 'itemName'")
        return cls(
            date=str(_require(data, "date", "Transaction")),
            item_name=str(item_name),
            type=tx_type,
            quantity=float(_require(data, "quantity", "Transaction")),
            id=data.get("id"),
            status=data.get("status"),
        )

    @property
    def is_outbound(self) -> bool:
        return self.type == TransactionType.OUTBOUND

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "itemName": self.item_name,
            "type": self.type.value,
            "quantity": self.quantity,
            "status": self.status,
        }


ItemLike = Union[Item, Mapping[str, Any]]
TransactionLike = Union[Transaction, Mapping[str, Any]]


def coerce_items(items: List[ItemLike]) -> List[Item]:
    """Accept Item instances or camelCase dicts."""
    return [i if isinstance(i, Item) else Item.from_dict(i) for i in items]


def coerce_transactions(transactions: List[TransactionLike]) -> List[Transaction]:
    return [t if isinstance(t, Transaction) else Transaction.from_dict(t) for t in transactions]


# ═══════════════════════════════════════════════════════════════════════════════
# DERIVED RECORDS
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DemandHistory:
    """
    Trailing monthly outbound quantities for one item (oldest first).

    Attributes:
        item_id: Item the series belongs to
        monthly_demand: One total per calendar month, calendar order
        matched_transactions: Outbound transactions that landed in the window
    """
    item_id: str
    monthly_demand: List[int]
    matched_transactions: int = 0

    @property
    def has_history(self) -> bool:
        return self.matched_transactions > 0

    @property
    def values(self) -> List[int]:
        """Series used by the statistics; empty when nothing matched."""
        return list(self.monthly_demand) if self.has_history else []

    def to_dict(self) -> Dict[str, Any]:
        return {
            "itemId": self.item_id,
            "monthlyDemand": list(self.monthly_demand),
            "matchedTransactions": self.matched_transactions,
        }


@dataclass(frozen=True)
class DemandForecast:
    """Forecast for one future period."""
    period: str
    predicted_demand: int
    confidence: int
    seasonal_index: float
    trend_component: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "period": self.period,
            "predictedDemand": self.predicted_demand,
            "confidence": self.confidence,
            "seasonalIndex": self.seasonal_index,
            "trendComponent": self.trend_component,
        }


@dataclass(frozen=True)
class PredictionResult:
    """
    Canonical per-item output of the engine.

    Attributes:
        item_id: Item identifier
        item_name: Item name
        current_stock: Units on hand
        predicted_demand: Average forecast demand per period (rounded)
        recommended_reorder_point: Reorder point (safety-stock based)
        recommended_order_quantity: Economic order quantity
        stockout_risk: Risk score 0-100 over the stockout horizon
        days_until_stockout: Days of cover (999 when no demand is foreseen)
        confidence: Average forecast confidence (rounded)
        seasonal_factor: Seasonal index at the latest observed period
        trend_factor: OLS slope of the demand series
    """
    item_id: str
    item_name: str
    current_stock: float
    predicted_demand: int
    recommended_reorder_point: int
    recommended_order_quantity: int
    stockout_risk: int
    days_until_stockout: int
    confidence: int
    seasonal_factor: float
    trend_factor: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "itemId": self.item_id,
            "itemName": self.item_name,
            "currentStock": self.current_stock,
            "predictedDemand": self.predicted_demand,
            "recommendedReorderPoint": self.recommended_reorder_point,
            "recommendedOrderQuantity": self.recommended_order_quantity,
            "stockoutRisk": self.stockout_risk,
            "daysUntilStockout": self.days_until_stockout,
            "confidence": self.confidence,
            "seasonalFactor": self.seasonal_factor,
            "trendFactor": self.trend_factor,
        }


@dataclass(frozen=True)
class Recommendation:
    item_id: str
    action: RecommendationAction
    current_level: float
    recommended_level: float
    reasoning: str
    priority: RecommendationPriority

    def to_dict(self) -> Dict[str, Any]:
        return {
            "itemId": self.item_id,
            "action": self.action.value,
            "currentLevel": self.current_level,
            "recommendedLevel": self.recommended_level,
            "reasoning": self.reasoning,
            "priority": self.priority.value,
        }


@dataclass(frozen=True)
class InventoryOptimization:
    """Aggregate cost model plus per-item recommendations (most urgent first)."""
    total_carrying_cost: float
    total_ordering_cost: float
    total_stockout_cost: float
    optimized_inventory_value: float
    recommendations: List[Recommendation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalCarryingCost": self.total_carrying_cost,
            "totalOrderingCost": self.total_ordering_cost,
            "totalStockoutCost": self.total_stockout_cost,
            "optimizedInventoryValue": self.optimized_inventory_value,
            "recommendations": [r.to_dict() for r in self.recommendations],
        }


@dataclass(frozen=True)
class ABCClassification:
    item_id: str
    item_name: str
    annual_value: float
    category: ABCCategory
    cumulative_percentage: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "itemId": self.item_id,
            "itemName": self.item_name,
            "annualValue": self.annual_value,
            "category": self.category.value,
            "cumulativePercentage": self.cumulative_percentage,
        }


@dataclass(frozen=True)
class Alert:
    """Notification derived from a prediction."""
    id: str
    severity: AlertSeverity
    title: str
    message: str
    item_id: str
    action_required: bool
    type: str = "prediction"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "severity": self.severity.value,
            "title": self.title,
            "message": self.message,
            "itemId": self.item_id,
            "actionRequired": self.action_required,
        }
