"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    INVENTORY ANALYTICS — PREDICTIVE MODULE
═══════════════════════════════════════════════════════════════════════════════════════════════════════

Motor de analytics preditivo de inventário:

1. **Histórico de procura**: série mensal (12 meses) de saídas por item
2. **Decomposição**: índices sazonais (média móvel centrada) e tendência (OLS)
3. **Forecast**: nível + tendência + sazonalidade, com confiança
4. **ROP**: ponto de encomenda com safety stock por nível de serviço
5. **EOQ**: quantidade económica de encomenda
6. **Risco de ruptura**: dias até ruptura e risco a 30 dias
7. **Otimização**: custos de posse/encomenda/ruptura e recomendações
8. **ABC**: classificação por valor anual
9. **Alertas**: regras sobre as previsões

Fluxo:
    registos → histórico → decomposição → forecast → ROP / EOQ / risco
             → previsões → recomendações / ABC / alertas

Mathematical Foundations:
───────────────────────
    ROP = μ * L + z * σ * sqrt(L)
    EOQ = sqrt(2 * D * S / H)
"""

from .abc_analysis import classify_abc
from .alerts import generate_predictive_alerts
from .config import DEFAULT_CONFIG, AnalyticsConfig
from .decomposition import TrendEstimate, linear_trend, seasonal_indices
from .demand_forecasting import forecast_demand
from .demand_history import build_demand_history
from .models import (
    ABCCategory,
    ABCClassification,
    Alert,
    AlertSeverity,
    DemandForecast,
    DemandHistory,
    InvalidRecordError,
    InventoryOptimization,
    Item,
    PredictionResult,
    Recommendation,
    RecommendationAction,
    RecommendationPriority,
    Transaction,
    TransactionType,
)
from .optimizer import optimize_inventory
from .prediction_engine import PredictiveAnalyticsEngine, build_prediction, create_predictive_engine
from .report import AnalyticsReport, build_report
from .rop_engine import compute_eoq, compute_reorder_point

__all__ = [
    # Config
    "AnalyticsConfig",
    "DEFAULT_CONFIG",
    # Records
    "Item",
    "Transaction",
    "TransactionType",
    "DemandHistory",
    "DemandForecast",
    "PredictionResult",
    "Recommendation",
    "RecommendationAction",
    "RecommendationPriority",
    "InventoryOptimization",
    "ABCCategory",
    "ABCClassification",
    "Alert",
    "AlertSeverity",
    "InvalidRecordError",
    # Engine
    "PredictiveAnalyticsEngine",
    "create_predictive_engine",
    "build_prediction",
    # Stages
    "build_demand_history",
    "seasonal_indices",
    "linear_trend",
    "TrendEstimate",
    "forecast_demand",
    "compute_reorder_point",
    "compute_eoq",
    "optimize_inventory",
    "classify_abc",
    "generate_predictive_alerts",
    "AnalyticsReport",
    "build_report",
]
