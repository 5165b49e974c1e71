"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    ROP ENGINE (Ponto de Encomenda) + EOQ
═══════════════════════════════════════════════════════════════════════════════════════════════════════

Mathematical Formulation:
─────────────────────────
    ROP clássico:
        ROP = μ * L + z * σ * sqrt(L)

    onde:
        μ = consumo médio mensal (histórico)
        σ = desvio padrão amostral do consumo mensal
        L = lead time (períodos)
        z = fator do nível de serviço (tabela: 0.99 -> 2.33, 0.95 -> 1.645, outro -> 1.28)

    Safety Stock:
        SS = z * σ * sqrt(L)

    EOQ:
        EOQ = sqrt(2 * D * S / H)

    onde:
        D = procura anual (12 x média mensal, ou valor fornecido)
        S = custo por encomenda
        H = preço * taxa de posse anual
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

from .config import DEFAULT_CONFIG, AnalyticsConfig
from .models import Item
from .stats_utils import round_half_up, sample_std, series_mean

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReorderPointBreakdown:
    """Intermediate quantities of a reorder point calculation."""
    lead_time_demand: float
    safety_stock: float
    z_score: float
    reorder_point: int
    used_fallback: bool = False

    def to_dict(self) -> dict:
        return {
            "leadTimeDemand": self.lead_time_demand,
            "safetyStock": self.safety_stock,
            "zScore": self.z_score,
            "reorderPoint": self.reorder_point,
            "usedFallback": self.used_fallback,
        }


def compute_reorder_point(
    item: Item,
    history: Sequence[float],
    service_level: Optional[float] = None,
    config: Optional[AnalyticsConfig] = None,
) -> ReorderPointBreakdown:
    """
    Compute the reorder point and its safety stock.

    Args:
        item: Item (``min_stock`` is the fallback)
        history: Monthly demand, empty when the item has no history
        service_level: Target service level (defaults to config)
        config: Engine configuration

    Returns:
        ReorderPointBreakdown
    """
    config = config or DEFAULT_CONFIG
    service_level = config.service_level if service_level is None else service_level
    z = config.z_score(service_level)

    if len(history) == 0:
        return ReorderPointBreakdown(
            lead_time_demand=0.0,
            safety_stock=0.0,
            z_score=z,
            reorder_point=max(0, round_half_up(item.min_stock)),
            used_fallback=True,
        )

    lead_time = config.lead_time_periods
    lead_time_demand = series_mean(history) * lead_time
    safety_stock = z * sample_std(history) * math.sqrt(lead_time)

    rop = max(0, round_half_up(lead_time_demand + safety_stock))
    logger.debug(
        f"ROP {item.id}: LTD={lead_time_demand:.1f}, SS={safety_stock:.1f} "
        f"(z={z:.3f}, SL={service_level:.2f}) -> {rop}"
    )
    return ReorderPointBreakdown(
        lead_time_demand=lead_time_demand,
        safety_stock=safety_stock,
        z_score=z,
        reorder_point=rop,
    )


def compute_eoq(
    item: Item,
    history: Sequence[float],
    annual_demand: Optional[float] = None,
    config: Optional[AnalyticsConfig] = None,
) -> int:
    """
    Economic Order Quantity.

    EOQ = √(2 × D × S / H)

    A zero carrying cost (zero-priced item) returns one month of demand.
    """
    config = config or DEFAULT_CONFIG

    if annual_demand:
        demand = float(annual_demand)
    else:
        demand = series_mean(history) * 12

    carrying_cost = item.price * config.carrying_cost_rate
    if carrying_cost == 0:
        return max(0, round_half_up(demand / 12))

    radicand = 2 * demand * config.ordering_cost / carrying_cost
    return max(0, round_half_up(math.sqrt(max(0.0, radicand))))
