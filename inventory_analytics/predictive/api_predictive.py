"""
Inventory Analytics - Predictive API
====================================

Endpoints REST para o motor de analytics preditivo.

Cada pedido transporta o snapshot (items, movements, transactions) sobre o
qual o motor calcula; nada é persistido entre pedidos.

Endpoints:
- POST /analytics/predictive/predictions                 - Previsões por item
- POST /analytics/predictive/forecast/{item_id}          - Forecast de um item
- POST /analytics/predictive/reorder-point/{item_id}     - Ponto de encomenda
- POST /analytics/predictive/eoq/{item_id}               - Quantidade económica
- POST /analytics/predictive/optimization                - Custos e recomendações
- POST /analytics/predictive/abc-analysis                - Classificação ABC
- POST /analytics/predictive/alerts                      - Alertas preditivos
- POST /analytics/predictive/report                      - Dados do relatório
- GET  /analytics/predictive/config                      - Configuração ativa
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from ..settings import AnalyticsSettings
from .alerts import generate_predictive_alerts
from .models import InvalidRecordError
from .prediction_engine import PredictiveAnalyticsEngine
from .report import build_report

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics/predictive", tags=["Predictive Analytics"])


# ═══════════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════════

class ItemPayload(BaseModel):
    """Item de inventário."""
    id: str
    name: str
    price: float = 0.0
    quantity: float = 0.0
    minStock: float = 0.0


class TransactionPayload(BaseModel):
    """Transação de stock."""
    date: str = Field(description="Data ISO-8601")
    itemName: str
    type: str = Field(description="Inbound | Outbound")
    quantity: float
    id: Optional[str] = None
    status: Optional[str] = None


class SnapshotRequest(BaseModel):
    """Snapshot de dados sobre o qual o motor calcula."""
    items: List[ItemPayload] = Field(default_factory=list)
    movements: List[Dict[str, Any]] = Field(default_factory=list)
    transactions: List[TransactionPayload] = Field(default_factory=list)
    now: Optional[datetime] = Field(default=None, description="Instante de referência (default: agora)")


class QuantityResponse(BaseModel):
    item_id: str
    value: int


# ═══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def _build_engine(request: SnapshotRequest) -> PredictiveAnalyticsEngine:
    try:
        return PredictiveAnalyticsEngine(
            items=[i.model_dump() for i in request.items],
            movements=request.movements,
            transactions=[t.model_dump() for t in request.transactions],
            config=AnalyticsSettings.get_config(),
            now=request.now,
        )
    except InvalidRecordError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _require_item(engine: PredictiveAnalyticsEngine, item_id: str) -> None:
    if engine.get_item(item_id) is None:
        raise HTTPException(status_code=404, detail=f"Item {item_id} not found")


# ═══════════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════════

@router.post("/predictions")
async def get_predictions(request: SnapshotRequest) -> List[Dict[str, Any]]:
    """Previsão por item: procura, ROP, EOQ, risco de ruptura."""
    engine = _build_engine(request)
    try:
        return [p.to_dict() for p in engine.generate_predictions()]
    except Exception as e:
        logger.error(f"Prediction generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/forecast/{item_id}")
async def get_forecast(
    item_id: str,
    request: SnapshotRequest,
    periods: int = Query(default=3, ge=1, le=24, description="Períodos a prever"),
) -> List[Dict[str, Any]]:
    """Forecast de procura de um item para os próximos períodos."""
    engine = _build_engine(request)
    _require_item(engine, item_id)
    try:
        return [f.to_dict() for f in engine.predict_demand(item_id, periods)]
    except Exception as e:
        logger.error(f"Demand forecast for {item_id} failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/reorder-point/{item_id}", response_model=QuantityResponse)
async def get_reorder_point(
    item_id: str,
    request: SnapshotRequest,
    service_level: Optional[float] = Query(default=None, gt=0, lt=1, description="Nível de serviço"),
):
    engine = _build_engine(request)
    _require_item(engine, item_id)
    return QuantityResponse(item_id=item_id, value=engine.calculate_reorder_point(item_id, service_level))


@router.post("/eoq/{item_id}", response_model=QuantityResponse)
async def get_eoq(
    item_id: str,
    request: SnapshotRequest,
    annual_demand: Optional[float] = Query(default=None, ge=0, description="Procura anual (override)"),
):
    engine = _build_engine(request)
    _require_item(engine, item_id)
    return QuantityResponse(item_id=item_id, value=engine.calculate_eoq(item_id, annual_demand))


@router.post("/optimization")
async def get_optimization(request: SnapshotRequest) -> Dict[str, Any]:
    """Custos totais e recomendações (increase / decrease / maintain)."""
    engine = _build_engine(request)
    try:
        return engine.optimize_inventory().to_dict()
    except Exception as e:
        logger.error(f"Inventory optimization failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/abc-analysis")
async def get_abc_analysis(request: SnapshotRequest) -> List[Dict[str, Any]]:
    engine = _build_engine(request)
    try:
        return [c.to_dict() for c in engine.generate_abc_analysis()]
    except Exception as e:
        logger.error(f"ABC analysis failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/alerts")
async def get_alerts(request: SnapshotRequest) -> List[Dict[str, Any]]:
    engine = _build_engine(request)
    try:
        predictions = engine.generate_predictions()
        return [a.to_dict() for a in generate_predictive_alerts(predictions, engine.config)]
    except Exception as e:
        logger.error(f"Alert generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/report")
async def get_report(request: SnapshotRequest) -> Dict[str, Any]:
    """Dados para o relatório (tabela de previsões, custos, ações prioritárias)."""
    engine = _build_engine(request)
    try:
        predictions = engine.generate_predictions()
        optimization = engine.optimize_inventory()
        return build_report(predictions, optimization, generated_at=engine.now).to_dict()
    except Exception as e:
        logger.error(f"Report generation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/config")
async def get_config() -> Dict[str, Any]:
    return AnalyticsSettings.to_dict()
