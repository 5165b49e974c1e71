"""
═══════════════════════════════════════════════════════════════════════════════════════════════════════
                    INVENTORY ANALYTICS — API
═══════════════════════════════════════════════════════════════════════════════════════════════════════

Aplicação FastAPI: monta o router de analytics preditivo, CORS e os
endpoints de serviço (/health, /settings).

Arranque:
    python -m inventory_analytics.run_server
    uvicorn inventory_analytics.api:app --reload
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .predictive.api_predictive import router as predictive_router
from .settings import AnalyticsSettings

logger = logging.getLogger(__name__)

app = FastAPI(title="Inventory Analytics", version=__version__)
app.include_router(predictive_router)
logger.info("Predictive analytics API loaded successfully")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -------------------------------
# Endpoints
# -------------------------------

@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/settings")
def get_settings() -> Dict[str, Any]:
    return AnalyticsSettings.to_dict()
