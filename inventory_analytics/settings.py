"""
Inventory Analytics - Settings
==============================

Carrega a configuração do motor de analytics a partir de variáveis de ambiente.
Campos não definidos mantêm os defaults de ``AnalyticsConfig``.

Uso:
    from inventory_analytics.settings import AnalyticsSettings

    config = AnalyticsSettings.get_config()
    engine = PredictiveAnalyticsEngine(items, movements, transactions, config=config)

Configuração via variáveis de ambiente:
    INVENTORY_ANALYTICS_ORDERING_COST=75
    INVENTORY_ANALYTICS_CARRYING_COST_RATE=0.2
    INVENTORY_ANALYTICS_SERVICE_LEVEL=0.99
"""

from __future__ import annotations

import logging
import os
from dataclasses import replace
from typing import Any, Dict, Optional

from .predictive.config import POSITIVE_FIELDS, AnalyticsConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "INVENTORY_ANALYTICS_"

# env suffix -> (config field, type)
_ENV_MAPPING = {
    "HISTORY_MONTHS": ("history_months", int),
    "SEASONAL_PERIOD": ("seasonal_period", int),
    "FORECAST_PERIODS": ("forecast_periods", int),
    "SERVICE_LEVEL": ("service_level", float),
    "DEFAULT_Z_SCORE": ("default_z_score", float),
    "LEAD_TIME_PERIODS": ("lead_time_periods", float),
    "ORDERING_COST": ("ordering_cost", float),
    "CARRYING_COST_RATE": ("carrying_cost_rate", float),
    "STOCKOUT_COST_RATE": ("stockout_cost_rate", float),
    "DAYS_PER_PERIOD": ("days_per_period", float),
    "STOCKOUT_HORIZON_DAYS": ("stockout_horizon_days", float),
    "ABC_A_THRESHOLD": ("abc_a_threshold", float),
    "ABC_B_THRESHOLD": ("abc_b_threshold", float),
    "HIGH_RISK_ALERT_THRESHOLD": ("high_risk_alert_threshold", float),
    "LOW_CONFIDENCE_ALERT_THRESHOLD": ("low_confidence_alert_threshold", float),
    "HIGH_PRIORITY_RISK": ("high_priority_risk", float),
    "EXCESS_STOCK_MULTIPLIER": ("excess_stock_multiplier", float),
}


class AnalyticsSettings:
    """
    Singleton para a configuração do motor.

    Uso:
        config = AnalyticsSettings.get_config()
        AnalyticsSettings.reset()   # recarregar do ambiente (testes)
    """

    _instance: Optional[AnalyticsConfig] = None

    @classmethod
    def _load_from_env(cls) -> AnalyticsConfig:
        """Carrega configuração de variáveis de ambiente."""
        overrides: Dict[str, Any] = {}

        for suffix, (attr_name, cast) in _ENV_MAPPING.items():
            env_var = ENV_PREFIX + suffix
            value = os.environ.get(env_var)
            if not value:
                continue
            try:
                parsed = cast(value)
            except ValueError:
                logger.warning(f"Invalid value for {env_var}: {value}")
                continue
            if attr_name in POSITIVE_FIELDS and parsed <= 0:
                logger.warning(f"Invalid value for {env_var}: {value} (must be positive)")
                continue
            overrides[attr_name] = parsed
            logger.info(f"Analytics setting {attr_name} = {value}")

        return replace(AnalyticsConfig(), **overrides)

    @classmethod
    def get_config(cls) -> AnalyticsConfig:
        """Obtém configuração atual."""
        if cls._instance is None:
            cls._instance = cls._load_from_env()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset para recarregar config."""
        cls._instance = None

    @classmethod
    def to_dict(cls) -> Dict[str, Any]:
        """Exporta configuração como dict."""
        return cls.get_config().to_dict()
