"""Synthetic rate data for degraded market data responses."""

from .generator import (
    ASSET_BASELINES,
    ASSETS,
    CONFIDENCE_MAX,
    CONFIDENCE_MIN,
    MAX_HISTORY_DAYS,
    RateFallbackGenerator,
)
from .types import (
    TRENDS,
    AssetBaseline,
    HistoryRates,
    Prediction,
    RateSnapshot,
    TodayRate,
)

__all__ = [
    "RateFallbackGenerator",
    "ASSETS",
    "ASSET_BASELINES",
    "CONFIDENCE_MIN",
    "CONFIDENCE_MAX",
    "MAX_HISTORY_DAYS",
    "AssetBaseline",
    "RateSnapshot",
    "TodayRate",
    "HistoryRates",
    "Prediction",
    "TRENDS",
]
