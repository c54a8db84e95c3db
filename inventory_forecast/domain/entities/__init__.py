"""
Domain Entities Package

Sales history, forecast results, persisted predictions and health value
objects.
"""

from .errors import (
    DomainError,
    ForecastValidationError,
    PredictionNotFoundError,
    StoreFailureError,
)
from .forecast import (
    ForecastModelMetrics,
    ForecastPoint,
    ForecastResult,
    TrendAnalysis,
    TrendLabel,
    clamp_confidence,
)
from .health import ApplicationInfo, DependencyStatus, ServiceStatus, SystemHealth
from .prediction import (
    HistoricalSummary,
    ModelAlgorithm,
    Prediction,
    PredictionFactors,
    PredictionModelMetrics,
    PredictionStatus,
    PredictionType,
)
from .sales import (
    ForecastScope,
    SalesMetadata,
    SalesRecord,
    TimeSeries,
    TimeSeriesPoint,
    TrendingItem,
)

__all__ = [
    "DomainError",
    "ForecastValidationError",
    "PredictionNotFoundError",
    "StoreFailureError",
    "ForecastModelMetrics",
    "ForecastPoint",
    "ForecastResult",
    "TrendAnalysis",
    "TrendLabel",
    "clamp_confidence",
    "ApplicationInfo",
    "DependencyStatus",
    "ServiceStatus",
    "SystemHealth",
    "HistoricalSummary",
    "ModelAlgorithm",
    "Prediction",
    "PredictionFactors",
    "PredictionModelMetrics",
    "PredictionStatus",
    "PredictionType",
    "ForecastScope",
    "SalesMetadata",
    "SalesRecord",
    "TimeSeries",
    "TimeSeriesPoint",
    "TrendingItem",
]
