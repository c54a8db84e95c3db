"""
Use Cases Package - Application Layer

Forecasting, trending and prediction lifecycle use cases, plus the
system health endpoints.
"""

from .forecast_use_cases import GenerateForecastUseCase, GetTrendingItemsUseCase
from .health_use_cases import GetApplicationInfoUseCase, GetHealthStatusUseCase
from .prediction_use_cases import (
    ArchiveExpiredPredictionsUseCase,
    GeneratePredictionsUseCase,
    GetPredictionAccuracyUseCase,
    GetPredictionUseCase,
    ListPredictionsUseCase,
    SavePredictionUseCase,
)

__all__ = [
    "GenerateForecastUseCase",
    "GetTrendingItemsUseCase",
    "GetApplicationInfoUseCase",
    "GetHealthStatusUseCase",
    "ArchiveExpiredPredictionsUseCase",
    "GeneratePredictionsUseCase",
    "GetPredictionAccuracyUseCase",
    "GetPredictionUseCase",
    "ListPredictionsUseCase",
    "SavePredictionUseCase",
]
