"""
DTOs Package - Application Layer

Data Transfer Objects exchanged between the application layer and the
HTTP controllers.
"""

from .forecast_dto import (
    ForecastPointDTO,
    ForecastResponseDTO,
    ForecastResultDTO,
    TrendingItemDTO,
    TrendingItemsResponseDTO,
)
from .health_dto import ApplicationInfoDTO, DependencyStatusDTO, SystemHealthDTO
from .prediction_dto import (
    ArchiveResponseDTO,
    ArchiveResultDTO,
    CategoryGenerationResultDTO,
    GeneratePredictionsRequestDTO,
    GeneratePredictionsResponseDTO,
    PredictionAccuracyDTO,
    PredictionAccuracyResponseDTO,
    PredictionCreateDTO,
    PredictionDTO,
    PredictionListResponseDTO,
    PredictionResponseDTO,
)

__all__ = [
    "ForecastPointDTO",
    "ForecastResponseDTO",
    "ForecastResultDTO",
    "TrendingItemDTO",
    "TrendingItemsResponseDTO",
    "ApplicationInfoDTO",
    "DependencyStatusDTO",
    "SystemHealthDTO",
    "ArchiveResponseDTO",
    "ArchiveResultDTO",
    "CategoryGenerationResultDTO",
    "GeneratePredictionsRequestDTO",
    "GeneratePredictionsResponseDTO",
    "PredictionAccuracyDTO",
    "PredictionAccuracyResponseDTO",
    "PredictionCreateDTO",
    "PredictionDTO",
    "PredictionListResponseDTO",
    "PredictionResponseDTO",
]
