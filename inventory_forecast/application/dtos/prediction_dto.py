"""
Application DTOs - Prediction

Payloads for storing, reading, batch-generating and auditing persisted
predictions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from inventory_forecast.domain.entities.prediction import (
    HistoricalSummary,
    ModelAlgorithm,
    Prediction,
    PredictionFactors,
    PredictionModelMetrics,
    PredictionStatus,
    PredictionType,
)


class HistoricalSummaryDTO(BaseModel):
    data_points: int = Field(default=0, ge=0)
    average_value: Optional[float] = None
    trend: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class PredictionFactorsDTO(BaseModel):
    seasonality: Optional[float] = None
    trend: Optional[float] = None


class PredictionModelMetricsDTO(BaseModel):
    algorithm: ModelAlgorithm = ModelAlgorithm.LINEAR_REGRESSION
    accuracy: Optional[float] = None
    r_squared: Optional[float] = None
    rmse: Optional[float] = None
    mae: Optional[float] = None


class PredictionCreateDTO(BaseModel):
    """Payload for storing a prediction."""

    type: PredictionType
    category_id: Optional[str] = None
    product_id: Optional[str] = None
    prediction_date: datetime
    forecasted_value: float
    confidence_score: float = Field(default=0.0, ge=0.0, le=1.0)
    historical_data: HistoricalSummaryDTO = Field(default_factory=HistoricalSummaryDTO)
    factors: PredictionFactorsDTO = Field(default_factory=PredictionFactorsDTO)
    model_metrics: PredictionModelMetricsDTO = Field(
        default_factory=PredictionModelMetricsDTO
    )
    recommendations: List[str] = Field(default_factory=list)
    status: PredictionStatus = PredictionStatus.ACTIVE
    valid_until: datetime

    @model_validator(mode="after")
    def _require_scope(self) -> "PredictionCreateDTO":
        if not self.category_id and not self.product_id:
            raise ValueError("Either category_id or product_id must be provided")
        return self

    def to_domain(self) -> Prediction:
        return Prediction(
            type=self.type,
            category_id=self.category_id,
            product_id=self.product_id,
            prediction_date=self.prediction_date,
            forecasted_value=self.forecasted_value,
            confidence_score=self.confidence_score,
            historical_data=HistoricalSummary(**self.historical_data.model_dump()),
            factors=PredictionFactors(**self.factors.model_dump()),
            model_metrics=PredictionModelMetrics(**self.model_metrics.model_dump()),
            recommendations=list(self.recommendations),
            status=self.status,
            valid_until=self.valid_until,
        )


class PredictionDTO(PredictionCreateDTO):
    """Stored prediction as returned to callers."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, prediction: Prediction) -> "PredictionDTO":
        return cls(
            id=prediction.id,
            type=prediction.type,
            category_id=prediction.category_id,
            product_id=prediction.product_id,
            prediction_date=prediction.prediction_date,
            forecasted_value=prediction.forecasted_value,
            confidence_score=prediction.confidence_score,
            historical_data=HistoricalSummaryDTO(
                data_points=prediction.historical_data.data_points,
                average_value=prediction.historical_data.average_value,
                trend=prediction.historical_data.trend,
                start_date=prediction.historical_data.start_date,
                end_date=prediction.historical_data.end_date,
            ),
            factors=PredictionFactorsDTO(
                seasonality=prediction.factors.seasonality,
                trend=prediction.factors.trend,
            ),
            model_metrics=PredictionModelMetricsDTO(
                algorithm=prediction.model_metrics.algorithm,
                accuracy=prediction.model_metrics.accuracy,
                r_squared=prediction.model_metrics.r_squared,
                rmse=prediction.model_metrics.rmse,
                mae=prediction.model_metrics.mae,
            ),
            recommendations=list(prediction.recommendations),
            status=prediction.status,
            valid_until=prediction.valid_until,
            created_at=prediction.created_at,
            updated_at=prediction.updated_at,
        )


class GeneratePredictionsRequestDTO(BaseModel):
    """Admin request to generate and store predictions for categories."""

    category_ids: List[str] = Field(min_length=1)


class CategoryGenerationResultDTO(BaseModel):
    category_id: str
    status: Literal["success", "failed", "error"]
    prediction_id: Optional[UUID] = None
    reason: Optional[str] = None
    error: Optional[str] = None


class GeneratePredictionsResponseDTO(BaseModel):
    success: bool = True
    message: str = "Prediction generation completed"
    data: List[CategoryGenerationResultDTO] = Field(default_factory=list)


class CategoryAccuracyDTO(BaseModel):
    total_predictions: int
    average_confidence: float


class PredictionAccuracyDTO(BaseModel):
    """Confidence audit over recently archived predictions."""

    total_predictions: int
    average_confidence: float
    by_category: Dict[str, CategoryAccuracyDTO] = Field(default_factory=dict)


class ArchiveResultDTO(BaseModel):
    archived: int = Field(ge=0)
    executed_at: datetime


class PredictionResponseDTO(BaseModel):
    success: bool = True
    data: PredictionDTO


class PredictionListResponseDTO(BaseModel):
    success: bool = True
    count: int = 0
    data: List[PredictionDTO] = Field(default_factory=list)


class PredictionAccuracyResponseDTO(BaseModel):
    success: bool = True
    data: PredictionAccuracyDTO


class ArchiveResponseDTO(BaseModel):
    success: bool = True
    data: ArchiveResultDTO
