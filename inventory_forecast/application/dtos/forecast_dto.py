"""
Application DTOs - Forecast

Response payloads for on-demand forecasts and trending item rankings.
"""

from __future__ import annotations

import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from inventory_forecast.domain.entities.forecast import (
    ForecastPoint,
    ForecastResult,
    TrendLabel,
)
from inventory_forecast.domain.entities.sales import TrendingItem


class ForecastPointDTO(BaseModel):
    """Projected quantity for a single future day."""

    date: datetime.date
    forecasted_quantity: int = Field(ge=0)
    day_of_week: str

    @classmethod
    def from_domain(cls, point: ForecastPoint) -> "ForecastPointDTO":
        return cls(
            date=point.date,
            forecasted_quantity=point.forecasted_quantity,
            day_of_week=point.day_of_week,
        )


class ForecastModelMetricsDTO(BaseModel):
    algorithm: str
    r_squared: Optional[float] = None
    data_points: int


class ForecastResultDTO(BaseModel):
    """
    Forecast outcome.

    When ``success`` is false the scope lacks history: ``reason``,
    ``data_points`` and ``required`` describe the shortfall and the
    forecast fields are omitted.
    """

    success: bool
    reason: Optional[str] = None
    data_points: int = 0
    required: Optional[int] = None
    trend: Optional[TrendLabel] = None
    trend_slope: Optional[float] = None
    confidence_score: Optional[float] = Field(default=None, ge=0.0, le=0.95)
    historical_average: Optional[float] = None
    historical_median: Optional[float] = None
    standard_deviation: Optional[float] = None
    predictions: List[ForecastPointDTO] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    model_metrics: Optional[ForecastModelMetricsDTO] = None
    history_start: Optional[datetime.date] = None
    history_end: Optional[datetime.date] = None

    @classmethod
    def from_domain(cls, result: ForecastResult) -> "ForecastResultDTO":
        metrics = None
        if result.model_metrics is not None:
            metrics = ForecastModelMetricsDTO(
                algorithm=result.model_metrics.algorithm,
                r_squared=result.model_metrics.r_squared,
                data_points=result.model_metrics.data_points,
            )
        return cls(
            success=result.success,
            reason=result.reason,
            data_points=result.data_points,
            required=result.required,
            trend=result.trend,
            trend_slope=result.trend_slope,
            confidence_score=result.confidence_score,
            historical_average=result.historical_average,
            historical_median=result.historical_median,
            standard_deviation=result.standard_deviation,
            predictions=[ForecastPointDTO.from_domain(p) for p in result.predictions],
            recommendations=list(result.recommendations),
            model_metrics=metrics,
            history_start=result.history_start,
            history_end=result.history_end,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": True,
                "data_points": 182,
                "trend": "INCREASING",
                "confidence_score": 0.72,
                "historical_average": 41.3,
                "historical_median": 40.0,
                "standard_deviation": 6.8,
                "predictions": [
                    {
                        "date": "2026-03-03",
                        "forecasted_quantity": 47,
                        "day_of_week": "Tuesday",
                    }
                ],
                "recommendations": [
                    "Demand is trending upward. Consider increasing stock levels.",
                    "Peak demand expected on Tuesday (2026-03-03)",
                ],
                "model_metrics": {
                    "algorithm": "LINEAR_REGRESSION",
                    "r_squared": 0.72,
                    "data_points": 182,
                },
            }
        }
    }


class ForecastResponseDTO(BaseModel):
    """Envelope used by the forecast endpoints."""

    success: bool = True
    data: ForecastResultDTO


class TrendingItemDTO(BaseModel):
    item_id: str
    total_quantity: float
    total_revenue: float
    avg_order_value: float
    order_count: int

    @classmethod
    def from_domain(cls, item: TrendingItem) -> "TrendingItemDTO":
        return cls(
            item_id=item.item_id,
            total_quantity=item.total_quantity,
            total_revenue=item.total_revenue,
            avg_order_value=item.avg_order_value,
            order_count=item.order_count,
        )


class TrendingItemsResponseDTO(BaseModel):
    success: bool = True
    data: List[TrendingItemDTO] = Field(default_factory=list)
