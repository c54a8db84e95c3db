"""
Domain Entities - Prediction

Persisted forecast snapshots. A prediction is valid until ``valid_until``;
afterwards it is archived, either when it is read or by the daily sweep.
Archived predictions never become active again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from uuid import UUID, uuid4


class PredictionType(str, Enum):
    INVENTORY = "INVENTORY"
    TRENDING = "TRENDING"
    DEMAND = "DEMAND"


class PredictionStatus(str, Enum):
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    ARCHIVED = "ARCHIVED"


class ModelAlgorithm(str, Enum):
    LINEAR_REGRESSION = "LINEAR_REGRESSION"
    EXPONENTIAL_SMOOTHING = "EXPONENTIAL_SMOOTHING"
    ARIMA = "ARIMA"
    ML_ENSEMBLE = "ML_ENSEMBLE"


@dataclass
class HistoricalSummary:
    """Snapshot of the history a prediction was computed from."""

    data_points: int = 0
    average_value: Optional[float] = None
    trend: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


@dataclass
class PredictionFactors:
    seasonality: Optional[float] = None
    trend: Optional[float] = None


@dataclass
class PredictionModelMetrics:
    algorithm: ModelAlgorithm = ModelAlgorithm.LINEAR_REGRESSION
    accuracy: Optional[float] = None
    r_squared: Optional[float] = None
    rmse: Optional[float] = None
    mae: Optional[float] = None


@dataclass
class Prediction:
    """A stored forecast for a category and/or product."""

    type: PredictionType
    prediction_date: datetime
    forecasted_value: float
    valid_until: datetime
    category_id: Optional[str] = None
    product_id: Optional[str] = None
    id: UUID = field(default_factory=uuid4)
    confidence_score: float = 0.0
    historical_data: HistoricalSummary = field(default_factory=HistoricalSummary)
    factors: PredictionFactors = field(default_factory=PredictionFactors)
    model_metrics: PredictionModelMetrics = field(
        default_factory=PredictionModelMetrics
    )
    recommendations: List[str] = field(default_factory=list)
    status: PredictionStatus = PredictionStatus.ACTIVE

    # Audit
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.category_id and not self.product_id:
            raise ValueError("Prediction requires a category_id or a product_id")
        if not 0.0 <= self.confidence_score <= 1.0:
            raise ValueError("confidence_score must be within [0, 1]")

    def update_timestamp(self) -> None:
        """Update the 'updated_at' timestamp to current time."""
        self.updated_at = datetime.now(timezone.utc)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        reference = now or datetime.now(timezone.utc)
        return reference > _as_utc(self.valid_until)

    def archive_if_expired(self, now: Optional[datetime] = None) -> bool:
        """Archive an active prediction past its validity window.

        Returns True when the status changed.
        """
        if self.status != PredictionStatus.ACTIVE or not self.is_expired(now):
            return False
        self.status = PredictionStatus.ARCHIVED
        self.update_timestamp()
        return True


def _as_utc(value: datetime) -> datetime:
    # Mongo hands back naive datetimes that are implicitly UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
