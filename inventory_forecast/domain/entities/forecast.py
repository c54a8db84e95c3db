"""Domain entities describing forecast computations and their results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional

CONFIDENCE_CEILING = 0.95
DEFAULT_CONFIDENCE = 0.5
LINEAR_REGRESSION = "LINEAR_REGRESSION"


class TrendLabel(str, Enum):
    """Coarse classification of a regression slope."""

    INCREASING = "INCREASING"
    DECREASING = "DECREASING"
    STABLE = "STABLE"


@dataclass(frozen=True, slots=True)
class TrendAnalysis:
    """Outcome of fitting a line through a daily series."""

    trend: TrendLabel = TrendLabel.STABLE
    slope: float = 0.0
    intercept: float = 0.0
    r_squared: Optional[float] = None

    def predict(self, x: float) -> float:
        return self.intercept + self.slope * x


@dataclass(frozen=True, slots=True)
class ForecastPoint:
    """Projected quantity for one future day."""

    date: date
    forecasted_quantity: int
    day_of_week: str


@dataclass(frozen=True, slots=True)
class ForecastModelMetrics:
    algorithm: str
    r_squared: Optional[float]
    data_points: int


@dataclass(slots=True)
class ForecastResult:
    """
    Result of a forecast request.

    ``success`` is False when the scope does not have enough history; in
    that case only ``reason``, ``data_points`` and ``required`` are set.
    """

    success: bool
    data_points: int = 0
    required: Optional[int] = None
    reason: Optional[str] = None
    trend: Optional[TrendLabel] = None
    trend_slope: Optional[float] = None
    confidence_score: Optional[float] = None
    historical_average: Optional[float] = None
    historical_median: Optional[float] = None
    standard_deviation: Optional[float] = None
    predictions: List[ForecastPoint] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    model_metrics: Optional[ForecastModelMetrics] = None
    history_start: Optional[date] = None
    history_end: Optional[date] = None

    @classmethod
    def insufficient_data(cls, data_points: int, required: int) -> "ForecastResult":
        return cls(
            success=False,
            reason="insufficient data",
            data_points=data_points,
            required=required,
        )


def clamp_confidence(r_squared: Optional[float]) -> float:
    """Turn a fit quality into a confidence score within [0, 0.95]."""
    if r_squared is None:
        return DEFAULT_CONFIDENCE
    return max(0.0, min(CONFIDENCE_CEILING, r_squared))
