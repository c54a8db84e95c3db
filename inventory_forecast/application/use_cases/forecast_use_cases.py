"""
Application Use Cases - Forecasting

Turns the sales history of a scope into a day-by-day demand forecast:
  * Daily aggregation of the lookback window
  * Trend classification on the raw daily series
  * Projection from a regression over the exponentially smoothed series
  * Weekly seasonality adjustment
  * Confidence scoring and stock recommendations

Also hosts the trending item ranking, which is a plain top-k over the
recent sales window.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np
import structlog

from inventory_forecast.application.dtos.forecast_dto import (
    ForecastResultDTO,
    TrendingItemDTO,
)
from inventory_forecast.application.models import ForecastingConfig
from inventory_forecast.domain.entities.errors import ForecastValidationError
from inventory_forecast.domain.entities.forecast import (
    LINEAR_REGRESSION,
    ForecastModelMetrics,
    ForecastPoint,
    ForecastResult,
    TrendAnalysis,
    TrendLabel,
    clamp_confidence,
)
from inventory_forecast.domain.entities.sales import ForecastScope, SalesRecord
from inventory_forecast.domain.repositories.sales_repository import (
    ISalesDataRepository,
)
from inventory_forecast.domain.services import (
    aggregate_daily,
    detect_weekly_seasonality,
    estimate_trend,
    exponential_smoothing,
    months_ago,
)

logger = structlog.get_logger(__name__)

WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

SPIKE_RATIO = 1.5

MSG_INCREASING = "Demand is trending upward. Consider increasing stock levels."
MSG_SPIKE = "Significant demand spike expected. Prepare additional inventory."
MSG_DECREASING = (
    "Demand is trending downward. Optimize inventory to avoid overstocking."
)
MSG_PROMOTION = "Consider promotional offers to boost sales."
MSG_STABLE = "Demand is stable. Maintain current inventory levels."
PEAK_DAY_PREFIX = "Peak demand expected on"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GenerateForecastUseCase:
    """Forecast daily demand for a product and/or category."""

    def __init__(
        self,
        sales_repository: ISalesDataRepository,
        config: Optional[ForecastingConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.sales_repository = sales_repository
        self.config = config or ForecastingConfig()
        self._clock = clock or _utcnow

    async def execute(
        self, scope: ForecastScope, horizon_days: Optional[int] = None
    ) -> ForecastResultDTO:
        result = await self.forecast(scope, horizon_days)
        return ForecastResultDTO.from_domain(result)

    async def forecast(
        self, scope: ForecastScope, horizon_days: Optional[int] = None
    ) -> ForecastResult:
        """
        Compute a forecast for ``scope``.

        Scopes with fewer than ``min_data_points`` sales rows yield an
        unsuccessful result rather than an exception.
        """
        horizon = self.config.forecast_days if horizon_days is None else horizon_days
        if horizon < 1:
            raise ForecastValidationError(
                "Forecast horizon must be at least one day",
                details={"horizon_days": horizon},
            )

        now = self._clock()
        records = await self.sales_repository.fetch_history(
            scope, self.config.lookback_months, now=now
        )

        if not records or len(records) < self.config.min_data_points:
            logger.warning(
                "forecast.insufficient_data",
                scope=scope.as_filters(),
                data_points=len(records),
                required=self.config.min_data_points,
            )
            return ForecastResult.insufficient_data(
                data_points=len(records), required=self.config.min_data_points
            )

        return self._build_forecast(records, horizon, now.date())

    def _build_forecast(
        self, records: Sequence[SalesRecord], horizon: int, today: date
    ) -> ForecastResult:
        series = aggregate_daily(records)
        trend_analysis = estimate_trend(series.indices, series.values)
        smoothed = exponential_smoothing(series.values, self.config.smoothing_alpha)
        seasonality = detect_weekly_seasonality(records)

        # Independent fit on the smoothed series, used only to project.
        projection = estimate_trend(series.indices, smoothed)

        values = np.asarray(series.values, dtype=float)
        historical_average = float(values.mean())

        predictions = self._project(
            projection=projection,
            last_index=series.indices[-1],
            horizon=horizon,
            today=today,
            seasonality=seasonality,
            overall_mean=historical_average,
        )

        recommendations = self.build_recommendations(
            predictions, trend_analysis.trend, historical_average
        )

        logger.info(
            "forecast.generated",
            data_points=len(records),
            days=len(series),
            trend=trend_analysis.trend.value,
            slope=trend_analysis.slope,
            horizon=horizon,
        )

        return ForecastResult(
            success=True,
            data_points=len(records),
            trend=trend_analysis.trend,
            trend_slope=trend_analysis.slope,
            confidence_score=clamp_confidence(trend_analysis.r_squared),
            historical_average=historical_average,
            historical_median=float(np.median(values)),
            standard_deviation=float(values.std()),
            predictions=predictions,
            recommendations=recommendations,
            model_metrics=ForecastModelMetrics(
                algorithm=LINEAR_REGRESSION,
                r_squared=trend_analysis.r_squared,
                data_points=len(records),
            ),
            history_start=series.dates[0],
            history_end=series.dates[-1],
        )

    @staticmethod
    def _project(
        *,
        projection: TrendAnalysis,
        last_index: int,
        horizon: int,
        today: date,
        seasonality: Dict[int, float],
        overall_mean: float,
    ) -> List[ForecastPoint]:
        points: List[ForecastPoint] = []
        for step in range(1, horizon + 1):
            value = projection.predict(last_index + step)
            forecast_date = today + timedelta(days=step)
            weekday = forecast_date.weekday()

            if weekday in seasonality and overall_mean > 0:
                value *= seasonality[weekday] / overall_mean

            points.append(
                ForecastPoint(
                    date=forecast_date,
                    forecasted_quantity=max(0, int(math.floor(value + 0.5))),
                    day_of_week=WEEKDAY_NAMES[weekday],
                )
            )
        return points

    @staticmethod
    def build_recommendations(
        predictions: Sequence[ForecastPoint],
        trend: TrendLabel,
        historical_average: float,
    ) -> List[str]:
        """Rule-based stock advice, always ending with the peak day."""
        recommendations: List[str] = []

        if trend is TrendLabel.INCREASING:
            recommendations.append(MSG_INCREASING)
            average_forecast = float(
                np.mean([p.forecasted_quantity for p in predictions])
            )
            if average_forecast > historical_average * SPIKE_RATIO:
                recommendations.append(MSG_SPIKE)
        elif trend is TrendLabel.DECREASING:
            recommendations.append(MSG_DECREASING)
            recommendations.append(MSG_PROMOTION)
        else:
            recommendations.append(MSG_STABLE)

        # max() keeps the first of equal elements, i.e. the earliest date.
        peak = max(predictions, key=lambda p: p.forecasted_quantity)
        recommendations.append(
            f"{PEAK_DAY_PREFIX} {peak.day_of_week} ({peak.date.isoformat()})"
        )
        return recommendations


class GetTrendingItemsUseCase:
    """Rank the best selling items of a category over the recent window."""

    def __init__(
        self,
        sales_repository: ISalesDataRepository,
        config: Optional[ForecastingConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.sales_repository = sales_repository
        self.config = config or ForecastingConfig()
        self._clock = clock or _utcnow

    async def execute(self, category_id: str, limit: int = 10) -> List[TrendingItemDTO]:
        if not category_id:
            raise ForecastValidationError("Category ID is required")
        if limit < 1:
            raise ForecastValidationError(
                "Limit must be at least 1", details={"limit": limit}
            )

        since = months_ago(self._clock(), self.config.trending_window_months)
        items = await self.sales_repository.aggregate_trending(
            category_id, since, limit
        )

        logger.debug(
            "trending.ranked", category_id=category_id, limit=limit, found=len(items)
        )
        return [TrendingItemDTO.from_domain(item) for item in items[:limit]]
