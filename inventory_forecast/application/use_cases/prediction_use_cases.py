"""Use cases for storing, reading and refreshing persisted predictions."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from datetime import datetime, time, timedelta, timezone
from typing import Callable, Dict, Iterable, List, Optional
from uuid import UUID

import structlog

from inventory_forecast.application.dtos.prediction_dto import (
    ArchiveResultDTO,
    CategoryAccuracyDTO,
    CategoryGenerationResultDTO,
    PredictionAccuracyDTO,
    PredictionCreateDTO,
    PredictionDTO,
)
from inventory_forecast.application.models import ForecastingConfig
from inventory_forecast.application.use_cases.forecast_use_cases import (
    GenerateForecastUseCase,
)
from inventory_forecast.domain.entities.errors import PredictionNotFoundError
from inventory_forecast.domain.entities.forecast import ForecastResult
from inventory_forecast.domain.entities.prediction import (
    HistoricalSummary,
    ModelAlgorithm,
    Prediction,
    PredictionFactors,
    PredictionModelMetrics,
    PredictionStatus,
    PredictionType,
)
from inventory_forecast.domain.entities.sales import ForecastScope
from inventory_forecast.domain.repositories.prediction_repository import (
    IPredictionRepository,
)

logger = structlog.get_logger(__name__)

ACCURACY_WINDOW_DAYS = 30


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SavePredictionUseCase:
    """Persist a prediction supplied by a caller."""

    def __init__(self, prediction_repository: IPredictionRepository):
        self.prediction_repository = prediction_repository

    async def execute(self, payload: PredictionCreateDTO) -> PredictionDTO:
        prediction = payload.to_domain()
        saved = await self.prediction_repository.create(prediction)
        return PredictionDTO.from_domain(saved)


class GetPredictionUseCase:
    def __init__(self, prediction_repository: IPredictionRepository):
        self.prediction_repository = prediction_repository

    async def execute(self, prediction_id: UUID) -> PredictionDTO:
        prediction = await self.prediction_repository.get_by_id(prediction_id)
        if prediction is None:
            raise PredictionNotFoundError(str(prediction_id))
        return PredictionDTO.from_domain(prediction)


class ListPredictionsUseCase:
    def __init__(self, prediction_repository: IPredictionRepository):
        self.prediction_repository = prediction_repository

    async def execute(
        self,
        *,
        category_id: Optional[str] = None,
        product_id: Optional[str] = None,
        status: Optional[PredictionStatus] = None,
        limit: int = 100,
    ) -> List[PredictionDTO]:
        predictions = await self.prediction_repository.find(
            category_id=category_id,
            product_id=product_id,
            status=status,
            limit=limit,
        )
        return [PredictionDTO.from_domain(p) for p in predictions]


class ArchiveExpiredPredictionsUseCase:
    """Sweep active predictions whose validity window has passed."""

    def __init__(
        self,
        prediction_repository: IPredictionRepository,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.prediction_repository = prediction_repository
        self._clock = clock or _utcnow

    async def execute(self) -> ArchiveResultDTO:
        now = self._clock()
        archived = await self.prediction_repository.archive_expired(now)
        logger.info("prediction.archive.completed", archived=archived)
        return ArchiveResultDTO(archived=archived, executed_at=now)


class GeneratePredictionsUseCase:
    """
    Forecast and store a prediction for each category.

    Categories are processed one after the other. A category that fails,
    or does not finish within ``scope_timeout_seconds``, is reported in
    the result list and the remaining categories are still processed.
    """

    def __init__(
        self,
        forecast_use_case: GenerateForecastUseCase,
        prediction_repository: IPredictionRepository,
        config: Optional[ForecastingConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.forecast_use_case = forecast_use_case
        self.prediction_repository = prediction_repository
        self.config = config or ForecastingConfig()
        self._clock = clock or _utcnow

    async def execute(
        self,
        category_ids: Iterable[str],
        prediction_type: PredictionType = PredictionType.INVENTORY,
    ) -> List[CategoryGenerationResultDTO]:
        results: List[CategoryGenerationResultDTO] = []

        for category_id in category_ids:
            try:
                result = await asyncio.wait_for(
                    self._generate_for_category(category_id, prediction_type),
                    timeout=self.config.scope_timeout_seconds,
                )
            except asyncio.TimeoutError:
                logger.error(
                    "prediction.generation.timeout",
                    category_id=category_id,
                    timeout_seconds=self.config.scope_timeout_seconds,
                )
                result = CategoryGenerationResultDTO(
                    category_id=category_id,
                    status="error",
                    error=(
                        "Timed out after "
                        f"{self.config.scope_timeout_seconds} seconds"
                    ),
                )
            except Exception as exc:
                logger.error(
                    "prediction.generation.failed",
                    category_id=category_id,
                    error=str(exc),
                    exc_info=exc,
                )
                result = CategoryGenerationResultDTO(
                    category_id=category_id, status="error", error=str(exc)
                )
            results.append(result)

        return results

    async def _generate_for_category(
        self, category_id: str, prediction_type: PredictionType
    ) -> CategoryGenerationResultDTO:
        forecast = await self.forecast_use_case.forecast(
            ForecastScope(category_id=category_id)
        )
        if not forecast.success:
            return CategoryGenerationResultDTO(
                category_id=category_id, status="failed", reason=forecast.reason
            )

        prediction = self.prediction_from_forecast(
            forecast,
            category_id=category_id,
            prediction_type=prediction_type,
            now=self._clock(),
            validity_days=self.config.prediction_validity_days,
        )
        saved = await self.prediction_repository.create(prediction)

        logger.info(
            "prediction.generation.saved",
            category_id=category_id,
            prediction_id=str(saved.id),
            type=prediction_type.value,
        )
        return CategoryGenerationResultDTO(
            category_id=category_id, status="success", prediction_id=saved.id
        )

    @staticmethod
    def prediction_from_forecast(
        forecast: ForecastResult,
        *,
        category_id: Optional[str] = None,
        product_id: Optional[str] = None,
        prediction_type: PredictionType,
        now: datetime,
        validity_days: int,
    ) -> Prediction:
        """Snapshot a successful forecast as a storable prediction."""
        confidence = forecast.confidence_score or 0.0
        r_squared = forecast.model_metrics.r_squared if forecast.model_metrics else None

        return Prediction(
            type=prediction_type,
            category_id=category_id,
            product_id=product_id,
            prediction_date=now,
            forecasted_value=forecast.historical_average or 0.0,
            confidence_score=confidence,
            historical_data=HistoricalSummary(
                data_points=forecast.data_points,
                average_value=forecast.historical_average,
                trend=forecast.trend.value if forecast.trend else None,
                start_date=_start_of_day(forecast.history_start),
                end_date=_start_of_day(forecast.history_end),
            ),
            factors=PredictionFactors(trend=forecast.trend_slope),
            model_metrics=PredictionModelMetrics(
                algorithm=ModelAlgorithm.LINEAR_REGRESSION,
                accuracy=confidence,
                r_squared=r_squared,
            ),
            recommendations=list(forecast.recommendations),
            status=PredictionStatus.ACTIVE,
            valid_until=now + timedelta(days=validity_days),
        )


class GetPredictionAccuracyUseCase:
    """Summarise confidence of predictions archived in the last 30 days."""

    def __init__(
        self,
        prediction_repository: IPredictionRepository,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.prediction_repository = prediction_repository
        self._clock = clock or _utcnow

    async def execute(self) -> PredictionAccuracyDTO:
        since = self._clock() - timedelta(days=ACCURACY_WINDOW_DAYS)
        predictions = await self.prediction_repository.find_archived_since(since)

        by_category: Dict[str, List[float]] = defaultdict(list)
        for prediction in predictions:
            key = prediction.category_id or f"product:{prediction.product_id}"
            by_category[key].append(prediction.confidence_score)

        return PredictionAccuracyDTO(
            total_predictions=len(predictions),
            average_confidence=_average(p.confidence_score for p in predictions),
            by_category={
                key: CategoryAccuracyDTO(
                    total_predictions=len(scores),
                    average_confidence=_average(scores),
                )
                for key, scores in by_category.items()
            },
        )


def _average(values: Iterable[float]) -> float:
    items = list(values)
    return sum(items) / len(items) if items else 0.0


def _start_of_day(value) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.combine(value, time.min, tzinfo=timezone.utc)
