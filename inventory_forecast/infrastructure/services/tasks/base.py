"""Shared Celery infrastructure components."""

from dataclasses import dataclass

import structlog
from celery import Task

from inventory_forecast.application.use_cases.forecast_use_cases import (
    GenerateForecastUseCase,
)
from inventory_forecast.application.use_cases.prediction_use_cases import (
    ArchiveExpiredPredictionsUseCase,
    GeneratePredictionsUseCase,
)
from inventory_forecast.infrastructure.database.mongo_database import MongoDatabase
from inventory_forecast.infrastructure.repositories import (
    PredictionRepository,
    SalesDataRepository,
)
from inventory_forecast.infrastructure.settings import get_settings

logger = structlog.get_logger(__name__)


class CallbackTask(Task):
    """Base task class that centralizes logging behaviour."""

    def on_success(self, retval, task_id, args, kwargs):
        logger.info("task.succeeded", task_id=task_id, result=retval)

    def on_failure(self, exc, task_id, args, kwargs, einfo):
        logger.error(
            "task.failed",
            task_id=task_id,
            error=str(exc),
            traceback=einfo.traceback,
            exc_info=exc,
        )


@dataclass
class PredictionServices:
    database: MongoDatabase
    generate_predictions: GeneratePredictionsUseCase
    archive_expired: ArchiveExpiredPredictionsUseCase

    def close(self) -> None:
        self.database.close()


def build_prediction_services() -> PredictionServices:
    """Wire the use cases a worker task needs from the worker settings."""
    settings = get_settings()
    database = MongoDatabase(
        mongo_uri=settings.database.mongo_uri,
        db_name=settings.database.database_name,
        server_selection_timeout_ms=settings.database.server_selection_timeout_ms,
        socket_timeout_ms=settings.database.socket_timeout_ms,
    )
    config = settings.prediction.to_config()
    prediction_repository = PredictionRepository(database)
    forecast = GenerateForecastUseCase(SalesDataRepository(database), config=config)

    return PredictionServices(
        database=database,
        generate_predictions=GeneratePredictionsUseCase(
            forecast_use_case=forecast,
            prediction_repository=prediction_repository,
            config=config,
        ),
        archive_expired=ArchiveExpiredPredictionsUseCase(prediction_repository),
    )
