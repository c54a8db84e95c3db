"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

import asyncio
from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from inventory_forecast.application.models import ForecastingConfig, SystemInfo
from inventory_forecast.application.use_cases.forecast_use_cases import (
    GenerateForecastUseCase,
    GetTrendingItemsUseCase,
)
from inventory_forecast.application.use_cases.health_use_cases import (
    GetApplicationInfoUseCase,
    GetHealthStatusUseCase,
)
from inventory_forecast.application.use_cases.prediction_use_cases import (
    ArchiveExpiredPredictionsUseCase,
    GeneratePredictionsUseCase,
    GetPredictionAccuracyUseCase,
    GetPredictionUseCase,
    ListPredictionsUseCase,
    SavePredictionUseCase,
)
from inventory_forecast.infrastructure.database import MongoDatabase
from inventory_forecast.infrastructure.repositories import (
    PredictionRepository,
    SalesDataRepository,
)
from inventory_forecast.infrastructure.services.health_check_service import (
    HealthCheckService,
)
from inventory_forecast.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    forecasting_config = providers.Singleton(
        ForecastingConfig,
        min_data_points=config.prediction.min_data_points,
        lookback_months=config.prediction.lookback_months,
        forecast_days=config.prediction.forecast_days,
        smoothing_alpha=config.prediction.smoothing_alpha,
        trending_window_months=config.prediction.trending_window_months,
        prediction_validity_days=config.prediction.validity_days,
        scope_timeout_seconds=config.prediction.scope_timeout_seconds,
    )

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
        server_selection_timeout_ms=config.database.server_selection_timeout_ms,
        socket_timeout_ms=config.database.socket_timeout_ms,
    )

    sales_repository = providers.Singleton(
        SalesDataRepository,
        database=mongo_database,
    )

    prediction_repository = providers.Singleton(
        PredictionRepository,
        database=mongo_database,
    )

    health_check_service = providers.Singleton(
        HealthCheckService,
        mongo_database=mongo_database,
        broker_url=config.celery.broker_url,
        redis_url=config.celery.result_backend_url,
    )

    system_info = providers.Singleton(
        SystemInfo,
        title=config.service.title,
        description=config.service.description,
        version=config.service.version,
        environment=providers.Callable(
            lambda env: env.value if hasattr(env, "value") else str(env),
            config.environment,
        ),
        git_commit=config.service.git_commit,
        build_time=config.service.build_time,
        celery_broker_url=config.celery.broker_url,
        celery_result_backend_url=config.celery.result_backend_url,
        database_name=config.database.database_name,
    )

    # Application (use cases)
    generate_forecast_use_case = providers.Factory(
        GenerateForecastUseCase,
        sales_repository=sales_repository,
        config=forecasting_config,
    )

    get_trending_items_use_case = providers.Factory(
        GetTrendingItemsUseCase,
        sales_repository=sales_repository,
        config=forecasting_config,
    )

    save_prediction_use_case = providers.Factory(
        SavePredictionUseCase,
        prediction_repository=prediction_repository,
    )

    get_prediction_use_case = providers.Factory(
        GetPredictionUseCase,
        prediction_repository=prediction_repository,
    )

    list_predictions_use_case = providers.Factory(
        ListPredictionsUseCase,
        prediction_repository=prediction_repository,
    )

    archive_expired_predictions_use_case = providers.Factory(
        ArchiveExpiredPredictionsUseCase,
        prediction_repository=prediction_repository,
    )

    generate_predictions_use_case = providers.Factory(
        GeneratePredictionsUseCase,
        forecast_use_case=generate_forecast_use_case,
        prediction_repository=prediction_repository,
        config=forecasting_config,
    )

    get_prediction_accuracy_use_case = providers.Factory(
        GetPredictionAccuracyUseCase,
        prediction_repository=prediction_repository,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        health_check_service=health_check_service,
    )

    get_application_info_use_case = providers.Factory(
        GetApplicationInfoUseCase,
        health_check_service=health_check_service,
        system_info=system_info,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Lifecycle of the shared Mongo client.

    Ensures the forecasting indexes on startup and closes the client on
    shutdown.
    """
    container = get_container()
    mongo_database = container.mongo_database()

    try:
        logger.info("container.mongo.ensure_indexes")
        await asyncio.to_thread(mongo_database.create_indexes)
        logger.info("container.resources.initialized")
        yield container
    finally:
        logger.info("container.mongo.close")
        mongo_database.close()
        logger.info("container.resources.shutdown")
