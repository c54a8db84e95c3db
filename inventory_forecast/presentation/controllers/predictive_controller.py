"""
Presentation Layer - Predictive Controller

On-demand forecasts, trending rankings and the stored prediction
lifecycle. Successful responses are wrapped as ``{"success": true,
"data": ...}``.
"""

from typing import NoReturn, Optional
from uuid import UUID

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status

from inventory_forecast.application.dtos.forecast_dto import (
    ForecastResponseDTO,
    TrendingItemsResponseDTO,
)
from inventory_forecast.application.dtos.prediction_dto import (
    ArchiveResponseDTO,
    GeneratePredictionsRequestDTO,
    GeneratePredictionsResponseDTO,
    PredictionAccuracyResponseDTO,
    PredictionCreateDTO,
    PredictionListResponseDTO,
    PredictionResponseDTO,
)
from inventory_forecast.application.use_cases.forecast_use_cases import (
    GenerateForecastUseCase,
    GetTrendingItemsUseCase,
)
from inventory_forecast.application.use_cases.prediction_use_cases import (
    ArchiveExpiredPredictionsUseCase,
    GeneratePredictionsUseCase,
    GetPredictionAccuracyUseCase,
    GetPredictionUseCase,
    ListPredictionsUseCase,
    SavePredictionUseCase,
)
from inventory_forecast.domain.entities.errors import (
    ForecastValidationError,
    PredictionNotFoundError,
    StoreFailureError,
)
from inventory_forecast.domain.entities.prediction import PredictionStatus
from inventory_forecast.domain.entities.sales import ForecastScope
from inventory_forecast.main.container import AppContainer

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/predictive", tags=["Predictive"])


def _raise_http_error(exc: Exception, event: str, **context) -> NoReturn:
    if isinstance(exc, PredictionNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.message)
    if isinstance(exc, (ForecastValidationError, ValueError)):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, StoreFailureError):
        logger.error(event, operation=exc.operation, error=str(exc), **context)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Sales data store unavailable",
        )
    logger.error(event, error=str(exc), exc_info=exc, **context)
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Internal server error",
    )


@router.get(
    "/inventory-forecast",
    response_model=ForecastResponseDTO,
    summary="Forecast daily demand for a category and/or product",
)
@inject
async def get_inventory_forecast(
    category_id: Optional[str] = Query(default=None),
    product_id: Optional[str] = Query(default=None),
    days: int = Query(default=30, ge=1, le=365, description="Forecast horizon"),
    forecast_use_case: GenerateForecastUseCase = Depends(
        Provide[AppContainer.generate_forecast_use_case]
    ),
) -> ForecastResponseDTO:
    scope = ForecastScope(product_id=product_id, category_id=category_id)
    try:
        result = await forecast_use_case.execute(scope, days)
    except Exception as exc:
        _raise_http_error(exc, "forecast.inventory.failed", scope=scope.as_filters())
    return ForecastResponseDTO(data=result)


@router.get(
    "/trending-products",
    response_model=TrendingItemsResponseDTO,
    summary="Best selling products of a category over the last month",
)
@inject
async def get_trending_products(
    category_id: str = Query(..., min_length=1),
    limit: int = Query(default=10, ge=1, le=100),
    trending_use_case: GetTrendingItemsUseCase = Depends(
        Provide[AppContainer.get_trending_items_use_case]
    ),
) -> TrendingItemsResponseDTO:
    try:
        items = await trending_use_case.execute(category_id, limit)
    except Exception as exc:
        _raise_http_error(exc, "trending.failed", category_id=category_id)
    return TrendingItemsResponseDTO(data=items)


@router.get(
    "/demand-prediction",
    response_model=ForecastResponseDTO,
    summary="Forecast demand for a single product",
)
@inject
async def get_demand_prediction(
    product_id: str = Query(..., min_length=1),
    forecast_use_case: GenerateForecastUseCase = Depends(
        Provide[AppContainer.generate_forecast_use_case]
    ),
) -> ForecastResponseDTO:
    try:
        result = await forecast_use_case.execute(ForecastScope(product_id=product_id))
    except Exception as exc:
        _raise_http_error(exc, "forecast.demand.failed", product_id=product_id)
    return ForecastResponseDTO(data=result)


@router.get(
    "/category-trends/{category_id}",
    response_model=ForecastResponseDTO,
    summary="Forecast demand for a whole category",
)
@inject
async def get_category_trends(
    category_id: str,
    forecast_use_case: GenerateForecastUseCase = Depends(
        Provide[AppContainer.generate_forecast_use_case]
    ),
) -> ForecastResponseDTO:
    try:
        result = await forecast_use_case.execute(ForecastScope(category_id=category_id))
    except Exception as exc:
        _raise_http_error(exc, "forecast.category.failed", category_id=category_id)
    return ForecastResponseDTO(data=result)


@router.post(
    "/generate-predictions",
    response_model=GeneratePredictionsResponseDTO,
    summary="Generate and store INVENTORY predictions for categories",
)
@inject
async def generate_predictions(
    payload: GeneratePredictionsRequestDTO,
    generate_use_case: GeneratePredictionsUseCase = Depends(
        Provide[AppContainer.generate_predictions_use_case]
    ),
) -> GeneratePredictionsResponseDTO:
    results = await generate_use_case.execute(payload.category_ids)
    return GeneratePredictionsResponseDTO(data=results)


@router.get(
    "/prediction-accuracy",
    response_model=PredictionAccuracyResponseDTO,
    summary="Confidence summary of predictions archived in the last 30 days",
)
@inject
async def get_prediction_accuracy(
    accuracy_use_case: GetPredictionAccuracyUseCase = Depends(
        Provide[AppContainer.get_prediction_accuracy_use_case]
    ),
) -> PredictionAccuracyResponseDTO:
    try:
        accuracy = await accuracy_use_case.execute()
    except Exception as exc:
        _raise_http_error(exc, "prediction.accuracy.failed")
    return PredictionAccuracyResponseDTO(data=accuracy)


@router.post(
    "/predictions",
    response_model=PredictionResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Store a prediction",
)
@inject
async def create_prediction(
    payload: PredictionCreateDTO,
    save_use_case: SavePredictionUseCase = Depends(
        Provide[AppContainer.save_prediction_use_case]
    ),
) -> PredictionResponseDTO:
    try:
        prediction = await save_use_case.execute(payload)
    except Exception as exc:
        _raise_http_error(exc, "prediction.create.failed")
    return PredictionResponseDTO(data=prediction)


@router.post(
    "/predictions/archive-expired",
    response_model=ArchiveResponseDTO,
    summary="Archive every active prediction past its validity window",
)
@inject
async def archive_expired_predictions(
    archive_use_case: ArchiveExpiredPredictionsUseCase = Depends(
        Provide[AppContainer.archive_expired_predictions_use_case]
    ),
) -> ArchiveResponseDTO:
    try:
        result = await archive_use_case.execute()
    except Exception as exc:
        _raise_http_error(exc, "prediction.archive.failed")
    return ArchiveResponseDTO(data=result)


@router.get(
    "/predictions/{prediction_id}",
    response_model=PredictionResponseDTO,
    summary="Get a stored prediction",
)
@inject
async def get_prediction(
    prediction_id: UUID,
    get_use_case: GetPredictionUseCase = Depends(
        Provide[AppContainer.get_prediction_use_case]
    ),
) -> PredictionResponseDTO:
    try:
        prediction = await get_use_case.execute(prediction_id)
    except Exception as exc:
        _raise_http_error(
            exc, "prediction.get.failed", prediction_id=str(prediction_id)
        )
    return PredictionResponseDTO(data=prediction)


@router.get(
    "/predictions",
    response_model=PredictionListResponseDTO,
    summary="List stored predictions, newest first",
)
@inject
async def list_predictions(
    category_id: Optional[str] = Query(default=None),
    product_id: Optional[str] = Query(default=None),
    prediction_status: Optional[PredictionStatus] = Query(
        default=None, alias="status"
    ),
    limit: int = Query(default=100, ge=1, le=1000),
    list_use_case: ListPredictionsUseCase = Depends(
        Provide[AppContainer.list_predictions_use_case]
    ),
) -> PredictionListResponseDTO:
    try:
        predictions = await list_use_case.execute(
            category_id=category_id,
            product_id=product_id,
            status=prediction_status,
            limit=limit,
        )
    except Exception as exc:
        _raise_http_error(exc, "prediction.list.failed")
    return PredictionListResponseDTO(count=len(predictions), data=predictions)
