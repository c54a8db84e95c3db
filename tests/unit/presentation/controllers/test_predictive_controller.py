from __future__ import annotations

from datetime import timedelta
from uuid import uuid4

import pytest
from fastapi import HTTPException

from inventory_forecast.application.dtos.prediction_dto import (
    CategoryGenerationResultDTO,
    GeneratePredictionsRequestDTO,
    PredictionCreateDTO,
)
from inventory_forecast.application.use_cases.forecast_use_cases import (
    GenerateForecastUseCase,
    GetTrendingItemsUseCase,
)
from inventory_forecast.application.use_cases.prediction_use_cases import (
    ArchiveExpiredPredictionsUseCase,
    GetPredictionAccuracyUseCase,
    GetPredictionUseCase,
    ListPredictionsUseCase,
    SavePredictionUseCase,
)
from inventory_forecast.domain.entities.errors import StoreFailureError
from inventory_forecast.domain.entities.prediction import (
    PredictionStatus,
    PredictionType,
)
from inventory_forecast.domain.entities.sales import ForecastScope, TrendingItem
from inventory_forecast.presentation.controllers.predictive_controller import (
    archive_expired_predictions,
    create_prediction,
    generate_predictions,
    get_category_trends,
    get_demand_prediction,
    get_inventory_forecast,
    get_prediction,
    get_prediction_accuracy,
    get_trending_products,
    list_predictions,
)
from tests.conftest import (
    FIXED_NOW,
    InMemoryPredictionRepository,
    InMemorySalesRepository,
    fixed_clock,
)


class _FailingSalesRepository(InMemorySalesRepository):
    async def fetch_history(self, scope, lookback_months, *, now=None):
        raise StoreFailureError("fetch_history", details={"error": "timeout"})

    async def aggregate_trending(self, category_id, since, limit):
        raise RuntimeError("unexpected")


class _StubGenerate:
    def __init__(self) -> None:
        self.category_ids = None

    async def execute(self, category_ids, prediction_type=PredictionType.INVENTORY):
        self.category_ids = list(category_ids)
        return [
            CategoryGenerationResultDTO(
                category_id=category_id, status="failed", reason="insufficient data"
            )
            for category_id in category_ids
        ]


def _forecast_use_case(records=()) -> GenerateForecastUseCase:
    return GenerateForecastUseCase(InMemorySalesRepository(records), clock=fixed_clock)


@pytest.mark.asyncio
async def test_inventory_forecast_wraps_result(flat_records) -> None:
    response = await get_inventory_forecast(
        category_id="ELECTRONICS",
        product_id=None,
        days=7,
        forecast_use_case=_forecast_use_case(flat_records),
    )

    assert response.success is True
    assert response.data.success is True
    assert len(response.data.predictions) == 7


@pytest.mark.asyncio
async def test_inventory_forecast_with_insufficient_data_is_still_a_success() -> None:
    response = await get_inventory_forecast(
        category_id="ELECTRONICS",
        product_id=None,
        days=30,
        forecast_use_case=_forecast_use_case(),
    )

    assert response.success is True
    assert response.data.success is False
    assert response.data.reason == "insufficient data"


@pytest.mark.asyncio
async def test_invalid_horizon_is_bad_request(flat_records) -> None:
    with pytest.raises(HTTPException) as exc_info:
        await get_inventory_forecast(
            category_id="ELECTRONICS",
            product_id=None,
            days=0,
            forecast_use_case=_forecast_use_case(flat_records),
        )

    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_store_failure_is_service_unavailable() -> None:
    use_case = GenerateForecastUseCase(_FailingSalesRepository(), clock=fixed_clock)

    with pytest.raises(HTTPException) as exc_info:
        await get_category_trends(category_id="ELECTRONICS", forecast_use_case=use_case)

    assert exc_info.value.status_code == 503
    assert exc_info.value.detail == "Sales data store unavailable"


@pytest.mark.asyncio
async def test_demand_prediction_scopes_to_product(flat_records) -> None:
    repository = InMemorySalesRepository(flat_records)

    response = await get_demand_prediction(
        product_id="prod-1",
        forecast_use_case=GenerateForecastUseCase(repository, clock=fixed_clock),
    )

    assert repository.history_calls == [ForecastScope(product_id="prod-1")]
    assert response.data.success is True


@pytest.mark.asyncio
async def test_trending_products() -> None:
    repository = InMemorySalesRepository(
        trending=[TrendingItem("prod-2", 12, 120.0, 10.0, 6)]
    )

    response = await get_trending_products(
        category_id="ELECTRONICS",
        limit=10,
        trending_use_case=GetTrendingItemsUseCase(repository, clock=fixed_clock),
    )

    assert response.success is True
    assert response.data[0].item_id == "prod-2"


@pytest.mark.asyncio
async def test_unexpected_errors_are_internal() -> None:
    with pytest.raises(HTTPException) as exc_info:
        await get_trending_products(
            category_id="ELECTRONICS",
            limit=10,
            trending_use_case=GetTrendingItemsUseCase(_FailingSalesRepository()),
        )

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_generate_predictions_reports_each_category() -> None:
    use_case = _StubGenerate()

    response = await generate_predictions(
        payload=GeneratePredictionsRequestDTO(category_ids=["BOOKS", "TOYS"]),
        generate_use_case=use_case,
    )

    assert use_case.category_ids == ["BOOKS", "TOYS"]
    assert response.message == "Prediction generation completed"
    assert [r.status for r in response.data] == ["failed", "failed"]


@pytest.mark.asyncio
async def test_prediction_lifecycle_endpoints(sample_prediction) -> None:
    repository = InMemoryPredictionRepository()
    await repository.create(sample_prediction)

    created = await create_prediction(
        payload=PredictionCreateDTO(
            type=PredictionType.DEMAND,
            product_id="prod-4",
            prediction_date=FIXED_NOW,
            forecasted_value=3.0,
            valid_until=sample_prediction.valid_until + timedelta(days=1),
        ),
        save_use_case=SavePredictionUseCase(repository),
    )
    fetched = await get_prediction(
        prediction_id=sample_prediction.id,
        get_use_case=GetPredictionUseCase(repository),
    )
    listed = await list_predictions(
        category_id=None,
        product_id=None,
        prediction_status=PredictionStatus.ACTIVE,
        limit=100,
        list_use_case=ListPredictionsUseCase(repository),
    )

    assert created.data.product_id == "prod-4"
    assert fetched.data.id == sample_prediction.id
    assert listed.count == 2
    assert {p.id for p in listed.data} == {sample_prediction.id, created.data.id}


@pytest.mark.asyncio
async def test_unknown_prediction_is_not_found() -> None:
    with pytest.raises(HTTPException) as exc_info:
        await get_prediction(
            prediction_id=uuid4(),
            get_use_case=GetPredictionUseCase(InMemoryPredictionRepository()),
        )

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_accuracy_and_archive_endpoints() -> None:
    repository = InMemoryPredictionRepository()

    accuracy = await get_prediction_accuracy(
        accuracy_use_case=GetPredictionAccuracyUseCase(repository, clock=fixed_clock)
    )
    archived = await archive_expired_predictions(
        archive_use_case=ArchiveExpiredPredictionsUseCase(repository, clock=fixed_clock)
    )

    assert accuracy.data.total_predictions == 0
    assert archived.data.archived == 0
    assert archived.data.executed_at == FIXED_NOW
