from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import cast
from uuid import uuid4

import pytest

from inventory_forecast.domain.entities.errors import StoreFailureError
from inventory_forecast.domain.entities.prediction import (
    Prediction,
    PredictionStatus,
    PredictionType,
)
from inventory_forecast.infrastructure.database import (
    PREDICTIONS_COLLECTION,
    MongoDatabase,
)
from inventory_forecast.infrastructure.repositories import PredictionRepository
from tests.conftest import FIXED_NOW


def _prediction(days_valid: int, **overrides) -> Prediction:
    now = datetime.now(timezone.utc)
    values = dict(
        type=PredictionType.INVENTORY,
        category_id="ELECTRONICS",
        prediction_date=now,
        forecasted_value=20.0,
        confidence_score=0.7,
        valid_until=now + timedelta(days=days_valid),
    )
    values.update(overrides)
    return Prediction(**values)


def _insert_raw(collection, prediction: Prediction) -> None:
    collection.documents.append(PredictionRepository._to_document(prediction))


@pytest.fixture()
def repository(fake_database) -> PredictionRepository:
    return PredictionRepository(cast(MongoDatabase, fake_database))


@pytest.fixture()
def collection(fake_database):
    return fake_database.get_collection(PREDICTIONS_COLLECTION)


@pytest.mark.asyncio
async def test_create_and_get_round_trip(repository, collection, sample_prediction) -> None:
    sample_prediction.recommendations = ["Demand is stable."]
    sample_prediction.factors.trend = 0.4

    await repository.create(sample_prediction)
    loaded = await repository.get_by_id(sample_prediction.id)

    stored = collection.documents[0]
    assert stored["id"] == str(sample_prediction.id)
    assert stored["type"] == "INVENTORY"
    assert stored["status"] == "ACTIVE"
    assert stored["model_metrics"]["algorithm"] == "LINEAR_REGRESSION"

    assert loaded == sample_prediction
    assert collection.update_calls == []


@pytest.mark.asyncio
async def test_create_stores_expired_prediction_as_archived(
    repository, collection
) -> None:
    expired = _prediction(-1)

    created = await repository.create(expired)

    assert created.status is PredictionStatus.ARCHIVED
    assert collection.documents[0]["status"] == "ARCHIVED"
    assert collection.documents[0]["updated_at"] == created.updated_at


@pytest.mark.asyncio
async def test_get_unknown_id_returns_none(repository) -> None:
    assert await repository.get_by_id(uuid4()) is None


@pytest.mark.asyncio
async def test_get_archives_expired_prediction(repository, collection) -> None:
    expired = _prediction(-1)
    _insert_raw(collection, expired)

    loaded = await repository.get_by_id(expired.id)

    assert loaded.status is PredictionStatus.ARCHIVED
    kind, query, update = collection.update_calls[0]
    assert kind == "one"
    assert query == {"id": str(expired.id), "status": "ACTIVE"}
    assert collection.documents[0]["status"] == "ARCHIVED"

    again = await repository.get_by_id(expired.id)
    assert again.status is PredictionStatus.ARCHIVED
    assert len(collection.update_calls) == 1


@pytest.mark.asyncio
async def test_find_filters_and_orders_newest_first(repository) -> None:
    now = datetime.now(timezone.utc)
    older = _prediction(10, prediction_date=now - timedelta(days=2))
    newer = _prediction(10, prediction_date=now - timedelta(days=1))
    other = _prediction(10, category_id="BOOKS")
    for prediction in (older, newer, other):
        await repository.create(prediction)

    found = await repository.find(category_id="ELECTRONICS")
    limited = await repository.find(category_id="ELECTRONICS", limit=1)

    assert [p.id for p in found] == [newer.id, older.id]
    assert [p.id for p in limited] == [newer.id]


@pytest.mark.asyncio
async def test_find_status_filter_sees_lazily_archived_rows(
    repository, collection
) -> None:
    active = _prediction(5)
    expired = _prediction(-2)
    _insert_raw(collection, active)
    _insert_raw(collection, expired)

    active_rows = await repository.find(status=PredictionStatus.ACTIVE)
    archived_rows = await repository.find(status=PredictionStatus.ARCHIVED)

    assert [p.id for p in active_rows] == [active.id]
    assert [p.id for p in archived_rows] == [expired.id]
    assert collection.documents[1]["status"] == "ARCHIVED"


@pytest.mark.asyncio
async def test_find_with_status_archives_in_bulk_and_limits_in_query(
    repository, collection
) -> None:
    for _ in range(50):
        _insert_raw(collection, _prediction(-1))

    active_rows = await repository.find(status=PredictionStatus.ACTIVE, limit=1)
    archived_rows = await repository.find(status=PredictionStatus.ARCHIVED, limit=1)

    assert active_rows == []
    assert len(archived_rows) == 1
    assert collection.last_query == {"status": "ARCHIVED"}
    assert [call[0] for call in collection.update_calls] == ["many", "many"]
    assert all(doc["status"] == "ARCHIVED" for doc in collection.documents)


@pytest.mark.asyncio
async def test_archive_expired_updates_active_rows(repository, collection) -> None:
    _insert_raw(collection, _prediction(0, valid_until=FIXED_NOW - timedelta(days=1)))
    _insert_raw(collection, _prediction(0, valid_until=FIXED_NOW + timedelta(days=1)))

    archived = await repository.archive_expired(FIXED_NOW)

    assert archived == 1
    kind, query, update = collection.update_calls[0]
    assert kind == "many"
    assert query == {"status": "ACTIVE", "valid_until": {"$lt": FIXED_NOW}}
    assert update == {"$set": {"status": "ARCHIVED", "updated_at": FIXED_NOW}}


@pytest.mark.asyncio
async def test_find_archived_since(repository) -> None:
    recent = _prediction(
        0,
        status=PredictionStatus.ARCHIVED,
        valid_until=FIXED_NOW - timedelta(days=3),
    )
    stale = _prediction(
        0,
        status=PredictionStatus.ARCHIVED,
        valid_until=FIXED_NOW - timedelta(days=90),
    )
    await repository.create(recent)
    await repository.create(stale)

    found = await repository.find_archived_since(FIXED_NOW - timedelta(days=30))

    assert [p.id for p in found] == [recent.id]


@pytest.mark.asyncio
async def test_driver_errors_become_store_failures(
    repository, collection, sample_prediction, store_error
) -> None:
    collection.fail_with = store_error

    with pytest.raises(StoreFailureError) as exc_info:
        await repository.create(sample_prediction)
    assert exc_info.value.operation == "create_prediction"

    with pytest.raises(StoreFailureError):
        await repository.find()
    with pytest.raises(StoreFailureError):
        await repository.archive_expired(FIXED_NOW)
