from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

import pytest
from pymongo.errors import PyMongoError

from inventory_forecast.domain.entities.prediction import (
    HistoricalSummary,
    Prediction,
    PredictionStatus,
    PredictionType,
)
from inventory_forecast.domain.entities.sales import (
    ForecastScope,
    SalesRecord,
    TrendingItem,
)
from inventory_forecast.domain.repositories.sales_repository import (
    ISalesDataRepository,
)

# Monday
FIXED_NOW = datetime(2026, 3, 2, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


def make_daily_records(
    quantities: Sequence[float],
    *,
    start: Optional[datetime] = None,
    product_id: str = "prod-1",
    category_id: str = "ELECTRONICS",
) -> List[SalesRecord]:
    """One sales row per consecutive day, ending the day before FIXED_NOW."""
    first_day = start or (FIXED_NOW - timedelta(days=len(quantities)))
    return [
        SalesRecord(
            product_id=product_id,
            shop_id="shop-1",
            category_id=category_id,
            date=first_day + timedelta(days=offset),
            quantity=quantity,
            revenue=quantity * 10,
        )
        for offset, quantity in enumerate(quantities)
    ]


class InMemorySalesRepository(ISalesDataRepository):
    def __init__(
        self,
        records: Iterable[SalesRecord] = (),
        trending: Iterable[TrendingItem] = (),
    ) -> None:
        self.records = list(records)
        self.trending = list(trending)
        self.history_calls: List[ForecastScope] = []
        self.trending_calls: List[tuple] = []

    async def fetch_history(self, scope, lookback_months, *, now=None):
        self.history_calls.append(scope)
        return [
            record
            for record in self.records
            if (not scope.category_id or record.category_id == scope.category_id)
            and (not scope.product_id or record.product_id == scope.product_id)
        ]

    async def aggregate_trending(self, category_id, since, limit):
        self.trending_calls.append((category_id, since, limit))
        ranked = sorted(self.trending, key=lambda item: -item.total_quantity)
        return ranked[:limit]


class InMemoryPredictionRepository:
    def __init__(self) -> None:
        self.items: Dict[str, Prediction] = {}

    async def create(self, prediction: Prediction) -> Prediction:
        self.items[str(prediction.id)] = prediction
        return prediction

    async def get_by_id(self, prediction_id):
        prediction = self.items.get(str(prediction_id))
        if prediction is not None:
            prediction.archive_if_expired()
        return prediction

    async def find(self, *, category_id=None, product_id=None, status=None, limit=100):
        results = []
        for prediction in self.items.values():
            prediction.archive_if_expired()
            if category_id and prediction.category_id != category_id:
                continue
            if product_id and prediction.product_id != product_id:
                continue
            if status and prediction.status != status:
                continue
            results.append(prediction)
        return results[:limit]

    async def find_archived_since(self, since):
        return [
            p
            for p in self.items.values()
            if p.status == PredictionStatus.ARCHIVED and p.valid_until >= since
        ]

    async def archive_expired(self, now):
        return sum(1 for p in self.items.values() if p.archive_if_expired(now))


@pytest.fixture()
def increasing_records() -> List[SalesRecord]:
    return make_daily_records([10 + day for day in range(40)])


@pytest.fixture()
def flat_records() -> List[SalesRecord]:
    return make_daily_records([5] * 35)


@pytest.fixture()
def sample_prediction() -> Prediction:
    return Prediction(
        type=PredictionType.INVENTORY,
        category_id="ELECTRONICS",
        prediction_date=FIXED_NOW,
        forecasted_value=42.0,
        confidence_score=0.8,
        historical_data=HistoricalSummary(
            data_points=120, average_value=42.0, trend="INCREASING"
        ),
        valid_until=datetime.now(timezone.utc) + timedelta(days=30),
    )


def _matches_condition(value: Any, condition: Any) -> bool:
    if isinstance(condition, dict) and any(k.startswith("$") for k in condition):
        for operator, operand in condition.items():
            if value is None:
                return False
            if operator == "$gte" and not value >= operand:
                return False
            if operator == "$gt" and not value > operand:
                return False
            if operator == "$lt" and not value < operand:
                return False
            if operator == "$lte" and not value <= operand:
                return False
        return True
    return value == condition


def _group(rows: List[Dict[str, Any]], spec: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Supports ``{"$sum": "$field"}`` and ``{"$avg": "$field"}`` accumulators."""
    buckets: Dict[Any, List[Dict[str, Any]]] = {}
    for doc in rows:
        buckets.setdefault(doc.get(spec["_id"].lstrip("$")), []).append(doc)

    grouped = []
    for key, members in buckets.items():
        result: Dict[str, Any] = {"_id": key}
        for name, accumulator in spec.items():
            if name == "_id":
                continue
            operator, field_ref = next(iter(accumulator.items()))
            values = [
                doc.get(field_ref.lstrip("$"))
                for doc in members
                if isinstance(doc.get(field_ref.lstrip("$")), (int, float))
            ]
            if operator == "$sum":
                result[name] = sum(values)
            elif operator == "$avg":
                result[name] = sum(values) / len(values) if values else None
        grouped.append(result)
    return grouped


class FakeCursor:
    def __init__(self, documents: Sequence[Dict[str, Any]]):
        self._documents = list(documents)
        self._skip = 0
        self._limit: int | None = None

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._documents.sort(key=lambda doc: doc.get(key), reverse=direction < 0)
        return self

    def skip(self, amount: int) -> "FakeCursor":
        self._skip = amount
        return self

    def limit(self, amount: int) -> "FakeCursor":
        self._limit = amount
        return self

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        docs = self._documents[self._skip :]
        if self._limit is not None:
            docs = docs[: self._limit]
        return iter(docs)


class FakeCollection:
    def __init__(self) -> None:
        self.documents: List[Dict[str, Any]] = []
        self.last_query: Dict[str, Any] | None = None
        self.pipelines: List[List[Dict[str, Any]]] = []
        self.aggregate_results: List[Dict[str, Any]] | None = None
        self.update_calls: List[tuple] = []
        self.created_indexes: List[tuple[Any, ...]] = []
        self.fail_with: Exception | None = None

    def _check(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with

    def _select(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        return [
            doc
            for doc in self.documents
            if all(_matches_condition(doc.get(k), v) for k, v in query.items())
        ]

    def find(self, query: Dict[str, Any] | None = None) -> FakeCursor:
        self._check()
        self.last_query = query or {}
        return FakeCursor(self._select(self.last_query))

    def find_one(self, query: Dict[str, Any]) -> Dict[str, Any] | None:
        self._check()
        self.last_query = query
        found = self._select(query)
        return found[0] if found else None

    def insert_one(self, document: Dict[str, Any]) -> Any:
        self._check()
        self.documents.append(document)
        return SimpleNamespace(acknowledged=True, inserted_id=document.get("id"))

    def update_one(self, query: Dict[str, Any], update: Dict[str, Any]) -> Any:
        self._check()
        self.update_calls.append(("one", query, update))
        for doc in self._select(query)[:1]:
            doc.update(update.get("$set", {}))
            return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    def update_many(self, query: Dict[str, Any], update: Dict[str, Any]) -> Any:
        self._check()
        self.update_calls.append(("many", query, update))
        matched = self._select(query)
        for doc in matched:
            doc.update(update.get("$set", {}))
        return SimpleNamespace(matched_count=len(matched), modified_count=len(matched))

    def aggregate(self, pipeline: List[Dict[str, Any]]) -> Iterator[Dict[str, Any]]:
        self._check()
        self.pipelines.append(pipeline)
        if self.aggregate_results is not None:
            return iter(self.aggregate_results)

        rows = list(self.documents)
        for stage in pipeline:
            if "$match" in stage:
                rows = [
                    doc
                    for doc in rows
                    if all(
                        _matches_condition(doc.get(k), v)
                        for k, v in stage["$match"].items()
                    )
                ]
            elif "$group" in stage:
                rows = _group(rows, stage["$group"])
            elif "$sort" in stage:
                for key, direction in reversed(list(stage["$sort"].items())):
                    rows.sort(key=lambda doc: doc.get(key), reverse=direction < 0)
            elif "$limit" in stage:
                rows = rows[: stage["$limit"]]
        return iter(rows)

    def create_index(self, keys: Any, name: str | None = None, **kwargs: Any) -> Any:
        self.created_indexes.append((keys, name, kwargs))
        return name or keys


class FakeMongoDatabase:
    def __init__(self) -> None:
        self.db_name = "marketplace_test"
        self.collections: Dict[str, FakeCollection] = {}
        self.closed = False

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    def ping(self) -> None:
        return None

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def store_error() -> Exception:
    return PyMongoError("connection reset")
