"""
MongoDB Sales Data Repository - Infrastructure Layer

Read-only access to the ``sales_data`` collection. Queries run on a
worker thread so the event loop is never blocked by the driver.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import structlog
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import PyMongoError

from inventory_forecast.domain.entities.errors import StoreFailureError
from inventory_forecast.domain.entities.sales import (
    ForecastScope,
    SalesMetadata,
    SalesRecord,
    TrendingItem,
)
from inventory_forecast.domain.repositories.sales_repository import (
    ISalesDataRepository,
)
from inventory_forecast.domain.services import months_ago
from inventory_forecast.infrastructure.database import SALES_COLLECTION, MongoDatabase

logger = structlog.get_logger(__name__)


class SalesDataRepository(ISalesDataRepository):
    """MongoDB implementation of the sales history store."""

    def __init__(self, database: MongoDatabase):
        self.database = database
        self.collection_name = SALES_COLLECTION

    async def fetch_history(
        self,
        scope: ForecastScope,
        lookback_months: int,
        *,
        now: Optional[datetime] = None,
    ) -> List[SalesRecord]:
        reference = now or datetime.now(timezone.utc)
        query: Dict[str, Any] = {
            **scope.as_filters(),
            "date": {"$gte": months_ago(reference, lookback_months)},
        }

        def _query() -> List[Dict[str, Any]]:
            collection = self.database.get_collection(self.collection_name)
            return list(collection.find(query).sort("date", ASCENDING))

        try:
            documents = await asyncio.to_thread(_query)
        except PyMongoError as e:
            logger.error(
                "sales.fetch_history.failed", scope=scope.as_filters(), error=str(e)
            )
            raise StoreFailureError(
                "fetch_history", details={"error": str(e)}
            ) from e

        return [self._from_document(doc) for doc in documents]

    async def aggregate_trending(
        self, category_id: str, since: datetime, limit: int
    ) -> List[TrendingItem]:
        pipeline: List[Dict[str, Any]] = [
            {"$match": {"category_id": category_id, "date": {"$gte": since}}},
            {
                "$group": {
                    "_id": "$product_id",
                    "total_quantity": {"$sum": "$quantity"},
                    "total_revenue": {"$sum": "$revenue"},
                    "avg_order_value": {"$avg": "$average_order_value"},
                    "order_count": {"$sum": "$order_count"},
                }
            },
            {"$sort": {"total_quantity": DESCENDING}},
            {"$limit": limit},
        ]

        def _aggregate() -> List[Dict[str, Any]]:
            collection = self.database.get_collection(self.collection_name)
            return list(collection.aggregate(pipeline))

        try:
            documents = await asyncio.to_thread(_aggregate)
        except PyMongoError as e:
            logger.error(
                "sales.aggregate_trending.failed", category_id=category_id, error=str(e)
            )
            raise StoreFailureError(
                "aggregate_trending", details={"error": str(e)}
            ) from e

        return [
            TrendingItem(
                item_id=str(doc["_id"]),
                total_quantity=doc.get("total_quantity") or 0,
                total_revenue=doc.get("total_revenue") or 0,
                avg_order_value=doc.get("avg_order_value") or 0,
                order_count=int(doc.get("order_count") or 0),
            )
            for doc in documents
        ]

    @staticmethod
    def _from_document(document: Dict[str, Any]) -> SalesRecord:
        revenue = float(document.get("revenue") or 0)
        order_count = int(document.get("order_count", 1) or 0)

        average_order_value = document.get("average_order_value")
        if not average_order_value and order_count > 0:
            average_order_value = revenue / order_count

        metadata = document.get("metadata") or {}
        return SalesRecord(
            product_id=str(document["product_id"]),
            shop_id=str(document.get("shop_id", "")),
            category_id=str(document.get("category_id", "")),
            date=document["date"],
            quantity=float(document.get("quantity") or 0),
            revenue=revenue,
            order_count=order_count,
            average_order_value=float(average_order_value or 0),
            metadata=SalesMetadata(
                day_of_week=metadata.get("day_of_week"),
                is_holiday=metadata.get("is_holiday"),
                season=metadata.get("season"),
                weather_condition=metadata.get("weather_condition"),
                special_event=metadata.get("special_event"),
            ),
        )
