"""
MongoDB Prediction Repository - Infrastructure Layer

Stores prediction snapshots in the ``predictions`` collection. Reads
archive expired active predictions and persist that change before the
prediction is returned.
"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

import structlog
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from inventory_forecast.domain.entities.errors import StoreFailureError
from inventory_forecast.domain.entities.prediction import (
    HistoricalSummary,
    ModelAlgorithm,
    Prediction,
    PredictionFactors,
    PredictionModelMetrics,
    PredictionStatus,
    PredictionType,
)
from inventory_forecast.domain.repositories.prediction_repository import (
    IPredictionRepository,
)
from inventory_forecast.infrastructure.database import (
    PREDICTIONS_COLLECTION,
    MongoDatabase,
)

logger = structlog.get_logger(__name__)


class PredictionRepository(IPredictionRepository):
    """MongoDB implementation of prediction repository."""

    def __init__(self, database: MongoDatabase):
        self.database = database
        self.collection_name = PREDICTIONS_COLLECTION

    def _collection(self):
        return self.database.get_collection(self.collection_name)

    async def create(self, prediction: Prediction) -> Prediction:
        # Saving a prediction that is already past its window stores it archived.
        prediction.archive_if_expired(datetime.now(timezone.utc))
        document = self._to_document(prediction)
        try:
            result = await asyncio.to_thread(self._collection().insert_one, document)
        except PyMongoError as e:
            logger.error(
                "prediction.create.failed", prediction_id=str(prediction.id), error=str(e)
            )
            raise StoreFailureError("create_prediction", details={"error": str(e)}) from e

        if not result.acknowledged:
            raise StoreFailureError(
                "create_prediction", details={"prediction_id": str(prediction.id)}
            )

        logger.info(
            "prediction.created",
            prediction_id=str(prediction.id),
            type=prediction.type.value,
            category_id=prediction.category_id,
            product_id=prediction.product_id,
            status=prediction.status.value,
        )
        return prediction

    async def get_by_id(self, prediction_id: UUID) -> Optional[Prediction]:
        try:
            document = await asyncio.to_thread(
                self._collection().find_one, {"id": str(prediction_id)}
            )
        except PyMongoError as e:
            logger.error(
                "prediction.get.failed", prediction_id=str(prediction_id), error=str(e)
            )
            raise StoreFailureError("get_prediction", details={"error": str(e)}) from e

        if document is None:
            return None

        prediction = self._from_document(document)
        await self._archive_if_expired(prediction)
        return prediction

    async def find(
        self,
        *,
        category_id: Optional[str] = None,
        product_id: Optional[str] = None,
        status: Optional[PredictionStatus] = None,
        limit: int = 100,
    ) -> List[Prediction]:
        query: Dict[str, Any] = {}
        if category_id:
            query["category_id"] = category_id
        if product_id:
            query["product_id"] = product_id
        if status is not None:
            query["status"] = status.value

        # Archive in bulk first so the status filter sees current statuses.
        await self.archive_expired(datetime.now(timezone.utc))

        def _query() -> List[Dict[str, Any]]:
            cursor = (
                self._collection()
                .find(query)
                .sort("prediction_date", DESCENDING)
                .limit(limit)
            )
            return list(cursor)

        try:
            documents = await asyncio.to_thread(_query)
        except PyMongoError as e:
            logger.error("prediction.find.failed", query=query, error=str(e))
            raise StoreFailureError("find_predictions", details={"error": str(e)}) from e

        return [self._from_document(document) for document in documents]

    async def find_archived_since(self, since: datetime) -> List[Prediction]:
        query = {
            "status": PredictionStatus.ARCHIVED.value,
            "valid_until": {"$gte": since},
        }
        try:
            documents = await asyncio.to_thread(
                lambda: list(self._collection().find(query))
            )
        except PyMongoError as e:
            logger.error("prediction.find_archived.failed", error=str(e))
            raise StoreFailureError(
                "find_archived_predictions", details={"error": str(e)}
            ) from e
        return [self._from_document(doc) for doc in documents]

    async def archive_expired(self, now: datetime) -> int:
        try:
            result = await asyncio.to_thread(
                self._collection().update_many,
                {
                    "status": PredictionStatus.ACTIVE.value,
                    "valid_until": {"$lt": now},
                },
                {
                    "$set": {
                        "status": PredictionStatus.ARCHIVED.value,
                        "updated_at": now,
                    }
                },
            )
        except PyMongoError as e:
            logger.error("prediction.archive_expired.failed", error=str(e))
            raise StoreFailureError(
                "archive_expired_predictions", details={"error": str(e)}
            ) from e
        return result.modified_count

    async def _archive_if_expired(self, prediction: Prediction) -> None:
        if not prediction.archive_if_expired(datetime.now(timezone.utc)):
            return
        try:
            await asyncio.to_thread(
                self._collection().update_one,
                {"id": str(prediction.id), "status": PredictionStatus.ACTIVE.value},
                {
                    "$set": {
                        "status": prediction.status.value,
                        "updated_at": prediction.updated_at,
                    }
                },
            )
        except PyMongoError as e:
            logger.error(
                "prediction.archive.failed",
                prediction_id=str(prediction.id),
                error=str(e),
            )
            raise StoreFailureError("archive_prediction", details={"error": str(e)}) from e
        logger.info("prediction.archived", prediction_id=str(prediction.id))

    @staticmethod
    def _to_document(prediction: Prediction) -> Dict[str, Any]:
        return {
            "id": str(prediction.id),
            "type": prediction.type.value,
            "category_id": prediction.category_id,
            "product_id": prediction.product_id,
            "prediction_date": prediction.prediction_date,
            "forecasted_value": prediction.forecasted_value,
            "confidence_score": prediction.confidence_score,
            "historical_data": {
                "data_points": prediction.historical_data.data_points,
                "average_value": prediction.historical_data.average_value,
                "trend": prediction.historical_data.trend,
                "start_date": prediction.historical_data.start_date,
                "end_date": prediction.historical_data.end_date,
            },
            "factors": {
                "seasonality": prediction.factors.seasonality,
                "trend": prediction.factors.trend,
            },
            "model_metrics": {
                "algorithm": prediction.model_metrics.algorithm.value,
                "accuracy": prediction.model_metrics.accuracy,
                "r_squared": prediction.model_metrics.r_squared,
                "rmse": prediction.model_metrics.rmse,
                "mae": prediction.model_metrics.mae,
            },
            "recommendations": list(prediction.recommendations),
            "status": prediction.status.value,
            "valid_until": prediction.valid_until,
            "created_at": prediction.created_at,
            "updated_at": prediction.updated_at,
        }

    @staticmethod
    def _from_document(document: Dict[str, Any]) -> Prediction:
        history = document.get("historical_data") or {}
        factors = document.get("factors") or {}
        metrics = document.get("model_metrics") or {}

        return Prediction(
            id=UUID(document["id"]),
            type=PredictionType(document["type"]),
            category_id=document.get("category_id"),
            product_id=document.get("product_id"),
            prediction_date=document["prediction_date"],
            forecasted_value=document.get("forecasted_value", 0.0),
            confidence_score=document.get("confidence_score", 0.0),
            historical_data=HistoricalSummary(
                data_points=history.get("data_points", 0),
                average_value=history.get("average_value"),
                trend=history.get("trend"),
                start_date=history.get("start_date"),
                end_date=history.get("end_date"),
            ),
            factors=PredictionFactors(
                seasonality=factors.get("seasonality"),
                trend=factors.get("trend"),
            ),
            model_metrics=PredictionModelMetrics(
                algorithm=ModelAlgorithm(
                    metrics.get("algorithm", ModelAlgorithm.LINEAR_REGRESSION.value)
                ),
                accuracy=metrics.get("accuracy"),
                r_squared=metrics.get("r_squared"),
                rmse=metrics.get("rmse"),
                mae=metrics.get("mae"),
            ),
            recommendations=list(document.get("recommendations") or []),
            status=PredictionStatus(document.get("status", PredictionStatus.ACTIVE.value)),
            valid_until=document["valid_until"],
            created_at=document.get("created_at") or datetime.now(timezone.utc),
            updated_at=document.get("updated_at") or datetime.now(timezone.utc),
        )
