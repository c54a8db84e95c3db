"""
MongoDB Database - Infrastructure Layer

Connection wrapper shared by the sales and prediction repositories. The
client is created with bounded server selection and socket timeouts so a
stalled store surfaces as an error instead of hanging a request.
"""

from typing import Optional

import pymongo.errors
import structlog
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

logger = structlog.get_logger(__name__)

SALES_COLLECTION = "sales_data"
PREDICTIONS_COLLECTION = "predictions"


class MongoDatabase:
    """MongoDB database client."""

    def __init__(
        self,
        mongo_uri: str,
        db_name: str,
        server_selection_timeout_ms: int = 5000,
        socket_timeout_ms: Optional[int] = 30000,
        client: Optional[MongoClient] = None,
    ):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database to use
            server_selection_timeout_ms: How long to wait for a reachable server
            socket_timeout_ms: Per-operation socket timeout
            client: Pre-built client, mainly for tests
        """
        self.db_name = db_name
        self.client: MongoClient = client or MongoClient(
            mongo_uri,
            serverSelectionTimeoutMS=server_selection_timeout_ms,
            socketTimeoutMS=socket_timeout_ms,
            tz_aware=True,
        )
        self.db: Database = self.client[db_name]

    def get_collection(self, collection_name: str) -> Collection:
        """
        Get a collection from the database.

        Args:
            collection_name: Name of the collection

        Returns:
            MongoDB collection
        """
        return self.db[collection_name]

    def ping(self) -> None:
        """Round trip to the server; raises PyMongoError when unreachable."""
        self.client.admin.command("ping")

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    def create_indexes(self) -> None:
        """
        Create the indexes used by the forecasting queries.

        Called once at API startup. Failures are logged and startup goes on,
        queries still work without indexes.
        """
        sales = self.db[SALES_COLLECTION]
        try:
            sales.create_index(
                [("category_id", ASCENDING), ("date", DESCENDING)],
                name="category_date_idx",
                background=True,
            )
            sales.create_index(
                [("product_id", ASCENDING), ("date", DESCENDING)],
                name="product_date_idx",
                background=True,
            )
            sales.create_index("date", name="date_idx", background=True)
        except pymongo.errors.OperationFailure as e:
            logger.warning(
                "mongo.indexes.failed", collection=SALES_COLLECTION, error=str(e)
            )

        predictions = self.db[PREDICTIONS_COLLECTION]
        try:
            predictions.create_index("id", name="id_idx", unique=True)
            predictions.create_index(
                [("category_id", ASCENDING), ("prediction_date", DESCENDING)],
                name="category_prediction_date_idx",
                background=True,
            )
            predictions.create_index(
                [("product_id", ASCENDING), ("prediction_date", DESCENDING)],
                name="product_prediction_date_idx",
                background=True,
            )
            predictions.create_index(
                [("type", ASCENDING), ("status", ASCENDING)],
                name="type_status_idx",
                background=True,
            )
            predictions.create_index(
                "valid_until", name="valid_until_idx", background=True
            )
        except pymongo.errors.OperationFailure as e:
            logger.warning(
                "mongo.indexes.failed", collection=PREDICTIONS_COLLECTION, error=str(e)
            )

        logger.info("mongo.indexes.ensured", database=self.db_name)
