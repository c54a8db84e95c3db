"""
Database package - Infrastructure Layer

MongoDB connection handling for the sales history and prediction stores.
"""

from inventory_forecast.infrastructure.database.mongo_database import (
    PREDICTIONS_COLLECTION,
    SALES_COLLECTION,
    MongoDatabase,
)

__all__ = ["MongoDatabase", "PREDICTIONS_COLLECTION", "SALES_COLLECTION"]
