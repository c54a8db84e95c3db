"""Celery task implementations for infrastructure services."""

from .archival import archive_expired_predictions
from .base import CallbackTask, build_prediction_services, logger
from .prediction_refresh import refresh_category_predictions

__all__ = [
    "CallbackTask",
    "archive_expired_predictions",
    "build_prediction_services",
    "logger",
    "refresh_category_predictions",
]
