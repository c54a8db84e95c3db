"""
Domain Errors

Exceptions raised by the forecasting domain. Insufficient history is not
an error: it is reported through ``ForecastResult`` instead.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ForecastValidationError(DomainError):
    """Raised when a forecast request is malformed (empty scope, bad horizon)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class PredictionNotFoundError(DomainError):
    """Raised when a persisted prediction cannot be found."""

    def __init__(self, prediction_id: str, details: Optional[Dict[str, Any]] = None):
        message = f"Prediction with ID {prediction_id} not found"
        super().__init__(message, details)


class StoreFailureError(DomainError):
    """Raised when the sales or prediction store cannot be read or written."""

    def __init__(self, operation: str, details: Optional[Dict[str, Any]] = None):
        message = f"Store operation '{operation}' failed"
        super().__init__(message, details)
        self.operation = operation
