"""
Repositories Package

Contracts for reading sales history and persisting predictions.
Implementations live in the infrastructure layer.
"""

from .prediction_repository import IPredictionRepository
from .sales_repository import ISalesDataRepository

__all__ = ["IPredictionRepository", "ISalesDataRepository"]
