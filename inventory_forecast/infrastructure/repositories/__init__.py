"""
Repositories Package - Infrastructure Layer

MongoDB implementations of the domain repository interfaces.
"""

from .prediction_repository import PredictionRepository
from .sales_data_repository import SalesDataRepository

__all__ = ["PredictionRepository", "SalesDataRepository"]
