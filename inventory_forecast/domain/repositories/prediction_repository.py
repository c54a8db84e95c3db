"""
Domain Repository Interface - Prediction

Persistence for prediction snapshots. Every read path archives active
predictions whose validity window has passed before returning them.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from inventory_forecast.domain.entities.prediction import (
    Prediction,
    PredictionStatus,
)


class IPredictionRepository(ABC):
    """Interface for prediction repository."""

    @abstractmethod
    async def create(self, prediction: Prediction) -> Prediction:
        """Insert a new prediction. Existing predictions are never replaced."""
        pass

    @abstractmethod
    async def get_by_id(self, prediction_id: UUID) -> Optional[Prediction]:
        """Get a prediction by ID, archiving it first if it has expired."""
        pass

    @abstractmethod
    async def find(
        self,
        *,
        category_id: Optional[str] = None,
        product_id: Optional[str] = None,
        status: Optional[PredictionStatus] = None,
        limit: int = 100,
    ) -> List[Prediction]:
        """List predictions, newest first, with lazy archival applied."""
        pass

    @abstractmethod
    async def find_archived_since(self, since: datetime) -> List[Prediction]:
        """Archived predictions whose validity ended at or after ``since``."""
        pass

    @abstractmethod
    async def archive_expired(self, now: datetime) -> int:
        """Archive every active prediction past ``valid_until``.

        Returns the number of predictions archived.
        """
        pass
