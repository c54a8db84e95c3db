"""
Domain Repository Interface - Sales Data

Read-only access to the sales history written by order fulfilment.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from inventory_forecast.domain.entities.sales import (
    ForecastScope,
    SalesRecord,
    TrendingItem,
)


class ISalesDataRepository(ABC):
    """Interface for the historical sales store."""

    @abstractmethod
    async def fetch_history(
        self,
        scope: ForecastScope,
        lookback_months: int,
        *,
        now: Optional[datetime] = None,
    ) -> List[SalesRecord]:
        """
        Sales rows for ``scope`` dated within the last ``lookback_months``.

        Rows are ordered by date ascending. An empty list means no history,
        not a failure.
        """
        pass

    @abstractmethod
    async def aggregate_trending(
        self, category_id: str, since: datetime, limit: int
    ) -> List[TrendingItem]:
        """Per-product totals since ``since``, highest quantity first."""
        pass
