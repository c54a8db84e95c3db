"""Domain entities for historical sales data."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional


@dataclass(frozen=True, slots=True)
class SalesMetadata:
    """Contextual attributes recorded alongside a sale."""

    day_of_week: Optional[str] = None
    is_holiday: Optional[bool] = None
    season: Optional[str] = None
    weather_condition: Optional[str] = None
    special_event: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SalesRecord:
    """A single sales row written by the order fulfilment flow."""

    product_id: str
    shop_id: str
    category_id: str
    date: datetime
    quantity: float
    revenue: float = 0.0
    order_count: int = 1
    average_order_value: float = 0.0
    metadata: SalesMetadata = field(default_factory=SalesMetadata)


@dataclass(frozen=True, slots=True)
class ForecastScope:
    """Narrows the sales history a computation applies to."""

    product_id: Optional[str] = None
    category_id: Optional[str] = None

    def is_empty(self) -> bool:
        return not self.product_id and not self.category_id

    def as_filters(self) -> Dict[str, str]:
        filters: Dict[str, str] = {}
        if self.category_id:
            filters["category_id"] = self.category_id
        if self.product_id:
            filters["product_id"] = self.product_id
        return filters


@dataclass(frozen=True, slots=True)
class TimeSeriesPoint:
    """One aggregated calendar day of sales."""

    sequence_index: int
    date: date
    aggregated_quantity: float


@dataclass(slots=True)
class TimeSeries:
    """Daily series in column form, ready for regression."""

    indices: List[int] = field(default_factory=list)
    values: List[float] = field(default_factory=list)
    dates: List[date] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.indices)

    @property
    def points(self) -> List[TimeSeriesPoint]:
        return [
            TimeSeriesPoint(sequence_index=i, date=d, aggregated_quantity=v)
            for i, d, v in zip(self.indices, self.dates, self.values)
        ]


@dataclass(frozen=True, slots=True)
class TrendingItem:
    """Sales totals for one product within the ranking window."""

    item_id: str
    total_quantity: float
    total_revenue: float
    avg_order_value: float
    order_count: int
