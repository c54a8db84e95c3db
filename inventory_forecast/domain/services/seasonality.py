"""Weekly demand cycle detection."""

from __future__ import annotations

from typing import Dict, Sequence

import pandas as pd

from inventory_forecast.domain.entities.sales import SalesRecord


def detect_weekly_seasonality(records: Sequence[SalesRecord]) -> Dict[int, float]:
    """
    Average raw quantity per day of week (0=Monday ... 6=Sunday).

    Works on the raw rows, not on the daily aggregate. Weekdays with no
    observations are absent from the mapping rather than zero.
    """
    if not records:
        return {}

    frame = pd.DataFrame(
        {
            "weekday": [record.date.weekday() for record in records],
            "quantity": [float(record.quantity) for record in records],
        }
    )
    averages = frame.groupby("weekday")["quantity"].mean()
    return {int(day): float(avg) for day, avg in averages.items()}
