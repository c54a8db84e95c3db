"""Daily aggregation of raw sales rows into a regression-ready series."""

from __future__ import annotations

from datetime import datetime
from typing import Sequence

import pandas as pd

from inventory_forecast.domain.entities.sales import SalesRecord, TimeSeries


def aggregate_daily(records: Sequence[SalesRecord]) -> TimeSeries:
    """
    Sum sold quantities per calendar day.

    Only days present in ``records`` appear in the output, in ascending
    order, indexed 0..k-1. Days without sales are not zero-filled, so two
    sales days a week apart are adjacent on the regression axis.

    Args:
        records: Sales rows in any order.

    Returns:
        TimeSeries with parallel ``indices``, ``values`` and ``dates``.
    """
    if not records:
        return TimeSeries()

    frame = pd.DataFrame(
        {
            "day": [record.date.date() for record in records],
            "quantity": [float(record.quantity) for record in records],
        }
    )
    daily = frame.groupby("day", sort=True)["quantity"].sum()

    return TimeSeries(
        indices=list(range(len(daily))),
        values=[float(value) for value in daily.to_numpy()],
        dates=list(daily.index),
    )


def months_ago(reference: datetime, months: int) -> datetime:
    """Return ``reference`` shifted back by whole calendar months."""
    if months < 0:
        raise ValueError("months must be non-negative")
    shifted = pd.Timestamp(reference) - pd.DateOffset(months=months)
    return shifted.to_pydatetime()
