"""
Trend estimation with ordinary least squares.

The same fit is used twice by the forecast flow: once on the raw daily
series to classify the trend and score the fit, and once on the smoothed
series to project future values.
"""

from __future__ import annotations

from typing import Optional, Sequence

import numpy as np
from sklearn.metrics import r2_score

from inventory_forecast.domain.entities.forecast import TrendAnalysis, TrendLabel

INCREASING_THRESHOLD = 0.1
DECREASING_THRESHOLD = -0.1

# Relative bound under which the series is treated as constant.
_ZERO_VARIANCE = 1e-12


def classify_slope(slope: float) -> TrendLabel:
    if slope > INCREASING_THRESHOLD:
        return TrendLabel.INCREASING
    if slope < DECREASING_THRESHOLD:
        return TrendLabel.DECREASING
    return TrendLabel.STABLE


def estimate_trend(
    indices: Sequence[float], values: Sequence[float]
) -> TrendAnalysis:
    """
    Fit ``value = intercept + slope * index`` and classify the slope.

    With fewer than two points the result is STABLE with a zero slope and
    the single value (if any) as intercept. ``r_squared`` is None when it
    is undefined, i.e. for fewer than two points or a constant series.
    """
    if len(indices) != len(values):
        raise ValueError("indices and values must have the same length")

    if len(indices) < 2:
        intercept = float(values[0]) if len(values) == 1 else 0.0
        return TrendAnalysis(trend=TrendLabel.STABLE, slope=0.0, intercept=intercept)

    x = np.asarray(indices, dtype=float)
    y = np.asarray(values, dtype=float)
    slope, intercept = np.polyfit(x, y, deg=1)

    return TrendAnalysis(
        trend=classify_slope(float(slope)),
        slope=float(slope),
        intercept=float(intercept),
        r_squared=_r_squared(x, y, float(slope), float(intercept)),
    )


def _r_squared(
    x: np.ndarray, y: np.ndarray, slope: float, intercept: float
) -> Optional[float]:
    ss_tot = float(np.sum((y - y.mean()) ** 2))
    if ss_tot <= _ZERO_VARIANCE * max(1.0, float(np.sum(y**2))):
        return None
    r2 = float(r2_score(y, intercept + slope * x))
    return float(np.clip(r2, 0.0, 1.0))
