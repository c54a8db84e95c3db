"""
Domain Services Package

Pure forecasting building blocks: daily aggregation, trend estimation,
exponential smoothing and weekly seasonality.
"""

from .seasonality import detect_weekly_seasonality
from .smoothing import DEFAULT_ALPHA, exponential_smoothing
from .time_series import aggregate_daily, months_ago
from .trend_estimator import (
    DECREASING_THRESHOLD,
    INCREASING_THRESHOLD,
    classify_slope,
    estimate_trend,
)

__all__ = [
    "aggregate_daily",
    "classify_slope",
    "detect_weekly_seasonality",
    "estimate_trend",
    "exponential_smoothing",
    "months_ago",
    "DEFAULT_ALPHA",
    "DECREASING_THRESHOLD",
    "INCREASING_THRESHOLD",
]
