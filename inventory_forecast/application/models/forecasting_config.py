"""Forecasting parameters injected into the use cases at construction."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ForecastingConfig:
    """Tunables of the forecasting engine."""

    min_data_points: int = 30
    lookback_months: int = 6
    forecast_days: int = 30
    smoothing_alpha: float = 0.3
    trending_window_months: int = 1
    prediction_validity_days: int = 30
    scope_timeout_seconds: float = 60.0

    def __post_init__(self) -> None:
        if self.min_data_points < 0:
            raise ValueError("min_data_points must be non-negative")
        if self.lookback_months < 1:
            raise ValueError("lookback_months must be at least 1")
        if self.forecast_days < 1:
            raise ValueError("forecast_days must be at least 1")
        if not 0.0 < self.smoothing_alpha <= 1.0:
            raise ValueError("smoothing_alpha must be in (0, 1]")
