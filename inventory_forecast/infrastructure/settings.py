"""Infrastructure-level configuration helpers for background workers."""

from __future__ import annotations

from typing import List

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from inventory_forecast.application.models import ForecastingConfig
from inventory_forecast.shared.consts import DEFAULT_CATEGORIES


class _DatabaseSettings(BaseSettings):
    mongo_uri: str = Field(
        default="mongodb://localhost:27017/marketplace",
        validation_alias=AliasChoices("DB_MONGO_URI", "MONGO_URI"),
        description="MongoDB connection URI",
    )
    database_name: str = Field(
        default="marketplace",
        validation_alias=AliasChoices("DB_DATABASE_NAME", "DATABASE_NAME"),
        description="MongoDB database name",
    )
    server_selection_timeout_ms: int = Field(
        default=5000,
        ge=1,
        validation_alias=AliasChoices(
            "DB_SERVER_SELECTION_TIMEOUT_MS", "SERVER_SELECTION_TIMEOUT_MS"
        ),
    )
    socket_timeout_ms: int = Field(
        default=30000,
        ge=1,
        validation_alias=AliasChoices("DB_SOCKET_TIMEOUT_MS", "SOCKET_TIMEOUT_MS"),
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class _PredictionSettings(BaseSettings):
    min_data_points: int = Field(
        default=30,
        ge=0,
        validation_alias=AliasChoices("PREDICTION_MIN_DATA_POINTS"),
        description="Minimum sales rows required to forecast",
    )
    lookback_months: int = Field(
        default=6,
        ge=1,
        validation_alias=AliasChoices("PREDICTION_LOOKBACK_MONTHS"),
    )
    forecast_days: int = Field(
        default=30,
        ge=1,
        validation_alias=AliasChoices("PREDICTION_FORECAST_DAYS"),
    )
    smoothing_alpha: float = Field(
        default=0.3,
        gt=0.0,
        le=1.0,
        validation_alias=AliasChoices("PREDICTION_SMOOTHING_ALPHA"),
    )
    trending_window_months: int = Field(
        default=1,
        ge=1,
        validation_alias=AliasChoices("PREDICTION_TRENDING_WINDOW_MONTHS"),
    )
    prediction_validity_days: int = Field(
        default=30,
        ge=1,
        validation_alias=AliasChoices("PREDICTION_VALIDITY_DAYS"),
        description="Days a stored prediction stays active",
    )
    scope_timeout_seconds: float = Field(
        default=60.0,
        gt=0.0,
        validation_alias=AliasChoices("PREDICTION_SCOPE_TIMEOUT_SECONDS"),
        description="Upper bound for one category during batch generation",
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    def to_config(self) -> ForecastingConfig:
        return ForecastingConfig(
            min_data_points=self.min_data_points,
            lookback_months=self.lookback_months,
            forecast_days=self.forecast_days,
            smoothing_alpha=self.smoothing_alpha,
            trending_window_months=self.trending_window_months,
            prediction_validity_days=self.prediction_validity_days,
            scope_timeout_seconds=self.scope_timeout_seconds,
        )


class _SchedulerSettings(BaseSettings):
    enabled: bool = Field(
        default=True,
        validation_alias=AliasChoices("SCHEDULER_ENABLED"),
    )
    categories: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CATEGORIES),
        validation_alias=AliasChoices("SCHEDULER_CATEGORIES"),
        description="Categories refreshed by the daily job (JSON list)",
    )
    refresh_hour: int = Field(
        default=2,
        ge=0,
        le=23,
        validation_alias=AliasChoices("SCHEDULER_REFRESH_HOUR"),
        description="UTC hour of the daily prediction refresh",
    )
    archive_hour: int = Field(
        default=3,
        ge=0,
        le=23,
        validation_alias=AliasChoices("SCHEDULER_ARCHIVE_HOUR"),
        description="UTC hour of the daily archival sweep",
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class InfrastructureSettings(BaseSettings):
    database: _DatabaseSettings = Field(default_factory=_DatabaseSettings)
    prediction: _PredictionSettings = Field(default_factory=_PredictionSettings)
    scheduler: _SchedulerSettings = Field(default_factory=_SchedulerSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


_settings: InfrastructureSettings | None = None


def get_settings() -> InfrastructureSettings:
    """Lazy-load infrastructure settings for Celery workers."""
    global _settings
    if _settings is None:
        _settings = InfrastructureSettings()
    return _settings
