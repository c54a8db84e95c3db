"""Plain configuration structures consumed by application use cases."""

from .forecasting_config import ForecastingConfig
from .system_info import SystemInfo

__all__ = ["ForecastingConfig", "SystemInfo"]
