"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the application.

Its primary responsibilities include:
- Defining cross-layer constants (environment names, log levels, categories)
- Configuring structured logging
- Resolving Docker secret files into environment variables

It must not depend on Infrastructure or Frameworks.
"""

from .consts import DEFAULT_CATEGORIES, EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "DEFAULT_CATEGORIES",
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
