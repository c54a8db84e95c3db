"""
Presentation Layer Package

This package contains the presentation layer components,
which are responsible for handling HTTP requests and responses,
including API routes, controllers, and schemas.
"""

from inventory_forecast.presentation import controllers

__all__ = ["controllers"]
