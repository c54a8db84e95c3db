"""
Infrastructure Layer Package

MongoDB-backed repositories, the Celery worker wiring and dependency
health checks.
"""

from inventory_forecast.infrastructure import repositories

__all__ = ["repositories"]
