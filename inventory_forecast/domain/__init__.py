"""
Domain Layer Package

Sales and prediction entities, the forecasting algorithms, and the
repository contracts. Nothing here depends on frameworks or databases.
"""

from inventory_forecast.domain import entities, ports, repositories, services

__all__ = ["entities", "repositories", "services", "ports"]
