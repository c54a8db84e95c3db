"""
Inventory Forecast Root Module

Demand forecasting service for the marketplace: turns historical sales
records into forecasts, trend classifications and recommendations, ranks
trending items and keeps versioned predictions.

Layer Structure:
- Domain: Sales and prediction entities, forecasting algorithms, repository ports
- Application: Forecast, ranking and prediction lifecycle use cases and DTOs
- Infrastructure: MongoDB repositories, Celery jobs and health checks
- Presentation: FastAPI controllers
- Shared: Logging, constants and environment helpers
- Main: Composition root, configuration and entry points
"""
