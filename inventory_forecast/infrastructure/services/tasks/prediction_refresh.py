"""Celery task that refreshes the stored predictions of each category."""

import asyncio
from collections import Counter
from typing import Any, Dict, List, Optional

from inventory_forecast.domain.entities.prediction import PredictionType
from inventory_forecast.infrastructure.services.celery_config import (
    REFRESH_TASK,
    celery_app,
)
from inventory_forecast.infrastructure.services.tasks import base
from inventory_forecast.infrastructure.services.tasks.base import CallbackTask, logger
from inventory_forecast.infrastructure.settings import get_settings


@celery_app.task(bind=True, base=CallbackTask, name=REFRESH_TASK)
def refresh_category_predictions(
    self, category_ids: Optional[List[str]] = None
) -> Dict[str, Any]:
    """
    Generate a TRENDING prediction for every configured category.

    A failing or slow category is logged and reported in the summary; it
    never aborts the rest of the run.
    """
    categories = list(category_ids or get_settings().scheduler.categories)
    logger.info("prediction.refresh.started", categories=len(categories))

    services = base.build_prediction_services()
    try:
        results = asyncio.run(
            services.generate_predictions.execute(
                categories, prediction_type=PredictionType.TRENDING
            )
        )
    finally:
        services.close()

    counts = Counter(result.status for result in results)
    summary = {
        "categories": len(categories),
        "success": counts.get("success", 0),
        "failed": counts.get("failed", 0),
        "error": counts.get("error", 0),
        "results": [result.model_dump(mode="json") for result in results],
    }
    logger.info(
        "prediction.refresh.completed",
        success=summary["success"],
        failed=summary["failed"],
        error=summary["error"],
    )
    return summary
