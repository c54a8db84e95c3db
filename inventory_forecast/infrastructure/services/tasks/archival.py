"""Celery task that archives predictions past their validity window."""

import asyncio
from typing import Any, Dict

from inventory_forecast.infrastructure.services.celery_config import (
    ARCHIVE_TASK,
    celery_app,
)
from inventory_forecast.infrastructure.services.tasks import base
from inventory_forecast.infrastructure.services.tasks.base import CallbackTask


@celery_app.task(bind=True, base=CallbackTask, name=ARCHIVE_TASK)
def archive_expired_predictions(self) -> Dict[str, Any]:
    services = base.build_prediction_services()
    try:
        result = asyncio.run(services.archive_expired.execute())
    finally:
        services.close()
    return result.model_dump(mode="json")
