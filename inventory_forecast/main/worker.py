#!/usr/bin/env python3
"""
Worker Entry Point - Main Layer

Starts the Celery worker that runs the daily prediction refresh and the
archival sweep. Beat is embedded in the worker process.
"""

import os

from inventory_forecast.main.config import get_settings
from inventory_forecast.shared import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

configure_logging()

settings = get_settings()
update_logging_from_settings(settings)

logger = get_logger(__name__)


def create_worker():
    """
    Configure and return the Celery application used by the worker.

    Broker settings are exported to the environment before the Celery
    module is imported, since the task modules bind to that instance.
    """
    settings = get_settings()

    os.environ.setdefault("CELERY_BROKER_URL", settings.celery.broker_url)
    os.environ.setdefault("CELERY_RESULT_BACKEND", settings.celery.result_backend_url)

    from inventory_forecast.infrastructure.services.celery_config import celery_app

    logger.info(
        "worker.configured",
        broker_url=settings.celery.broker_url,
        backend_url=settings.celery.result_backend_url,
        app_name=celery_app.main,
        scheduled=sorted(celery_app.conf.beat_schedule),
    )

    return celery_app


def worker_arguments(embed_beat: bool = True) -> list:
    from inventory_forecast.infrastructure.services.celery_config import (
        PREDICTIONS_QUEUE,
    )

    arguments = [
        "worker",
        "--loglevel=info",
        f"--queues={PREDICTIONS_QUEUE}",
        "--concurrency=2",
        "--max-tasks-per-child=10",
    ]
    if embed_beat:
        arguments.append("--beat")
    return arguments


def main():
    """Main entry point for Celery worker."""

    logger.info("worker.starting")

    worker_app = create_worker()
    worker_app.worker_main(worker_arguments(embed_beat=settings.scheduler.enabled))


if __name__ == "__main__":
    main()
