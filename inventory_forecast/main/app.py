"""
Main Application - Main Layer

Entry point for the FastAPI application: loads settings, configures
logging, initializes the container and mounts the routers.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inventory_forecast.main.config import get_settings
from inventory_forecast.main.container import app_lifespan, init_container
from inventory_forecast.presentation.controllers import (
    predictive_router,
    system_router,
)
from inventory_forecast.shared import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

# Basic logging first so configuration loading is logged.
configure_logging()

settings = get_settings()
update_logging_from_settings(settings)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("application.startup")

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("application.shutdown")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application
    """
    settings = get_settings()

    init_container(settings)

    app = FastAPI(
        title=settings.service.title,
        description=settings.service.description,
        version=settings.service.version,
        debug=settings.service.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(system_router)
    app.include_router(predictive_router)

    return app


app = create_app()


def serve() -> None:
    """Run the API with uvicorn using the service settings."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "inventory_forecast.main.app:app",
        host="0.0.0.0",
        port=settings.service.port,
        reload=settings.service.reload,
        log_config=None,
    )
