"""
Controllers Package - Presentation Layer

FastAPI routers that validate input, call the application use cases and
map domain errors to HTTP responses.
"""

from .predictive_controller import router as predictive_router
from .system_controller import router as system_router

__all__ = ["predictive_router", "system_router"]
