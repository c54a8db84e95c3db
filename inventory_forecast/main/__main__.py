"""
Main module entry point.

``python -m inventory_forecast.main`` starts the Celery worker.
"""

from .worker import main

if __name__ == "__main__":
    main()
