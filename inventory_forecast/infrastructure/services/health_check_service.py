"""Infrastructure implementation for system health checks."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import List, Optional

import pika
import redis.asyncio as aioredis

from inventory_forecast.domain.entities.health import (
    DependencyStatus,
    ServiceStatus,
    SystemHealth,
)
from inventory_forecast.domain.ports.health_check import IHealthCheckService
from inventory_forecast.infrastructure.database.mongo_database import MongoDatabase


class HealthCheckService(IHealthCheckService):
    """Collect health information for the store and the worker transport."""

    def __init__(
        self,
        mongo_database: Optional[MongoDatabase],
        broker_url: str,
        redis_url: str,
        *,
        socket_timeout: float = 5.0,
    ) -> None:
        self._mongo_database = mongo_database
        self._broker_url = broker_url
        self._redis_url = redis_url
        self._socket_timeout = socket_timeout

    async def evaluate(self) -> SystemHealth:
        """Run checks concurrently and aggregate system health."""

        checks = {
            "mongo": asyncio.create_task(self._check_mongo()),
            "rabbitmq": asyncio.create_task(self._check_rabbitmq()),
            "redis": asyncio.create_task(self._check_redis()),
        }

        dependency_statuses: List[DependencyStatus] = []

        for name, task in checks.items():
            try:
                dependency_statuses.append(await task)
            except Exception as exc:  # pragma: no cover
                dependency_statuses.append(
                    DependencyStatus(
                        name=name,
                        status=ServiceStatus.DOWN,
                        message=str(exc),
                    )
                )

        return SystemHealth.from_dependencies(dependency_statuses)

    async def _check_mongo(self) -> DependencyStatus:
        if not self._mongo_database:
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.UNKNOWN,
                message="Mongo database client not configured.",
            )

        start = perf_counter()
        try:
            await asyncio.to_thread(self._mongo_database.ping)
            latency_ms = (perf_counter() - start) * 1000
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.UP,
                message="MongoDB ping successful",
                latency_ms=latency_ms,
                details={"database": self._mongo_database.db_name},
            )
        except Exception as exc:
            latency_ms = (perf_counter() - start) * 1000
            return DependencyStatus(
                name="mongo",
                status=ServiceStatus.DOWN,
                message=f"MongoDB ping failed: {exc}",
                latency_ms=latency_ms,
            )

    async def _check_rabbitmq(self) -> DependencyStatus:
        if not self._broker_url:
            return DependencyStatus(
                name="rabbitmq",
                status=ServiceStatus.UNKNOWN,
                message="RabbitMQ broker URL not configured.",
            )

        start = perf_counter()

        def _ping() -> None:
            parameters = pika.URLParameters(self._broker_url)
            parameters.socket_timeout = self._socket_timeout
            connection = pika.BlockingConnection(parameters)
            connection.close()

        try:
            await asyncio.to_thread(_ping)
            latency_ms = (perf_counter() - start) * 1000
            return DependencyStatus(
                name="rabbitmq",
                status=ServiceStatus.UP,
                message="RabbitMQ connection successful",
                latency_ms=latency_ms,
            )
        except Exception as exc:
            latency_ms = (perf_counter() - start) * 1000
            return DependencyStatus(
                name="rabbitmq",
                status=ServiceStatus.DOWN,
                message=f"RabbitMQ connection failed: {exc}",
                latency_ms=latency_ms,
            )

    async def _check_redis(self) -> DependencyStatus:
        if not self._redis_url:
            return DependencyStatus(
                name="redis",
                status=ServiceStatus.UNKNOWN,
                message="Redis URL not configured.",
            )

        start = perf_counter()
        client = aioredis.from_url(
            self._redis_url,
            socket_connect_timeout=self._socket_timeout,
            socket_timeout=self._socket_timeout,
        )
        try:
            await client.ping()
            latency_ms = (perf_counter() - start) * 1000
            return DependencyStatus(
                name="redis",
                status=ServiceStatus.UP,
                message="Redis ping successful",
                latency_ms=latency_ms,
            )
        except Exception as exc:
            latency_ms = (perf_counter() - start) * 1000
            return DependencyStatus(
                name="redis",
                status=ServiceStatus.DOWN,
                message=f"Redis ping failed: {exc}",
                latency_ms=latency_ms,
            )
        finally:
            await client.aclose()
