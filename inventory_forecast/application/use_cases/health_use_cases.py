"""Use cases for health and application info endpoints."""

from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urlsplit, urlunsplit

from inventory_forecast.application.dtos.health_dto import (
    ApplicationInfoDTO,
    SystemHealthDTO,
)
from inventory_forecast.application.models import SystemInfo
from inventory_forecast.domain.entities.health import ApplicationInfo
from inventory_forecast.domain.ports.health_check import IHealthCheckService


class GetHealthStatusUseCase:
    """Use case responsible for returning health status."""

    def __init__(self, health_check_service: IHealthCheckService) -> None:
        self._health_check_service = health_check_service

    async def execute(self) -> SystemHealthDTO:
        system_health = await self._health_check_service.evaluate()
        return SystemHealthDTO.from_domain(system_health)


class GetApplicationInfoUseCase:
    """Use case responsible for returning application info."""

    def __init__(
        self,
        health_check_service: IHealthCheckService,
        system_info: SystemInfo,
    ) -> None:
        self._health_check_service = health_check_service
        self._info = system_info

    async def execute(self, started_at: Optional[datetime]) -> ApplicationInfoDTO:
        system_health = await self._health_check_service.evaluate()

        now = datetime.now(timezone.utc)
        started = started_at or now
        uptime_seconds = max(0.0, (now - started).total_seconds())

        extras = {
            "database": self._info.database_name,
            "celery": {
                "broker": redact_url(self._info.celery_broker_url),
                "result_backend": redact_url(self._info.celery_result_backend_url),
            },
        }

        info = ApplicationInfo(
            name=self._info.title,
            description=self._info.description,
            version=self._info.version,
            environment=self._info.environment,
            git_commit=self._info.git_commit,
            build_time=self._info.build_time,
            started_at=started,
            uptime_seconds=uptime_seconds,
            status=system_health.status,
            dependencies=system_health.dependencies,
            extras=extras,
        )

        return ApplicationInfoDTO.from_domain(info)


def redact_url(url: str) -> str:
    """Strip credentials from a connection URL."""
    if not url:
        return url

    parsed = urlsplit(url)
    if parsed.username or parsed.password:
        hostname = parsed.hostname or ""
        port_part = f":{parsed.port}" if parsed.port else ""
        netloc = f"{hostname}{port_part}"
        return urlunsplit(
            (parsed.scheme, netloc, parsed.path, parsed.query, parsed.fragment)
        )

    return url
