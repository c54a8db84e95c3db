from __future__ import annotations

from types import SimpleNamespace
from uuid import uuid4

import pytest

from inventory_forecast.application.dtos.prediction_dto import (
    ArchiveResultDTO,
    CategoryGenerationResultDTO,
)
from inventory_forecast.domain.entities.prediction import PredictionType
from inventory_forecast.infrastructure.services.tasks import (
    archive_expired_predictions,
    base,
    refresh_category_predictions,
)
from inventory_forecast.infrastructure.services.tasks import (
    prediction_refresh as prediction_refresh_module,
)
from tests.conftest import FIXED_NOW, FakeMongoDatabase


class _StubGenerate:
    def __init__(self) -> None:
        self.calls = []

    async def execute(self, category_ids, prediction_type=PredictionType.INVENTORY):
        self.calls.append((list(category_ids), prediction_type))
        statuses = ["success", "failed", "error"]
        return [
            CategoryGenerationResultDTO(
                category_id=category_id,
                status=statuses[index % 3],
                prediction_id=uuid4() if index % 3 == 0 else None,
            )
            for index, category_id in enumerate(category_ids)
        ]


class _StubArchive:
    async def execute(self) -> ArchiveResultDTO:
        return ArchiveResultDTO(archived=4, executed_at=FIXED_NOW)


@pytest.fixture()
def services(monkeypatch) -> base.PredictionServices:
    services = base.PredictionServices(
        database=FakeMongoDatabase(),
        generate_predictions=_StubGenerate(),
        archive_expired=_StubArchive(),
    )
    monkeypatch.setattr(base, "build_prediction_services", lambda: services)
    return services


def test_refresh_generates_trending_predictions(services) -> None:
    summary = refresh_category_predictions.run(
        category_ids=["ELECTRONICS", "BOOKS", "TOYS"]
    )

    assert services.generate_predictions.calls == [
        (["ELECTRONICS", "BOOKS", "TOYS"], PredictionType.TRENDING)
    ]
    assert summary["categories"] == 3
    assert (summary["success"], summary["failed"], summary["error"]) == (1, 1, 1)
    assert summary["results"][1] == {
        "category_id": "BOOKS",
        "status": "failed",
        "prediction_id": None,
        "reason": None,
        "error": None,
    }
    assert services.database.closed is True


def test_refresh_defaults_to_configured_categories(services, monkeypatch) -> None:
    monkeypatch.setattr(
        prediction_refresh_module,
        "get_settings",
        lambda: SimpleNamespace(scheduler=SimpleNamespace(categories=["GARDEN"])),
    )

    summary = refresh_category_predictions.run()

    assert services.generate_predictions.calls[0][0] == ["GARDEN"]
    assert summary["categories"] == 1


def test_archive_task_returns_json_result(services) -> None:
    result = archive_expired_predictions.run()

    assert result == {"archived": 4, "executed_at": "2026-03-02T12:00:00Z"}
    assert services.database.closed is True
