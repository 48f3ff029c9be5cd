"""Tests for the dashboard data route."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock

import pytest
from dishka import Provider, Scope, make_async_container
from quart import Quart
from quart_dishka import QuartDishka

from services.essay_scoring_service.api.dashboard_routes import dashboard_bp
from services.essay_scoring_service.implementations.dashboard_aggregator_impl import (
    DashboardAggregator,
)
from services.essay_scoring_service.implementations.identity_provider_impl import (
    ConfiguredIdentityProvider,
)
from services.essay_scoring_service.protocols import (
    DashboardAggregatorProtocol,
    DraftRow,
    ScoredEssayRow,
    ScoreSummary,
)


@pytest.fixture
async def test_app(mock_repository: AsyncMock, metrics: Any) -> Quart:
    app = Quart(__name__)
    app.register_blueprint(dashboard_bp)

    aggregator = DashboardAggregator(
        repository=mock_repository,
        identity_provider=ConfiguredIdentityProvider(default_user_id=1),
        metrics=metrics,
    )

    provider = Provider()
    provider.provide(lambda: aggregator, scope=Scope.APP, provides=DashboardAggregatorProtocol)
    QuartDishka(app=app, container=make_async_container(provider))

    return app


async def test_dashboard_for_user_without_essays(test_app: Quart) -> None:
    async with test_app.test_client() as client:
        response = await client.get("/api/dashboard-data/1")

    assert response.status_code == 200
    assert await response.get_json() == {
        "sumario": {
            "redacoesCorrigidas": 0,
            "notaMedia": 0,
            "mediaC1": 0,
            "mediaC2": 0,
            "mediaC3": 0,
            "mediaC4": 0,
            "mediaC5": 0,
        },
        "historico": [],
        "rascunhos": [],
    }


async def test_dashboard_returns_summary_history_and_drafts(
    test_app: Quart, mock_repository: AsyncMock
) -> None:
    mock_repository.get_score_summary.return_value = ScoreSummary(
        total_scored=2,
        avg_final=Decimal("700.5"),
        avg_c1=Decimal("140"),
        avg_c2=Decimal("120.4"),
        avg_c3=Decimal("160"),
        avg_c4=Decimal("140"),
        avg_c5=Decimal("140"),
    )
    mock_repository.list_scored_essays.return_value = [
        ScoredEssayRow(
            redacao_id=4,
            tema="Cinema no Brasil",
            nota_final=760,
            data_submissao=datetime(2025, 3, 14, 9, 5, tzinfo=timezone.utc),
        ),
    ]
    mock_repository.list_drafts.return_value = [
        DraftRow(
            redacao_id=6,
            texto_preview="Ideia inicial",
            data_submissao=datetime(2025, 3, 15, 18, 30, tzinfo=timezone.utc),
        ),
    ]

    async with test_app.test_client() as client:
        response = await client.get("/api/dashboard-data/1")

    assert response.status_code == 200
    data = await response.get_json()
    assert data["sumario"]["redacoesCorrigidas"] == 2
    assert data["sumario"]["notaMedia"] == 701
    assert data["sumario"]["mediaC2"] == 120
    assert data["historico"] == [
        {"id": 4, "tema": "Cinema no Brasil", "nota": 760, "data": "14/03/2025"}
    ]
    assert data["rascunhos"] == [{"id": 6, "texto": "Ideia inicial...", "data": "15/03/2025 18:30"}]


async def test_path_user_id_is_ignored_by_default(
    test_app: Quart, mock_repository: AsyncMock
) -> None:
    async with test_app.test_client() as client:
        response = await client.get("/api/dashboard-data/999")

    assert response.status_code == 200
    mock_repository.get_score_summary.assert_awaited_once_with(1)
    mock_repository.list_scored_essays.assert_awaited_once_with(1)
    mock_repository.list_drafts.assert_awaited_once_with(1, 100)


async def test_query_failure_returns_500(test_app: Quart, mock_repository: AsyncMock) -> None:
    mock_repository.list_drafts.side_effect = RuntimeError("connection lost")

    async with test_app.test_client() as client:
        response = await client.get("/api/dashboard-data/1")

    assert response.status_code == 500
    data = await response.get_json()
    assert data["error"] == "Erro ao carregar dados do dashboard."
    assert "sumario" not in data
