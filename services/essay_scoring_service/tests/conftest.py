"""Shared fixtures for Essay Scoring Service tests."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock

import pytest
from corretor_core.observability_enums import OperationType
from corretor_core.status_enums import OperationStatus

from services.essay_scoring_service.api_models import EssayRecordV1, ScoringResultV1
from services.essay_scoring_service.protocols import (
    EssayRepositoryProtocol,
    ScoreSummary,
    ScoringClientProtocol,
)

ESSAY_TEXT = (
    "A democratização do acesso ao cinema no Brasil exige políticas públicas "
    "que levem salas de exibição às cidades do interior."
)


class RecordingMetrics:
    """In-memory EssayMetricsProtocol implementation for assertions."""

    def __init__(self) -> None:
        self.operations: list[tuple[OperationType, OperationStatus]] = []

    def record_operation(self, operation: OperationType, status: OperationStatus) -> None:
        self.operations.append((operation, status))


@pytest.fixture
def scoring_payload() -> dict[str, Any]:
    return {
        "nota_final": 720,
        "c1_score": 160,
        "c2_score": 120,
        "c3_score": 160,
        "c4_score": 120,
        "c5_score": 160,
        "feedback_detalhado": "Competência 1: bom domínio da norma.\nCompetência 5: proposta completa.",
    }


@pytest.fixture
def scoring_result(scoring_payload: dict[str, Any]) -> ScoringResultV1:
    return ScoringResultV1.model_validate(scoring_payload)


@pytest.fixture
def metrics() -> RecordingMetrics:
    return RecordingMetrics()


@pytest.fixture
def mock_scoring_client(scoring_payload: dict[str, Any]) -> AsyncMock:
    client = AsyncMock(spec=ScoringClientProtocol)
    client.score.return_value = scoring_payload
    return client


@pytest.fixture
def mock_repository() -> AsyncMock:
    repository = AsyncMock(spec=EssayRepositoryProtocol)
    repository.save_scored_essay.return_value = 10
    repository.save_draft.return_value = 11
    repository.get_score_summary.return_value = ScoreSummary(
        total_scored=0,
        avg_final=Decimal(0),
        avg_c1=Decimal(0),
        avg_c2=Decimal(0),
        avg_c3=Decimal(0),
        avg_c4=Decimal(0),
        avg_c5=Decimal(0),
    )
    repository.list_scored_essays.return_value = []
    repository.list_drafts.return_value = []
    repository.get_essay.return_value = EssayRecordV1(
        redacao_id=5,
        tema="Rascunho Salvo",
        texto_original="Meu rascunho",
        nota_final=0,
        c1_score=0,
        c2_score=0,
        c3_score=0,
        c4_score=0,
        c5_score=0,
        feedback_detalhado="Rascunho salvo. Aguardando correção.",
    )
    return repository


@pytest.fixture
def submitted_at() -> datetime:
    return datetime(2025, 3, 14, 9, 5, tzinfo=timezone.utc)


@pytest.fixture
def long_essay() -> str:
    """Essay text comfortably above the minimum length."""
    return ESSAY_TEXT
