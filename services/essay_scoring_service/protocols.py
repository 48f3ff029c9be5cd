"""
Essay Scoring Service behavioral contracts and protocols.

This module defines the protocols (interfaces) that Essay Scoring Service
components must implement, enabling dependency injection and testability.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Protocol, runtime_checkable
from uuid import UUID

from corretor_core.observability_enums import OperationType
from corretor_core.status_enums import OperationStatus
from pydantic import BaseModel

from services.essay_scoring_service.api_models import (
    DashboardResponseV1,
    EssayRecordV1,
    ScoringResultV1,
)


class ScoreSummary(BaseModel):
    """Raw aggregates over a user's scored essays.

    Averages are kept unrounded; presentation rounding happens in the
    dashboard aggregator.
    """

    total_scored: int
    avg_final: Decimal
    avg_c1: Decimal
    avg_c2: Decimal
    avg_c3: Decimal
    avg_c4: Decimal
    avg_c5: Decimal


class ScoredEssayRow(BaseModel):
    redacao_id: int
    tema: str
    nota_final: int
    data_submissao: datetime


class DraftRow(BaseModel):
    redacao_id: int
    texto_preview: str
    data_submissao: datetime


class ScoringClientProtocol(Protocol):
    """Capability interface for schema-constrained generation."""

    async def score(
        self,
        prompt: str,
        response_schema: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]:
        """
        Ask the generative model for a JSON object matching ``response_schema``.

        Args:
            prompt: Complete instruction with the essay embedded
            response_schema: JSON schema the model output must follow
            correlation_id: Request correlation ID for tracing

        Returns:
            The decoded JSON object

        Raises:
            CorretorError: On transport failure, upstream error status or
                undecodable output
        """
        ...


class EssayRepositoryProtocol(Protocol):
    """Protocol for essay persistence; every statement is parameterized."""

    async def save_scored_essay(
        self,
        user_id: int,
        tema: str,
        texto_original: str,
        result: ScoringResultV1,
        correlation_id: UUID | None = None,
    ) -> int:
        """Insert a scored essay and return its redacao_id."""
        ...

    async def save_draft(
        self,
        user_id: int,
        tema: str,
        texto_original: str,
        feedback: str,
        correlation_id: UUID | None = None,
    ) -> int:
        """Insert a draft (all scores zero) and return its redacao_id."""
        ...

    async def get_score_summary(self, user_id: int) -> ScoreSummary:
        """Count and average the scores of records with nota_final > 0."""
        ...

    async def list_scored_essays(self, user_id: int) -> list[ScoredEssayRow]:
        """List records with nota_final > 0, newest first."""
        ...

    async def list_drafts(self, user_id: int, preview_length: int) -> list[DraftRow]:
        """List records with nota_final = 0, newest first, text truncated."""
        ...

    async def get_essay(self, redacao_id: int, correlation_id: UUID | None = None) -> EssayRecordV1:
        """Fetch one record; raises RESOURCE_NOT_FOUND if absent."""
        ...

    async def ensure_user(self, user_id: int, nome: str, email: str) -> None:
        """Insert the user if no row with that id exists."""
        ...

    async def check_connectivity(self) -> None:
        """Run a trivial statement; raises if the database is unreachable."""
        ...


class IdentityProviderProtocol(Protocol):
    """Resolves the user a request acts on behalf of."""

    def resolve_user_id(self, requested_user_id: str | None = None) -> int:
        ...


class ScoringOrchestratorProtocol(Protocol):
    async def score_essay(
        self,
        redacao: str | None,
        tema: str | None,
        correlation_id: UUID,
    ) -> ScoringResultV1:
        """Validate, score and best-effort persist one essay."""
        ...


class DraftSaverProtocol(Protocol):
    async def save_draft(self, redacao: str | None, correlation_id: UUID) -> int:
        """Validate and persist a draft, returning its redacao_id."""
        ...


class DashboardAggregatorProtocol(Protocol):
    async def build_dashboard(
        self, requested_user_id: str | None, correlation_id: UUID
    ) -> DashboardResponseV1:
        """Compose summary, history and drafts for the resolved user."""
        ...


@runtime_checkable
class EssayMetricsProtocol(Protocol):
    """Protocol for essay operation metrics collection."""

    def record_operation(self, operation: OperationType, status: OperationStatus) -> None:
        """
        Record an essay operation metric.

        Args:
            operation: Operation type (OperationType enum)
            status: Operation status (OperationStatus enum)
        """
        ...
