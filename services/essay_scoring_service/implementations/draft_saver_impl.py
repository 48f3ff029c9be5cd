"""Draft persistence for unscored essays."""

from __future__ import annotations

from uuid import UUID

from corretor_core.observability_enums import OperationType
from corretor_core.status_enums import OperationStatus
from corretor_service_libs.error_handling import raise_validation_error
from corretor_service_libs.logging_utils import create_service_logger

from services.essay_scoring_service.protocols import (
    DraftSaverProtocol,
    EssayMetricsProtocol,
    EssayRepositoryProtocol,
    IdentityProviderProtocol,
)

logger = create_service_logger("essay_scoring.draft_saver")

SERVICE_NAME = "essay_scoring_service"
DRAFT_TOPIC = "Rascunho Salvo"
DRAFT_FEEDBACK = "Rascunho salvo. Aguardando correção."
EMPTY_DRAFT_MESSAGE = "O rascunho está vazio."


class DraftSaver(DraftSaverProtocol):
    """Stores drafts as zero-scored essays; every call inserts a new row."""

    def __init__(
        self,
        repository: EssayRepositoryProtocol,
        identity_provider: IdentityProviderProtocol,
        metrics: EssayMetricsProtocol,
    ) -> None:
        self.repository = repository
        self.identity_provider = identity_provider
        self.metrics = metrics

    async def save_draft(self, redacao: str | None, correlation_id: UUID) -> int:
        if not redacao or not redacao.strip():
            self.metrics.record_operation(OperationType.SAVE_DRAFT, OperationStatus.FAILED)
            raise_validation_error(
                service=SERVICE_NAME,
                operation="save_draft",
                field="redacao",
                message=EMPTY_DRAFT_MESSAGE,
                correlation_id=correlation_id,
            )

        user_id = self.identity_provider.resolve_user_id()
        try:
            redacao_id = await self.repository.save_draft(
                user_id=user_id,
                tema=DRAFT_TOPIC,
                texto_original=redacao,
                feedback=DRAFT_FEEDBACK,
                correlation_id=correlation_id,
            )
        except Exception:
            self.metrics.record_operation(OperationType.SAVE_DRAFT, OperationStatus.ERROR)
            raise

        self.metrics.record_operation(OperationType.SAVE_DRAFT, OperationStatus.SUCCESS)
        logger.info(
            "Draft saved",
            extra={"correlation_id": str(correlation_id), "redacao_id": redacao_id},
        )
        return redacao_id
