"""Scoring orchestration: validate, prompt, score, persist."""

from __future__ import annotations

from uuid import UUID

from corretor_core.observability_enums import OperationType
from corretor_core.status_enums import OperationStatus
from corretor_service_libs.error_handling import (
    CorretorError,
    raise_parsing_error,
    raise_processing_error,
    raise_validation_error,
)
from corretor_service_libs.logging_utils import create_service_logger
from pydantic import ValidationError

from services.essay_scoring_service.api_models import ScoringResultV1
from services.essay_scoring_service.prompt_utils import (
    MIN_ESSAY_LENGTH,
    SCORING_RESPONSE_SCHEMA,
    build_scoring_prompt,
    essay_length,
)
from services.essay_scoring_service.protocols import (
    EssayMetricsProtocol,
    EssayRepositoryProtocol,
    IdentityProviderProtocol,
    ScoringClientProtocol,
    ScoringOrchestratorProtocol,
)

logger = create_service_logger("essay_scoring.orchestrator")

SERVICE_NAME = "essay_scoring_service"
DEFAULT_TOPIC = "Tema: Redação Corrigida"
ESSAY_TOO_SHORT_MESSAGE = "O texto da redação é muito curto."


class ScoringOrchestrator(ScoringOrchestratorProtocol):
    """Scores one essay and stores the result on a best-effort basis.

    Scoring failures propagate to the caller. Storage failures after a
    successful score are logged and counted but never replace the score.
    """

    def __init__(
        self,
        scoring_client: ScoringClientProtocol,
        repository: EssayRepositoryProtocol,
        identity_provider: IdentityProviderProtocol,
        metrics: EssayMetricsProtocol,
    ) -> None:
        self.scoring_client = scoring_client
        self.repository = repository
        self.identity_provider = identity_provider
        self.metrics = metrics

    async def score_essay(
        self,
        redacao: str | None,
        tema: str | None,
        correlation_id: UUID,
    ) -> ScoringResultV1:
        if not redacao or essay_length(redacao) < MIN_ESSAY_LENGTH:
            self.metrics.record_operation(OperationType.SCORE, OperationStatus.FAILED)
            raise_validation_error(
                service=SERVICE_NAME,
                operation="score_essay",
                field="redacao",
                message=ESSAY_TOO_SHORT_MESSAGE,
                correlation_id=correlation_id,
                min_length=MIN_ESSAY_LENGTH,
                actual_length=essay_length(redacao or ""),
            )

        result = await self._request_score(redacao, correlation_id)
        self.metrics.record_operation(OperationType.SCORE, OperationStatus.SUCCESS)

        await self._persist_best_effort(redacao, tema or DEFAULT_TOPIC, result, correlation_id)
        return result

    async def _request_score(self, redacao: str, correlation_id: UUID) -> ScoringResultV1:
        prompt = build_scoring_prompt(redacao)
        try:
            raw_result = await self.scoring_client.score(
                prompt, SCORING_RESPONSE_SCHEMA, correlation_id
            )
            return ScoringResultV1.model_validate(raw_result)
        except CorretorError:
            self.metrics.record_operation(OperationType.SCORE, OperationStatus.ERROR)
            raise
        except ValidationError as e:
            self.metrics.record_operation(OperationType.SCORE, OperationStatus.ERROR)
            logger.error(
                f"Scoring response does not match the rubric schema: {e}",
                extra={"correlation_id": str(correlation_id)},
            )
            raise_parsing_error(
                service=SERVICE_NAME,
                operation="score_essay",
                parse_target="scoring_result",
                message=f"Scoring response does not match the rubric schema: {e}",
                correlation_id=correlation_id,
            )
        except Exception as e:
            self.metrics.record_operation(OperationType.SCORE, OperationStatus.ERROR)
            logger.error(
                f"Unexpected error while scoring essay: {e}",
                extra={"correlation_id": str(correlation_id)},
                exc_info=True,
            )
            raise_processing_error(
                service=SERVICE_NAME,
                operation="score_essay",
                message=str(e),
                correlation_id=correlation_id,
                error_type=e.__class__.__name__,
            )

    async def _persist_best_effort(
        self,
        redacao: str,
        tema: str,
        result: ScoringResultV1,
        correlation_id: UUID,
    ) -> None:
        user_id = self.identity_provider.resolve_user_id()
        try:
            redacao_id = await self.repository.save_scored_essay(
                user_id=user_id,
                tema=tema,
                texto_original=redacao,
                result=result,
                correlation_id=correlation_id,
            )
        except Exception as e:
            # The score is still delivered; only the history entry is lost
            self.metrics.record_operation(OperationType.PERSIST_SCORE, OperationStatus.ERROR)
            logger.error(
                f"Failed to persist scored essay: {e}",
                extra={"correlation_id": str(correlation_id), "user_id": user_id},
                exc_info=True,
            )
            return

        self.metrics.record_operation(OperationType.PERSIST_SCORE, OperationStatus.SUCCESS)
        logger.info(
            f"Scored essay saved. Nota: {result.nota_final}",
            extra={"correlation_id": str(correlation_id), "redacao_id": redacao_id},
        )
