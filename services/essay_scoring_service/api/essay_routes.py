"""Essay scoring, draft and lookup routes for the Essay Scoring Service."""

from __future__ import annotations

import uuid

from corretor_core.error_enums import ErrorCode
from corretor_core.observability_enums import OperationType
from corretor_core.status_enums import OperationStatus
from corretor_service_libs.error_handling import CorretorError, raise_validation_error
from corretor_service_libs.error_handling.quart import create_error_response
from corretor_service_libs.logging_utils import bind_request_context, create_service_logger
from dishka import FromDishka
from pydantic import ValidationError
from quart import Blueprint, Response, jsonify
from quart_dishka import inject

from services.essay_scoring_service.api.responses import (
    load_json_object,
    unexpected_error_response,
)
from services.essay_scoring_service.api_models import (
    DraftSavedResponseV1,
    DraftSaveRequestV1,
    EssayCorrectionRequestV1,
)
from services.essay_scoring_service.implementations.draft_saver_impl import EMPTY_DRAFT_MESSAGE
from services.essay_scoring_service.implementations.scoring_orchestrator_impl import (
    ESSAY_TOO_SHORT_MESSAGE,
)
from services.essay_scoring_service.protocols import (
    DraftSaverProtocol,
    EssayMetricsProtocol,
    EssayRepositoryProtocol,
    ScoringOrchestratorProtocol,
)

logger = create_service_logger("essay_scoring.api.essays")
essay_bp = Blueprint("essay_routes", __name__, url_prefix="/api")

SERVICE_NAME = "essay_scoring_service"
SCORING_FAILED_MESSAGE = "Erro ao processar a correção."
DRAFT_SAVED_MESSAGE = "Rascunho salvo com sucesso."
DRAFT_FAILED_MESSAGE = "Erro interno ao salvar rascunho."
ESSAY_NOT_FOUND_MESSAGE = "Redação ou rascunho não encontrado."
ESSAY_LOOKUP_FAILED_MESSAGE = "Erro interno ao buscar a redação."
MAX_ESSAY_ID = 2_147_483_647


@essay_bp.route("/corrigir-redacao", methods=["POST"])
@inject
async def correct_essay(
    orchestrator: FromDishka[ScoringOrchestratorProtocol],
) -> Response | tuple[Response, int]:
    """Score an essay against the ENEM rubric and return the result."""
    correlation_id = uuid.uuid4()
    bind_request_context(correlation_id, endpoint="corrigir-redacao")

    try:
        try:
            body = EssayCorrectionRequestV1.model_validate(await load_json_object())
        except ValidationError as e:
            raise_validation_error(
                service=SERVICE_NAME,
                operation="correct_essay",
                field="request_body",
                message=ESSAY_TOO_SHORT_MESSAGE,
                correlation_id=correlation_id,
                validation_errors=str(e),
            )

        result = await orchestrator.score_essay(body.redacao, body.tema, correlation_id)
        return jsonify(result.model_dump())
    except CorretorError as e:
        if e.error_detail.error_code == ErrorCode.VALIDATION_ERROR:
            logger.warning(
                f"Essay rejected: {e.error_detail.message}",
                extra={"correlation_id": str(correlation_id)},
            )
            return create_error_response(e.error_detail)
        logger.error(
            f"Error processing essay correction: {e.error_detail.message}",
            extra={"correlation_id": str(correlation_id), "error_code": e.error_code},
        )
        return create_error_response(
            e.error_detail, status_code=500, public_message=SCORING_FAILED_MESSAGE
        )
    except Exception as e:
        logger.error(
            f"Unexpected error during essay correction: {e}",
            extra={"correlation_id": str(correlation_id)},
            exc_info=True,
        )
        return unexpected_error_response(SCORING_FAILED_MESSAGE, correlation_id, e)


@essay_bp.route("/salvar-rascunho", methods=["POST"])
@inject
async def save_draft(
    draft_saver: FromDishka[DraftSaverProtocol],
) -> Response | tuple[Response, int]:
    """Store an unscored draft."""
    correlation_id = uuid.uuid4()
    bind_request_context(correlation_id, endpoint="salvar-rascunho")

    try:
        try:
            body = DraftSaveRequestV1.model_validate(await load_json_object())
        except ValidationError as e:
            raise_validation_error(
                service=SERVICE_NAME,
                operation="save_draft",
                field="request_body",
                message=EMPTY_DRAFT_MESSAGE,
                correlation_id=correlation_id,
                validation_errors=str(e),
            )

        await draft_saver.save_draft(body.redacao, correlation_id)
        return jsonify(DraftSavedResponseV1(message=DRAFT_SAVED_MESSAGE).model_dump())
    except CorretorError as e:
        if e.error_detail.error_code == ErrorCode.VALIDATION_ERROR:
            return create_error_response(e.error_detail, success=False)
        logger.error(
            f"Error saving draft: {e.error_detail.message}",
            extra={"correlation_id": str(correlation_id), "error_code": e.error_code},
        )
        return create_error_response(
            e.error_detail,
            status_code=500,
            public_message=DRAFT_FAILED_MESSAGE,
            success=False,
        )
    except Exception as e:
        logger.error(
            f"Unexpected error saving draft: {e}",
            extra={"correlation_id": str(correlation_id)},
            exc_info=True,
        )
        return unexpected_error_response(DRAFT_FAILED_MESSAGE, correlation_id, e, success=False)


@essay_bp.route("/redacao/<string:redacao_id>", methods=["GET"])
@inject
async def get_essay(
    redacao_id: str,
    repository: FromDishka[EssayRepositoryProtocol],
    metrics: FromDishka[EssayMetricsProtocol],
) -> Response | tuple[Response, int]:
    """Return a stored essay or draft by id. No ownership check is made."""
    correlation_id = uuid.uuid4()
    bind_request_context(correlation_id, endpoint="redacao", redacao_id=redacao_id)

    try:
        if not (redacao_id.isascii() and redacao_id.isdigit()) or int(redacao_id) > MAX_ESSAY_ID:
            # Ids are int4 column values; anything else can never match a row
            metrics.record_operation(OperationType.FETCH_ESSAY, OperationStatus.NOT_FOUND)
            return jsonify(
                {"error": ESSAY_NOT_FOUND_MESSAGE, "correlation_id": str(correlation_id)}
            ), 404

        record = await repository.get_essay(int(redacao_id), correlation_id)
        metrics.record_operation(OperationType.FETCH_ESSAY, OperationStatus.SUCCESS)
        return jsonify(record.model_dump())
    except CorretorError as e:
        if e.error_detail.error_code == ErrorCode.RESOURCE_NOT_FOUND:
            metrics.record_operation(OperationType.FETCH_ESSAY, OperationStatus.NOT_FOUND)
            return create_error_response(e.error_detail, public_message=ESSAY_NOT_FOUND_MESSAGE)
        metrics.record_operation(OperationType.FETCH_ESSAY, OperationStatus.ERROR)
        logger.error(
            f"Error fetching essay {redacao_id}: {e.error_detail.message}",
            extra={"correlation_id": str(correlation_id)},
        )
        return create_error_response(
            e.error_detail, status_code=500, public_message=ESSAY_LOOKUP_FAILED_MESSAGE
        )
    except Exception as e:
        metrics.record_operation(OperationType.FETCH_ESSAY, OperationStatus.ERROR)
        logger.error(
            f"Unexpected error fetching essay {redacao_id}: {e}",
            extra={"correlation_id": str(correlation_id)},
            exc_info=True,
        )
        return unexpected_error_response(ESSAY_LOOKUP_FAILED_MESSAGE, correlation_id, e)
