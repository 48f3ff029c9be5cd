"""Dashboard data route for the Essay Scoring Service."""

from __future__ import annotations

import uuid

from corretor_service_libs.error_handling import CorretorError
from corretor_service_libs.error_handling.quart import create_error_response
from corretor_service_libs.logging_utils import bind_request_context, create_service_logger
from dishka import FromDishka
from quart import Blueprint, Response, jsonify
from quart_dishka import inject

from services.essay_scoring_service.api.responses import unexpected_error_response
from services.essay_scoring_service.protocols import DashboardAggregatorProtocol

logger = create_service_logger("essay_scoring.api.dashboard")
dashboard_bp = Blueprint("dashboard_routes", __name__, url_prefix="/api")

DASHBOARD_FAILED_MESSAGE = "Erro ao carregar dados do dashboard."


@dashboard_bp.route("/dashboard-data/<string:usuario_id>", methods=["GET"])
@inject
async def get_dashboard_data(
    usuario_id: str,
    aggregator: FromDishka[DashboardAggregatorProtocol],
) -> Response | tuple[Response, int]:
    """Summary, scored history and drafts for the resolved user."""
    correlation_id = uuid.uuid4()
    bind_request_context(correlation_id, endpoint="dashboard-data", requested_user_id=usuario_id)

    try:
        dashboard = await aggregator.build_dashboard(usuario_id, correlation_id)
        return jsonify(dashboard.model_dump())
    except CorretorError as e:
        logger.error(
            f"Error loading dashboard data: {e.error_detail.message}",
            extra={"correlation_id": str(correlation_id)},
        )
        return create_error_response(
            e.error_detail, status_code=500, public_message=DASHBOARD_FAILED_MESSAGE
        )
    except Exception as e:
        logger.error(
            f"Unexpected error loading dashboard data: {e}",
            extra={"correlation_id": str(correlation_id)},
            exc_info=True,
        )
        return unexpected_error_response(DASHBOARD_FAILED_MESSAGE, correlation_id, e)
