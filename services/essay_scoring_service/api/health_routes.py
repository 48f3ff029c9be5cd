"""Health and metrics routes for the Essay Scoring Service."""

from __future__ import annotations

import uuid

from corretor_service_libs.logging_utils import create_service_logger
from dishka import FromDishka
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest
from quart import Blueprint, Response, jsonify
from quart_dishka import inject

from services.essay_scoring_service.config import Settings
from services.essay_scoring_service.protocols import EssayRepositoryProtocol

logger = create_service_logger("essay_scoring.api.health")
health_bp = Blueprint("health_routes", __name__)


@health_bp.route("/healthz")
@inject
async def health_check(
    repository: FromDishka[EssayRepositoryProtocol],
    settings: FromDishka[Settings],
) -> Response | tuple[Response, int]:
    """Standardized health check endpoint."""
    correlation_id = uuid.uuid4()

    database_error: str | None = None
    try:
        await repository.check_connectivity()
    except Exception as e:
        logger.error(
            f"Health check database error: {e}",
            extra={"correlation_id": str(correlation_id)},
        )
        database_error = str(e)

    healthy = database_error is None
    health_response = {
        "service": "essay_scoring_service",
        "status": "healthy" if healthy else "unhealthy",
        "message": (
            "Essay Scoring Service is healthy" if healthy else "Database is not reachable"
        ),
        "version": settings.SERVICE_VERSION,
        "checks": {
            "service_responsive": True,
            "database": healthy,
        },
        "environment": settings.ENVIRONMENT.value,
        "correlation_id": str(correlation_id),
    }
    if database_error is not None:
        health_response["error"] = database_error

    return jsonify(health_response), 200 if healthy else 503


@health_bp.route("/metrics")
@inject
async def metrics(registry: FromDishka[CollectorRegistry]) -> Response:
    """Prometheus metrics endpoint."""
    correlation_id = uuid.uuid4()

    try:
        metrics_data = generate_latest(registry)
        response = Response(metrics_data, content_type=CONTENT_TYPE_LATEST)
        response.headers["X-Correlation-ID"] = str(correlation_id)
        return response
    except Exception as e:
        logger.error(
            f"Error generating metrics: {e}",
            extra={"correlation_id": str(correlation_id)},
            exc_info=True,
        )
        return Response("Error generating metrics", status=500)
