"""Shared response helpers for Essay Scoring Service routes."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from quart import Response, jsonify, request


async def load_json_object() -> dict[str, Any]:
    """Return the request body as a dict; missing or non-object bodies become {}."""
    payload = await request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def unexpected_error_response(
    message: str,
    correlation_id: UUID,
    error: Exception,
    **extra_fields: Any,
) -> tuple[Response, int]:
    """500 envelope for failures that never became a CorretorError."""
    return jsonify(
        {
            **extra_fields,
            "error": message,
            "details": str(error),
            "error_code": "UNKNOWN_ERROR",
            "correlation_id": str(correlation_id),
        }
    ), 500
