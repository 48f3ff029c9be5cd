"""Quart response helpers for CorretorError."""

from __future__ import annotations

from typing import Any

from corretor_core.error_enums import ErrorCode
from corretor_core.models.error_models import ErrorDetail
from quart import Response, jsonify

_STATUS_BY_ERROR_CODE: dict[ErrorCode, int] = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.MISSING_REQUIRED_FIELD: 400,
    ErrorCode.RESOURCE_NOT_FOUND: 404,
}


def status_code_for(error_code: ErrorCode) -> int:
    """Map an error code to its HTTP status; unmapped codes are server errors."""
    return _STATUS_BY_ERROR_CODE.get(error_code, 500)


def create_error_response(
    error_detail: ErrorDetail,
    status_code: int | None = None,
    public_message: str | None = None,
    **extra_fields: Any,
) -> tuple[Response, int]:
    """Build the JSON error envelope for an ErrorDetail.

    The envelope keeps a human-readable ``error`` string at the top level;
    ``public_message`` replaces the internal message there when the client
    should see a fixed text, in which case the internal message is moved to
    ``details``.
    """
    body: dict[str, Any] = dict(extra_fields)
    if public_message is not None:
        body["error"] = public_message
        body["details"] = error_detail.message
    else:
        body["error"] = error_detail.message
    body["error_code"] = error_detail.error_code.value
    body["correlation_id"] = str(error_detail.correlation_id)

    return jsonify(body), status_code or status_code_for(error_detail.error_code)
