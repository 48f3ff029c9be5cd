"""
Factory functions that build an ErrorDetail and raise CorretorError.

Every factory is typed NoReturn so callers can rely on control flow ending
at the call site. Extra keyword arguments land in ErrorDetail.details.
"""

from __future__ import annotations

import traceback
from datetime import datetime, timezone
from typing import Any, NoReturn
from uuid import UUID

from corretor_core.error_enums import ErrorCode
from corretor_core.models.error_models import ErrorDetail

from corretor_service_libs.error_handling.corretor_error import CorretorError


def create_error_detail(
    error_code: ErrorCode,
    message: str,
    service: str,
    operation: str,
    correlation_id: UUID,
    details: dict[str, Any] | None = None,
    capture_stack: bool = False,
) -> ErrorDetail:
    """Create an ErrorDetail stamped with the current UTC time."""
    return ErrorDetail(
        error_code=error_code,
        message=message,
        correlation_id=correlation_id,
        timestamp=datetime.now(timezone.utc),
        service=service,
        operation=operation,
        details=details or {},
        stack_trace="".join(traceback.format_stack()) if capture_stack else None,
    )


def create_test_error_detail(
    error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
    message: str = "Test error",
    service: str = "test_service",
    operation: str = "test_operation",
    correlation_id: UUID | None = None,
    **details: Any,
) -> ErrorDetail:
    """Build an ErrorDetail with sensible defaults for use in tests."""
    from uuid import uuid4

    return create_error_detail(
        error_code=error_code,
        message=message,
        service=service,
        operation=operation,
        correlation_id=correlation_id or uuid4(),
        details=details,
    )


def _raise(
    error_code: ErrorCode,
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    details: dict[str, Any],
) -> NoReturn:
    raise CorretorError(
        create_error_detail(
            error_code=error_code,
            message=message,
            service=service,
            operation=operation,
            correlation_id=correlation_id,
            details=details,
        )
    )


def raise_validation_error(
    service: str,
    operation: str,
    field: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise for caller input that fails a precondition (HTTP 400)."""
    _raise(
        ErrorCode.VALIDATION_ERROR,
        service,
        operation,
        message,
        correlation_id,
        {"field": field, **additional_context},
    )


def raise_resource_not_found(
    service: str,
    operation: str,
    resource_type: str,
    resource_id: str,
    correlation_id: UUID,
    message: str | None = None,
    **additional_context: Any,
) -> NoReturn:
    """Raise when a requested resource does not exist (HTTP 404)."""
    _raise(
        ErrorCode.RESOURCE_NOT_FOUND,
        service,
        operation,
        message or f"{resource_type} '{resource_id}' not found",
        correlation_id,
        {"resource_type": resource_type, "resource_id": resource_id, **additional_context},
    )


def raise_configuration_error(
    service: str,
    operation: str,
    config_key: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise for missing or invalid service configuration."""
    _raise(
        ErrorCode.CONFIGURATION_ERROR,
        service,
        operation,
        message,
        correlation_id,
        {"config_key": config_key, **additional_context},
    )


def raise_external_service_error(
    service: str,
    operation: str,
    external_service: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise when an upstream dependency fails or answers unexpectedly."""
    _raise(
        ErrorCode.EXTERNAL_SERVICE_ERROR,
        service,
        operation,
        message,
        correlation_id,
        {"external_service": external_service, **additional_context},
    )


def raise_authentication_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise when an upstream dependency rejects our credentials."""
    _raise(
        ErrorCode.AUTHENTICATION_ERROR,
        service,
        operation,
        message,
        correlation_id,
        additional_context,
    )


def raise_connection_error(
    service: str,
    operation: str,
    target: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise when a dependency cannot be reached at all."""
    _raise(
        ErrorCode.CONNECTION_ERROR,
        service,
        operation,
        message,
        correlation_id,
        {"target": target, **additional_context},
    )


def raise_parsing_error(
    service: str,
    operation: str,
    parse_target: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise when a payload cannot be decoded into the expected shape."""
    _raise(
        ErrorCode.PARSING_ERROR,
        service,
        operation,
        message,
        correlation_id,
        {"parse_target": parse_target, **additional_context},
    )


def raise_database_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise when a database statement fails."""
    _raise(
        ErrorCode.DATABASE_ERROR,
        service,
        operation,
        message,
        correlation_id,
        additional_context,
    )


def raise_processing_error(
    service: str,
    operation: str,
    message: str,
    correlation_id: UUID,
    **additional_context: Any,
) -> NoReturn:
    """Raise for unexpected internal processing failures."""
    _raise(
        ErrorCode.PROCESSING_ERROR,
        service,
        operation,
        message,
        correlation_id,
        additional_context,
    )
