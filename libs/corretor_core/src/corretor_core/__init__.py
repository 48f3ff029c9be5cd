"""Shared enums and data models for the essay scoring platform."""

from .config_enums import Environment
from .error_enums import ErrorCode
from .models.error_models import ErrorDetail
from .observability_enums import OperationType
from .status_enums import OperationStatus

__all__ = [
    "Environment",
    "ErrorCode",
    "ErrorDetail",
    "OperationStatus",
    "OperationType",
]
