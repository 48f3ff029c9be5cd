"""
corretor_core.status_enums - Outcome enums.
"""

from __future__ import annotations

from enum import Enum


class OperationStatus(str, Enum):
    """Operation outcomes for metrics collection."""

    SUCCESS = "success"
    FAILED = "failed"
    ERROR = "error"
    NOT_FOUND = "not_found"
