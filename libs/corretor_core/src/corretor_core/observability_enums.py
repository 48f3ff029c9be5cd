"""
corretor_core.observability_enums - Enums for metrics, monitoring, and observability.
"""

from __future__ import annotations

from enum import Enum


class OperationType(str, Enum):
    """Types of essay operations for metrics collection."""

    SCORE = "score"
    SAVE_DRAFT = "save_draft"
    PERSIST_SCORE = "persist_score"
    FETCH_DASHBOARD = "fetch_dashboard"
    FETCH_ESSAY = "fetch_essay"
