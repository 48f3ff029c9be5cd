"""Tests for the Prometheus-backed essay metrics."""

from __future__ import annotations

from unittest.mock import MagicMock

from corretor_core.observability_enums import OperationType
from corretor_core.status_enums import OperationStatus
from prometheus_client import CollectorRegistry, Counter

from services.essay_scoring_service.implementations.prometheus_essay_metrics import (
    PrometheusEssayMetrics,
)
from services.essay_scoring_service.protocols import EssayMetricsProtocol


def test_record_operation_increments_labelled_counter() -> None:
    registry = CollectorRegistry()
    counter = Counter(
        "essay_operations_total",
        "Total essay operations",
        ["operation", "status"],
        registry=registry,
    )
    metrics = PrometheusEssayMetrics(counter)

    metrics.record_operation(OperationType.SCORE, OperationStatus.SUCCESS)
    metrics.record_operation(OperationType.SCORE, OperationStatus.SUCCESS)
    metrics.record_operation(OperationType.SAVE_DRAFT, OperationStatus.FAILED)

    assert isinstance(metrics, EssayMetricsProtocol)
    assert (
        registry.get_sample_value(
            "essay_operations_total", {"operation": "score", "status": "success"}
        )
        == 2.0
    )
    assert (
        registry.get_sample_value(
            "essay_operations_total", {"operation": "save_draft", "status": "failed"}
        )
        == 1.0
    )


def test_metric_failures_do_not_raise() -> None:
    counter = MagicMock()
    counter.labels.side_effect = ValueError("bad label")

    PrometheusEssayMetrics(counter).record_operation(
        OperationType.FETCH_DASHBOARD, OperationStatus.ERROR
    )
