"""Prometheus-based essay metrics implementation."""

from __future__ import annotations

from corretor_core.observability_enums import OperationType
from corretor_core.status_enums import OperationStatus
from corretor_service_libs.logging_utils import create_service_logger
from prometheus_client import Counter

from services.essay_scoring_service.protocols import EssayMetricsProtocol

logger = create_service_logger("essay_scoring.metrics.prometheus")


class PrometheusEssayMetrics(EssayMetricsProtocol):
    """Prometheus-based implementation of essay metrics collection."""

    def __init__(self, essay_operations_counter: Counter) -> None:
        """
        Initialize Prometheus essay metrics.

        Args:
            essay_operations_counter: Prometheus counter for essay operations
        """
        self.essay_operations = essay_operations_counter

    def record_operation(self, operation: OperationType, status: OperationStatus) -> None:
        try:
            self.essay_operations.labels(operation=operation.value, status=status.value).inc()
        except Exception as e:
            logger.error(f"Error recording essay operation metric: {e}")
