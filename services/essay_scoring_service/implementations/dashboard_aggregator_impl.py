"""Dashboard composition from the three essay read queries."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from corretor_core.observability_enums import OperationType
from corretor_core.status_enums import OperationStatus
from corretor_service_libs.logging_utils import create_service_logger

from services.essay_scoring_service.api_models import (
    DashboardResponseV1,
    DashboardSummaryV1,
    DraftEntryV1,
    HistoryEntryV1,
)
from services.essay_scoring_service.protocols import (
    DashboardAggregatorProtocol,
    EssayMetricsProtocol,
    EssayRepositoryProtocol,
    IdentityProviderProtocol,
)

logger = create_service_logger("essay_scoring.dashboard")

DRAFT_PREVIEW_LENGTH = 100
DRAFT_PREVIEW_SUFFIX = "..."
HISTORY_DATE_FORMAT = "%d/%m/%Y"
DRAFT_DATE_FORMAT = "%d/%m/%Y %H:%M"


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer with halves rounded up."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def format_timestamp(value: datetime, fmt: str, display_tz: tzinfo) -> str:
    """Render a stored timestamp in the display timezone.

    Naive values (SQLite) are stored in UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(display_tz).strftime(fmt)


class DashboardAggregator(DashboardAggregatorProtocol):
    """Builds the dashboard document; any query failure fails the whole call."""

    def __init__(
        self,
        repository: EssayRepositoryProtocol,
        identity_provider: IdentityProviderProtocol,
        metrics: EssayMetricsProtocol,
        display_tz: tzinfo = timezone.utc,
    ) -> None:
        self.repository = repository
        self.identity_provider = identity_provider
        self.metrics = metrics
        self.display_tz = display_tz

    async def build_dashboard(
        self, requested_user_id: str | None, correlation_id: UUID
    ) -> DashboardResponseV1:
        user_id = self.identity_provider.resolve_user_id(requested_user_id)

        try:
            summary = await self.repository.get_score_summary(user_id)
            scored = await self.repository.list_scored_essays(user_id)
            drafts = await self.repository.list_drafts(user_id, DRAFT_PREVIEW_LENGTH)
        except Exception:
            self.metrics.record_operation(OperationType.FETCH_DASHBOARD, OperationStatus.ERROR)
            raise

        response = DashboardResponseV1(
            sumario=DashboardSummaryV1(
                redacoesCorrigidas=summary.total_scored,
                notaMedia=round_half_up(summary.avg_final),
                mediaC1=round_half_up(summary.avg_c1),
                mediaC2=round_half_up(summary.avg_c2),
                mediaC3=round_half_up(summary.avg_c3),
                mediaC4=round_half_up(summary.avg_c4),
                mediaC5=round_half_up(summary.avg_c5),
            ),
            historico=[
                HistoryEntryV1(
                    id=row.redacao_id,
                    tema=row.tema,
                    nota=row.nota_final,
                    data=format_timestamp(row.data_submissao, HISTORY_DATE_FORMAT, self.display_tz),
                )
                for row in scored
            ],
            rascunhos=[
                DraftEntryV1(
                    id=row.redacao_id,
                    texto=row.texto_preview + DRAFT_PREVIEW_SUFFIX,
                    data=format_timestamp(row.data_submissao, DRAFT_DATE_FORMAT, self.display_tz),
                )
                for row in drafts
            ],
        )

        self.metrics.record_operation(OperationType.FETCH_DASHBOARD, OperationStatus.SUCCESS)
        logger.info(
            "Dashboard assembled",
            extra={
                "correlation_id": str(correlation_id),
                "user_id": user_id,
                "scored": len(response.historico),
                "drafts": len(response.rascunhos),
            },
        )
        return response
