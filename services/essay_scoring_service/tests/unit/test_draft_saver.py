"""Unit tests for DraftSaver."""

from __future__ import annotations

import uuid
from typing import Any
from unittest.mock import AsyncMock

import pytest
from corretor_core.error_enums import ErrorCode
from corretor_core.observability_enums import OperationType
from corretor_core.status_enums import OperationStatus
from corretor_service_libs.error_handling import CorretorError

from services.essay_scoring_service.implementations.draft_saver_impl import (
    DRAFT_FEEDBACK,
    DRAFT_TOPIC,
    DraftSaver,
)
from services.essay_scoring_service.implementations.identity_provider_impl import (
    ConfiguredIdentityProvider,
)


@pytest.fixture
def draft_saver(mock_repository: AsyncMock, metrics: Any) -> DraftSaver:
    return DraftSaver(
        repository=mock_repository,
        identity_provider=ConfiguredIdentityProvider(default_user_id=1),
        metrics=metrics,
    )


async def test_draft_is_stored_verbatim_with_zero_scores_contract(
    draft_saver: DraftSaver, mock_repository: AsyncMock, metrics: Any
) -> None:
    text = "  Primeiro parágrafo, ainda incompleto.  "

    redacao_id = await draft_saver.save_draft(text, uuid.uuid4())

    assert redacao_id == 11
    kwargs = mock_repository.save_draft.await_args.kwargs
    assert kwargs["texto_original"] == text
    assert kwargs["tema"] == DRAFT_TOPIC
    assert kwargs["feedback"] == DRAFT_FEEDBACK
    assert metrics.operations == [(OperationType.SAVE_DRAFT, OperationStatus.SUCCESS)]


async def test_short_drafts_are_accepted(draft_saver: DraftSaver) -> None:
    assert await draft_saver.save_draft("a", uuid.uuid4()) == 11


@pytest.mark.parametrize("redacao", [None, "", " ", "\n\t  "])
async def test_blank_draft_raises_validation_error(
    draft_saver: DraftSaver, mock_repository: AsyncMock, redacao: str | None
) -> None:
    with pytest.raises(CorretorError) as exc_info:
        await draft_saver.save_draft(redacao, uuid.uuid4())

    assert exc_info.value.error_detail.error_code == ErrorCode.VALIDATION_ERROR
    assert exc_info.value.error_detail.message == "O rascunho está vazio."
    mock_repository.save_draft.assert_not_awaited()


async def test_storage_errors_propagate(
    draft_saver: DraftSaver, mock_repository: AsyncMock, metrics: Any
) -> None:
    mock_repository.save_draft.side_effect = RuntimeError("connection reset")

    with pytest.raises(RuntimeError):
        await draft_saver.save_draft("Texto", uuid.uuid4())

    assert metrics.operations == [(OperationType.SAVE_DRAFT, OperationStatus.ERROR)]
