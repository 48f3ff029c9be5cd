"""Mock scoring client for local development without Gemini calls."""

from __future__ import annotations

import hashlib
from typing import Any
from uuid import UUID

from corretor_service_libs.logging_utils import create_service_logger

from services.essay_scoring_service.protocols import ScoringClientProtocol

logger = create_service_logger("essay_scoring.mock_client")

# ENEM competency scores move in steps of 40
_SCORE_STEPS = (40, 80, 120, 160, 200)


class MockScoringClient(ScoringClientProtocol):
    """Deterministic scorer: the same prompt always yields the same scores."""

    async def score(
        self,
        prompt: str,
        response_schema: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]:
        digest = hashlib.sha256(prompt.encode("utf-8")).digest()
        competencies = [_SCORE_STEPS[digest[i] % len(_SCORE_STEPS)] for i in range(5)]

        logger.info(
            "Mock scoring client produced scores",
            extra={"correlation_id": str(correlation_id), "scores": competencies},
        )

        result: dict[str, Any] = {
            f"c{index}_score": score for index, score in enumerate(competencies, start=1)
        }
        result["nota_final"] = sum(competencies)
        result["feedback_detalhado"] = "\n".join(
            f"Competência {index}: {score} pontos (avaliação simulada)."
            for index, score in enumerate(competencies, start=1)
        )
        return result
