"""Google Gemini scoring client implementation."""

from __future__ import annotations

import json
from typing import Any, NoReturn
from uuid import UUID

import aiohttp
from corretor_service_libs.error_handling import (
    raise_authentication_error,
    raise_configuration_error,
    raise_external_service_error,
    raise_parsing_error,
)
from corretor_service_libs.logging_utils import create_service_logger

from services.essay_scoring_service.config import Settings
from services.essay_scoring_service.prompt_utils import compute_prompt_sha256
from services.essay_scoring_service.protocols import ScoringClientProtocol

logger = create_service_logger("essay_scoring.gemini_client")

SERVICE_NAME = "essay_scoring_service"


class GeminiScoringClient(ScoringClientProtocol):
    """Calls the Gemini generateContent endpoint with a JSON response schema.

    Failures are raised once; there is no retry.
    """

    def __init__(self, session: aiohttp.ClientSession, settings: Settings) -> None:
        """Initialize Gemini client.

        Args:
            session: HTTP client session owned by the DI container
            settings: Service settings
        """
        self.session = session
        self.settings = settings
        self.api_key = settings.GEMINI_API_KEY.get_secret_value()
        self.model = settings.GEMINI_MODEL
        self.api_base = settings.GEMINI_API_BASE.rstrip("/")

    async def score(
        self,
        prompt: str,
        response_schema: dict[str, Any],
        correlation_id: UUID,
    ) -> dict[str, Any]:
        if not self.api_key:
            raise_configuration_error(
                service=SERVICE_NAME,
                operation="gemini_score",
                config_key="GEMINI_API_KEY",
                message="Gemini API key not configured",
                correlation_id=correlation_id,
            )

        endpoint = f"{self.api_base}/models/{self.model}:generateContent"
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            },
        }

        logger.info(
            "Requesting essay score from Gemini",
            extra={
                "correlation_id": str(correlation_id),
                "model": self.model,
                "prompt_sha256": compute_prompt_sha256(prompt),
            },
        )

        try:
            async with self.session.post(
                endpoint,
                headers={"Content-Type": "application/json"},
                json=payload,
                params={"key": self.api_key},
            ) as response:
                if response.status != 200:
                    error_text = await response.text()
                    self._raise_for_status(response.status, error_text, correlation_id)

                response_data = await response.json()
        except aiohttp.ClientError as e:
            logger.error(
                f"Gemini request failed: {e}",
                extra={"correlation_id": str(correlation_id)},
            )
            raise_external_service_error(
                service=SERVICE_NAME,
                operation="gemini_score",
                external_service="gemini_api",
                message=f"Gemini API call failed: {e}",
                correlation_id=correlation_id,
            )

        text_content = self._extract_text(response_data, correlation_id)

        try:
            parsed = json.loads(text_content)
        except json.JSONDecodeError as e:
            logger.error(
                f"Failed to parse Gemini response: {e}",
                extra={"correlation_id": str(correlation_id), "response_text": text_content[:500]},
            )
            raise_parsing_error(
                service=SERVICE_NAME,
                operation="gemini_score",
                parse_target="json_response",
                message=f"Failed to parse Gemini response: {e}",
                correlation_id=correlation_id,
            )

        if not isinstance(parsed, dict):
            raise_parsing_error(
                service=SERVICE_NAME,
                operation="gemini_score",
                parse_target="json_response",
                message=f"Expected a JSON object from Gemini, got {type(parsed).__name__}",
                correlation_id=correlation_id,
            )

        return parsed

    def _raise_for_status(self, status: int, error_text: str, correlation_id: UUID) -> NoReturn:
        if status in {401, 403}:
            raise_authentication_error(
                service=SERVICE_NAME,
                operation="gemini_score",
                message=f"Gemini authentication failed: {error_text}",
                correlation_id=correlation_id,
                status_code=status,
            )
        raise_external_service_error(
            service=SERVICE_NAME,
            operation="gemini_score",
            external_service="gemini_api",
            message=f"Gemini API error: {status} - {error_text}",
            correlation_id=correlation_id,
            status_code=status,
        )

    def _extract_text(self, response_data: Any, correlation_id: UUID) -> str:
        """Return the text of the first candidate part."""
        candidates = response_data.get("candidates") if isinstance(response_data, dict) else None
        if candidates:
            parts = (candidates[0].get("content") or {}).get("parts") or []
            if parts and isinstance(parts[0].get("text"), str):
                return parts[0]["text"]

        raise_external_service_error(
            service=SERVICE_NAME,
            operation="gemini_score",
            external_service="gemini_api",
            message="No content in Gemini response",
            correlation_id=correlation_id,
        )
