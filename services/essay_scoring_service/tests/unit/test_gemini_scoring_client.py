"""Unit tests for GeminiScoringClient HTTP behaviour."""

from __future__ import annotations

import json
import re
import uuid
from typing import Any, AsyncIterator

import aiohttp
import pytest
from aioresponses import aioresponses
from corretor_core.error_enums import ErrorCode
from corretor_service_libs.error_handling import CorretorError
from pydantic import SecretStr

from services.essay_scoring_service.config import Settings
from services.essay_scoring_service.implementations.gemini_scoring_client_impl import (
    GeminiScoringClient,
)
from services.essay_scoring_service.prompt_utils import SCORING_RESPONSE_SCHEMA

GEMINI_URL = re.compile(
    r"^https://generativelanguage\.googleapis\.com/v1beta/models/"
    r"gemini-2\.5-flash:generateContent.*$"
)


def _gemini_body(text: str) -> dict[str, Any]:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


@pytest.fixture
def gemini_settings() -> Settings:
    return Settings(
        GEMINI_API_KEY=SecretStr("test-key"),
        GEMINI_MODEL="gemini-2.5-flash",
        GEMINI_API_BASE="https://generativelanguage.googleapis.com/v1beta/",
    )


@pytest.fixture
async def session() -> AsyncIterator[aiohttp.ClientSession]:
    async with aiohttp.ClientSession() as session:
        yield session


@pytest.fixture
def client(session: aiohttp.ClientSession, gemini_settings: Settings) -> GeminiScoringClient:
    return GeminiScoringClient(session=session, settings=gemini_settings)


class TestGeminiScoringClient:
    async def test_successful_call_returns_decoded_object(
        self, client: GeminiScoringClient, scoring_payload: dict[str, Any]
    ) -> None:
        with aioresponses() as mocked:
            mocked.post(GEMINI_URL, status=200, payload=_gemini_body(json.dumps(scoring_payload)))

            result = await client.score("prompt", SCORING_RESPONSE_SCHEMA, uuid.uuid4())

        assert result == scoring_payload

    async def test_request_carries_schema_and_api_key(
        self, client: GeminiScoringClient, scoring_payload: dict[str, Any]
    ) -> None:
        with aioresponses() as mocked:
            mocked.post(GEMINI_URL, status=200, payload=_gemini_body(json.dumps(scoring_payload)))

            await client.score("Corrija esta redação", SCORING_RESPONSE_SCHEMA, uuid.uuid4())

            (method, url), calls = next(iter(mocked.requests.items()))

        assert method == "POST"
        assert url.query["key"] == "test-key"
        payload = calls[0].kwargs["json"]
        assert payload["contents"][0]["parts"][0]["text"] == "Corrija esta redação"
        assert payload["generationConfig"] == {
            "responseMimeType": "application/json",
            "responseSchema": SCORING_RESPONSE_SCHEMA,
        }

    async def test_server_error_raises_external_service_error(
        self, client: GeminiScoringClient
    ) -> None:
        with aioresponses() as mocked:
            mocked.post(GEMINI_URL, status=500, body="internal error")

            with pytest.raises(CorretorError) as exc_info:
                await client.score("prompt", SCORING_RESPONSE_SCHEMA, uuid.uuid4())

        detail = exc_info.value.error_detail
        assert detail.error_code == ErrorCode.EXTERNAL_SERVICE_ERROR
        assert detail.details["status_code"] == 500
        assert "internal error" in detail.message

    @pytest.mark.parametrize("status", [401, 403])
    async def test_rejected_key_raises_authentication_error(
        self, client: GeminiScoringClient, status: int
    ) -> None:
        with aioresponses() as mocked:
            mocked.post(GEMINI_URL, status=status, body="API key not valid")

            with pytest.raises(CorretorError) as exc_info:
                await client.score("prompt", SCORING_RESPONSE_SCHEMA, uuid.uuid4())

        assert exc_info.value.error_detail.error_code == ErrorCode.AUTHENTICATION_ERROR

    async def test_transport_failure_raises_external_service_error(
        self, client: GeminiScoringClient
    ) -> None:
        with aioresponses() as mocked:
            mocked.post(GEMINI_URL, exception=aiohttp.ClientConnectionError("connection refused"))

            with pytest.raises(CorretorError) as exc_info:
                await client.score("prompt", SCORING_RESPONSE_SCHEMA, uuid.uuid4())

        assert exc_info.value.error_detail.error_code == ErrorCode.EXTERNAL_SERVICE_ERROR
        assert "connection refused" in exc_info.value.error_detail.message

    @pytest.mark.parametrize(
        "body",
        [
            {"candidates": []},
            {"candidates": [{"content": {"parts": []}}]},
            {"promptFeedback": {"blockReason": "SAFETY"}},
        ],
    )
    async def test_empty_candidates_raise_external_service_error(
        self, client: GeminiScoringClient, body: dict[str, Any]
    ) -> None:
        with aioresponses() as mocked:
            mocked.post(GEMINI_URL, status=200, payload=body)

            with pytest.raises(CorretorError) as exc_info:
                await client.score("prompt", SCORING_RESPONSE_SCHEMA, uuid.uuid4())

        assert exc_info.value.error_detail.message == "No content in Gemini response"

    @pytest.mark.parametrize("text", ["not json at all", "[1, 2, 3]", '"texto"'])
    async def test_non_object_output_raises_parsing_error(
        self, client: GeminiScoringClient, text: str
    ) -> None:
        with aioresponses() as mocked:
            mocked.post(GEMINI_URL, status=200, payload=_gemini_body(text))

            with pytest.raises(CorretorError) as exc_info:
                await client.score("prompt", SCORING_RESPONSE_SCHEMA, uuid.uuid4())

        assert exc_info.value.error_detail.error_code == ErrorCode.PARSING_ERROR

    async def test_missing_api_key_fails_without_request(
        self, session: aiohttp.ClientSession
    ) -> None:
        client = GeminiScoringClient(
            session=session, settings=Settings(GEMINI_API_KEY=SecretStr(""))
        )

        with aioresponses() as mocked:
            with pytest.raises(CorretorError) as exc_info:
                await client.score("prompt", SCORING_RESPONSE_SCHEMA, uuid.uuid4())

            assert not mocked.requests

        assert exc_info.value.error_detail.error_code == ErrorCode.CONFIGURATION_ERROR
