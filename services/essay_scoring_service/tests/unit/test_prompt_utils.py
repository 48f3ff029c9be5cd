"""Tests for the rubric prompt, response schema and mock scorer."""

from __future__ import annotations

import uuid

from services.essay_scoring_service.api_models import ScoringResultV1
from services.essay_scoring_service.implementations.mock_scoring_client_impl import (
    MockScoringClient,
)
from services.essay_scoring_service.prompt_utils import (
    SCORING_RESPONSE_SCHEMA,
    build_scoring_prompt,
    compute_prompt_sha256,
    essay_length,
)


def test_prompt_embeds_essay_between_triple_quotes() -> None:
    prompt = build_scoring_prompt("Minha redação sobre educação.")

    assert '"""Minha redação sobre educação."""' in prompt
    assert "modelo ENEM" in prompt
    assert "0 a 200" in prompt


def test_prompt_lists_every_output_field() -> None:
    prompt = build_scoring_prompt("texto")

    for field in SCORING_RESPONSE_SCHEMA["required"]:
        assert field in prompt
    assert "2. c1_score (nota da Competência 1: Domínio da norma padrão)" in prompt
    assert "6. c5_score (nota da Competência 5: Elaboração de proposta de intervenção)" in prompt


def test_response_schema_requires_all_seven_fields() -> None:
    assert SCORING_RESPONSE_SCHEMA["type"] == "object"
    assert set(SCORING_RESPONSE_SCHEMA["required"]) == set(ScoringResultV1.model_fields)
    assert SCORING_RESPONSE_SCHEMA["properties"]["feedback_detalhado"] == {"type": "string"}
    assert SCORING_RESPONSE_SCHEMA["properties"]["c3_score"] == {"type": "integer"}


def test_prompt_hash_is_stable_hex() -> None:
    digest = compute_prompt_sha256("prompt")

    assert digest == compute_prompt_sha256("prompt")
    assert len(digest) == 64
    assert digest != compute_prompt_sha256("outro prompt")


def test_essay_length_counts_utf16_code_units() -> None:
    assert essay_length("redação") == 7
    assert essay_length("\N{GRINNING FACE}") == 2
    assert essay_length("") == 0


async def test_mock_scoring_client_is_deterministic_and_schema_valid() -> None:
    client = MockScoringClient()
    prompt = build_scoring_prompt("Texto de teste " * 10)

    first = await client.score(prompt, SCORING_RESPONSE_SCHEMA, uuid.uuid4())
    second = await client.score(prompt, SCORING_RESPONSE_SCHEMA, uuid.uuid4())

    assert first == second
    result = ScoringResultV1.model_validate(first)
    competencies = [result.c1_score, result.c2_score, result.c3_score, result.c4_score, result.c5_score]
    assert all(score in (40, 80, 120, 160, 200) for score in competencies)
    assert result.nota_final == sum(competencies)
