"""Rubric prompt and response schema for ENEM essay scoring."""

from __future__ import annotations

from hashlib import sha256
from typing import Any

MIN_ESSAY_LENGTH = 50

COMPETENCY_DESCRIPTIONS: tuple[tuple[str, str], ...] = (
    ("c1_score", "Domínio da norma padrão"),
    ("c2_score", "Compreensão da proposta"),
    ("c3_score", "Seleção e organização de informações"),
    ("c4_score", "Demonstração de conhecimento e coesão"),
    ("c5_score", "Elaboração de proposta de intervenção"),
)

SCORING_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "nota_final": {"type": "integer"},
        "c1_score": {"type": "integer"},
        "c2_score": {"type": "integer"},
        "c3_score": {"type": "integer"},
        "c4_score": {"type": "integer"},
        "c5_score": {"type": "integer"},
        "feedback_detalhado": {"type": "string"},
    },
    "required": [
        "nota_final",
        "c1_score",
        "c2_score",
        "c3_score",
        "c4_score",
        "c5_score",
        "feedback_detalhado",
    ],
}


def build_scoring_prompt(redacao: str) -> str:
    """Return the instruction sent to the model with the essay embedded."""
    competency_lines = "\n".join(
        f"{index}. {field} (nota da Competência {index - 1}: {description})"
        for index, (field, description) in enumerate(COMPETENCY_DESCRIPTIONS, start=2)
    )

    return (
        "Você é um corretor de redações expert no modelo ENEM, atribuindo notas de 0 a 200 "
        "para cada uma das 5 competências.\n"
        "Analise o texto a seguir e gere uma resposta estritamente no formato JSON.\n\n"
        "Texto da Redação:\n"
        f'"""{redacao}"""\n\n'
        "O JSON DEVE CONTER:\n"
        "1. nota_final (soma das 5 competências, 0 a 1000)\n"
        f"{competency_lines}\n"
        "7. feedback_detalhado (uma análise completa e construtiva, focando nos pontos "
        "fracos e fortes de cada competência, usando quebras de linha \\n)."
    )


def compute_prompt_sha256(prompt: str) -> str:
    """Hash the prompt for log correlation without logging essay text."""
    return sha256(prompt.encode("utf-8")).hexdigest()


def essay_length(redacao: str) -> int:
    """Length in UTF-16 code units, matching what browser clients measure."""
    return len(redacao.encode("utf-16-le")) // 2
