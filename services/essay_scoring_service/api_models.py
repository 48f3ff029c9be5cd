"""API request and response models for the Essay Scoring Service.

Field names follow the public JSON contract consumed by the dashboard
frontend, hence the Portuguese keys.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator


class EssayCorrectionRequestV1(BaseModel):
    """Body of POST /api/corrigir-redacao."""

    model_config = ConfigDict(extra="ignore")

    redacao: Optional[StrictStr] = Field(default=None, description="Essay text")
    tema: Optional[StrictStr] = Field(default=None, description="Essay topic")

    @field_validator("tema", mode="before")
    @classmethod
    def coerce_topic(cls, value: Any) -> Any:
        """Accept scalar topics such as numbers by storing their text form."""
        if value is None or isinstance(value, str):
            return value
        return str(value)


class DraftSaveRequestV1(BaseModel):
    """Body of POST /api/salvar-rascunho."""

    model_config = ConfigDict(extra="ignore")

    redacao: Optional[StrictStr] = Field(default=None, description="Draft text")


class ScoringResultV1(BaseModel):
    """Structured rubric score returned by the generative model.

    Persisted and returned verbatim. The expected relation
    nota_final == c1 + ... + c5 and the 0-200 / 0-1000 ranges are requested
    from the model but not enforced here.
    """

    model_config = ConfigDict(extra="ignore")

    nota_final: StrictInt
    c1_score: StrictInt
    c2_score: StrictInt
    c3_score: StrictInt
    c4_score: StrictInt
    c5_score: StrictInt
    feedback_detalhado: StrictStr


class DraftSavedResponseV1(BaseModel):
    success: bool = True
    message: str


class DashboardSummaryV1(BaseModel):
    """Aggregates over scored essays; averages rounded to integers."""

    redacoesCorrigidas: int
    notaMedia: int
    mediaC1: int
    mediaC2: int
    mediaC3: int
    mediaC4: int
    mediaC5: int


class HistoryEntryV1(BaseModel):
    id: int
    tema: str
    nota: int
    data: str


class DraftEntryV1(BaseModel):
    id: int
    texto: str
    data: str


class DashboardResponseV1(BaseModel):
    sumario: DashboardSummaryV1
    historico: list[HistoryEntryV1]
    rascunhos: list[DraftEntryV1]


class EssayRecordV1(BaseModel):
    """Full stored essay as returned by GET /api/redacao/<id>."""

    redacao_id: int
    tema: str
    texto_original: str
    nota_final: int
    c1_score: int
    c2_score: int
    c3_score: int
    c4_score: int
    c5_score: int
    feedback_detalhado: str
