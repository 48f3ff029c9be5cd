"""SQLAlchemy models for the Essay Scoring Service."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, func
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(AsyncAttrs, DeclarativeBase):
    """Base class for all SQLAlchemy models for the Essay Scoring Service."""

    pass


class Usuario(Base):
    """Student owning essay records."""

    __tablename__ = "usuarios"

    usuario_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    nome: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class Redacao(Base):
    """Essay record, either scored or a draft.

    A draft is a row whose nota_final is 0; there is no separate flag.
    """

    __tablename__ = "redacoes"

    redacao_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    usuario_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("usuarios.usuario_id"),
        nullable=False,
    )
    tema: Mapped[str] = mapped_column(String(255), nullable=False)
    texto_original: Mapped[str] = mapped_column(Text, nullable=False)

    # Rubric scores: five competencies 0-200 and their nominal sum 0-1000
    nota_final: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    c1_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    c2_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    c3_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    c4_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    c5_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    feedback_detalhado: Mapped[str] = mapped_column(Text, nullable=False)

    data_submissao: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.current_timestamp(),
    )

    __table_args__ = (Index("ix_redacoes_usuario_data", "usuario_id", "data_submissao"),)
