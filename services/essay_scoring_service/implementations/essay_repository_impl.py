"""Database-backed essay repository implementation for the Essay Scoring Service."""

from __future__ import annotations

from contextlib import asynccontextmanager
from decimal import Decimal
from typing import Any, AsyncGenerator
from uuid import UUID, uuid4

from corretor_service_libs.error_handling import (
    CorretorError,
    raise_database_error,
    raise_resource_not_found,
)
from corretor_service_libs.logging_utils import create_service_logger
from sqlalchemy import func, select, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from services.essay_scoring_service.api_models import EssayRecordV1, ScoringResultV1
from services.essay_scoring_service.models_db import Redacao, Usuario
from services.essay_scoring_service.protocols import (
    DraftRow,
    EssayRepositoryProtocol,
    ScoredEssayRow,
    ScoreSummary,
)

logger = create_service_logger("essay_scoring.repository.db")

SERVICE_NAME = "essay_scoring_service"


def _to_decimal(value: Any) -> Decimal:
    """Normalize driver-specific AVG results (Decimal, float, int or None)."""
    if value is None:
        return Decimal(0)
    return Decimal(str(value))


class EssayRepository(EssayRepositoryProtocol):
    """Repository implementation for persisted essays."""

    def __init__(self, engine: AsyncEngine) -> None:
        """Initialize the repository with a database engine."""
        self._engine = engine
        self._sessionmaker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Initialized EssayRepository with SQL-backed storage")

    @asynccontextmanager
    async def _get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a database session with proper transaction handling."""
        async with self._sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def _insert_essay(self, essay: Redacao, operation: str, correlation_id: UUID | None) -> int:
        log_extra = {"correlation_id": str(correlation_id) if correlation_id else None}
        try:
            async with self._get_session() as session:
                session.add(essay)
                await session.flush()
                redacao_id = essay.redacao_id
        except SQLAlchemyError as exc:
            logger.error(
                f"Failed to insert essay ({operation}): {exc}",
                extra=log_extra,
                exc_info=True,
            )
            raise_database_error(
                service=SERVICE_NAME,
                operation=operation,
                message=f"Failed to store essay: {exc}",
                correlation_id=correlation_id or uuid4(),
            )

        logger.info(
            f"Stored essay with ID: {redacao_id}",
            extra={**log_extra, "nota_final": essay.nota_final},
        )
        return redacao_id

    async def save_scored_essay(
        self,
        user_id: int,
        tema: str,
        texto_original: str,
        result: ScoringResultV1,
        correlation_id: UUID | None = None,
    ) -> int:
        essay = Redacao(
            usuario_id=user_id,
            tema=tema,
            texto_original=texto_original,
            nota_final=result.nota_final,
            c1_score=result.c1_score,
            c2_score=result.c2_score,
            c3_score=result.c3_score,
            c4_score=result.c4_score,
            c5_score=result.c5_score,
            feedback_detalhado=result.feedback_detalhado,
        )
        return await self._insert_essay(essay, "save_scored_essay", correlation_id)

    async def save_draft(
        self,
        user_id: int,
        tema: str,
        texto_original: str,
        feedback: str,
        correlation_id: UUID | None = None,
    ) -> int:
        essay = Redacao(
            usuario_id=user_id,
            tema=tema,
            texto_original=texto_original,
            nota_final=0,
            c1_score=0,
            c2_score=0,
            c3_score=0,
            c4_score=0,
            c5_score=0,
            feedback_detalhado=feedback,
        )
        return await self._insert_essay(essay, "save_draft", correlation_id)

    async def get_score_summary(self, user_id: int) -> ScoreSummary:
        stmt = select(
            func.count().label("total_scored"),
            func.avg(Redacao.nota_final).label("avg_final"),
            func.avg(Redacao.c1_score).label("avg_c1"),
            func.avg(Redacao.c2_score).label("avg_c2"),
            func.avg(Redacao.c3_score).label("avg_c3"),
            func.avg(Redacao.c4_score).label("avg_c4"),
            func.avg(Redacao.c5_score).label("avg_c5"),
        ).where(Redacao.usuario_id == user_id, Redacao.nota_final > 0)

        async with self._get_session() as session:
            row = (await session.execute(stmt)).one()

        return ScoreSummary(
            total_scored=int(row.total_scored or 0),
            avg_final=_to_decimal(row.avg_final),
            avg_c1=_to_decimal(row.avg_c1),
            avg_c2=_to_decimal(row.avg_c2),
            avg_c3=_to_decimal(row.avg_c3),
            avg_c4=_to_decimal(row.avg_c4),
            avg_c5=_to_decimal(row.avg_c5),
        )

    async def list_scored_essays(self, user_id: int) -> list[ScoredEssayRow]:
        stmt = (
            select(
                Redacao.redacao_id,
                Redacao.tema,
                Redacao.nota_final,
                Redacao.data_submissao,
            )
            .where(Redacao.usuario_id == user_id, Redacao.nota_final > 0)
            .order_by(Redacao.data_submissao.desc(), Redacao.redacao_id.desc())
        )

        async with self._get_session() as session:
            rows = (await session.execute(stmt)).all()

        return [
            ScoredEssayRow(
                redacao_id=row.redacao_id,
                tema=row.tema,
                nota_final=row.nota_final,
                data_submissao=row.data_submissao,
            )
            for row in rows
        ]

    async def list_drafts(self, user_id: int, preview_length: int) -> list[DraftRow]:
        stmt = (
            select(
                Redacao.redacao_id,
                func.substr(Redacao.texto_original, 1, preview_length).label("texto_preview"),
                Redacao.data_submissao,
            )
            .where(Redacao.usuario_id == user_id, Redacao.nota_final == 0)
            .order_by(Redacao.data_submissao.desc(), Redacao.redacao_id.desc())
        )

        async with self._get_session() as session:
            rows = (await session.execute(stmt)).all()

        return [
            DraftRow(
                redacao_id=row.redacao_id,
                texto_preview=row.texto_preview,
                data_submissao=row.data_submissao,
            )
            for row in rows
        ]

    async def get_essay(self, redacao_id: int, correlation_id: UUID | None = None) -> EssayRecordV1:
        """Retrieve one essay by identifier.

        Raises RESOURCE_NOT_FOUND if the essay does not exist.
        """
        log_extra = {"correlation_id": str(correlation_id) if correlation_id else None}
        try:
            async with self._get_session() as session:
                stmt = select(Redacao).where(Redacao.redacao_id == redacao_id)
                stored = (await session.execute(stmt)).scalar_one_or_none()

                if stored is None:
                    logger.warning(f"Essay not found for ID: {redacao_id}", extra=log_extra)
                    raise_resource_not_found(
                        service=SERVICE_NAME,
                        operation="get_essay",
                        resource_type="redacao",
                        resource_id=str(redacao_id),
                        correlation_id=correlation_id or uuid4(),
                    )

                return EssayRecordV1(
                    redacao_id=stored.redacao_id,
                    tema=stored.tema,
                    texto_original=stored.texto_original,
                    nota_final=stored.nota_final,
                    c1_score=stored.c1_score,
                    c2_score=stored.c2_score,
                    c3_score=stored.c3_score,
                    c4_score=stored.c4_score,
                    c5_score=stored.c5_score,
                    feedback_detalhado=stored.feedback_detalhado,
                )
        except CorretorError:
            # Propagate domain errors (including RESOURCE_NOT_FOUND) unchanged
            raise
        except SQLAlchemyError as exc:
            logger.error(
                f"Unexpected error loading essay {redacao_id}: {exc}",
                extra=log_extra,
                exc_info=True,
            )
            raise_database_error(
                service=SERVICE_NAME,
                operation="get_essay",
                message=f"Failed to load essay: {exc}",
                correlation_id=correlation_id or uuid4(),
                redacao_id=redacao_id,
            )

    async def ensure_user(self, user_id: int, nome: str, email: str) -> None:
        async with self._get_session() as session:
            existing = await session.get(Usuario, user_id)
            if existing is not None:
                logger.debug(f"User {user_id} already present")
                return

        try:
            async with self._get_session() as session:
                session.add(Usuario(usuario_id=user_id, nome=nome, email=email))
        except IntegrityError:
            # Another worker seeded the same row between our check and insert
            logger.info(f"User {user_id} was seeded concurrently")
            return

        logger.info(f"Seeded user {user_id}")

    async def check_connectivity(self) -> None:
        async with self._engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
