"""Create usuarios and redacoes tables for the Essay Scoring Service.

Scored essays and drafts share the redacoes table; drafts have nota_final 0.

Revision ID: 0001
Revises:
Create Date: 2025-10-19
"""

from __future__ import annotations

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create usuarios and redacoes tables and indexes."""
    op.create_table(
        "usuarios",
        sa.Column("usuario_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("nome", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.UniqueConstraint("email", name="uq_usuarios_email"),
    )

    op.create_table(
        "redacoes",
        sa.Column("redacao_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "usuario_id",
            sa.Integer(),
            sa.ForeignKey("usuarios.usuario_id"),
            nullable=False,
        ),
        sa.Column("tema", sa.String(length=255), nullable=False),
        sa.Column("texto_original", sa.Text(), nullable=False),
        sa.Column("nota_final", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("c1_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("c2_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("c3_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("c4_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("c5_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("feedback_detalhado", sa.Text(), nullable=False),
        sa.Column(
            "data_submissao",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    )

    # Dashboard queries filter by user and order by submission time
    op.create_index(
        "ix_redacoes_usuario_data",
        "redacoes",
        ["usuario_id", "data_submissao"],
        unique=False,
    )


def downgrade() -> None:
    """Drop redacoes and usuarios tables."""
    op.drop_index("ix_redacoes_usuario_data", table_name="redacoes")
    op.drop_table("redacoes")
    op.drop_table("usuarios")
