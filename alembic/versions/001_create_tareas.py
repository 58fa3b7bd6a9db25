"""Initial schema — tareas.

Revision ID: 001_create_tareas
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_create_tareas"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "tareas",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("descripcion", sa.Text, nullable=False),
        sa.Column("completada", sa.SmallInteger, nullable=False, server_default=sa.text("0")),
        sa.Column("fecha_creacion", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )


def downgrade() -> None:
    op.drop_table("tareas")
