"""Task ORM — the single `tareas` table.

Invariants:
    - id is an auto-increment integer primary key assigned by storage
    - descripcion is non-nullable text; emptiness is checked at the API boundary
    - completada is 0/1 with server default 0
    - fecha_creacion is set by storage at insert time

Design Decisions:
    - SmallInteger over Boolean for completada: the public contract is 0/1,
      identical on PostgreSQL, MySQL and SQLite
    - Queries go through the Core table (tareas_table) so the executor works on
      plain connections, not ORM sessions
"""

from datetime import datetime

from sqlalchemy import Integer, SmallInteger, Text, DateTime, func, text
from sqlalchemy.orm import Mapped, mapped_column

from lista_tareas.db.base import Base


class Task(Base):
    """A to-do item."""
    __tablename__ = "tareas"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    descripcion: Mapped[str] = mapped_column(Text, nullable=False)
    completada: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, default=0, server_default=text("0"),
    )
    fecha_creacion: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(),
    )


tareas_table = Task.__table__
