"""Task Store — the four task operations, one statement each, over the query executor.

Invariants:
    - Every operation runs exactly one statement (atomic at the storage layer)
    - Availability errors (PoolNotInitializedError, ConnectionUnavailableError) pass through → 503
    - Any other SQLAlchemyError becomes DatabaseError (500) with the driver detail attached
    - update/delete with zero affected rows raise TaskNotFoundError (404)
    - completada returned as 0/1 in every result

Design Decisions:
    - Core statements on tareas_table instead of ORM sessions: each call borrows a
      connection for a single statement and gives it straight back
    - No transactions spanning calls, no optimistic concurrency: last write wins
"""

import logging
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from lista_tareas.core.errors import DatabaseError, TaskNotFoundError
from lista_tareas.core.task_rules import serialize_task
from lista_tareas.infrastructure.database import ConnectionPool
from lista_tareas.models.task import tareas_table

logger = logging.getLogger(__name__)


class TaskStore:
    """Storage client for tasks, bound to one ConnectionPool."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def list_tasks(self) -> list[dict[str, Any]]:
        """All tasks, most recent first."""
        statement = select(tareas_table).order_by(
            tareas_table.c.fecha_creacion.desc(), tareas_table.c.id.desc(),
        )
        try:
            result = await self._pool.execute_query(statement)
        except SQLAlchemyError as e:
            raise _storage_error(
                "Error interno del servidor al obtener tareas", "list", e,
            ) from e
        return [serialize_task(row) for row in result.rows]

    async def create_task(self, descripcion: str) -> dict[str, Any]:
        """Insert a task; storage assigns id and fecha_creacion."""
        statement = insert(tareas_table).values(descripcion=descripcion)
        try:
            result = await self._pool.execute_query(statement)
        except SQLAlchemyError as e:
            raise _storage_error(
                "Error interno del servidor al agregar tarea", "create", e,
            ) from e
        logger.info(
            f"Task created with id {result.insert_id}",
            extra={"task_id": result.insert_id},
        )
        return {"id": result.insert_id, "descripcion": descripcion, "completada": 0}

    async def set_completed(self, task_id: int, completada: bool) -> None:
        """Set the completion flag; 404 when no row has this id."""
        statement = (
            update(tareas_table)
            .where(tareas_table.c.id == task_id)
            .values(completada=1 if completada else 0)
        )
        try:
            result = await self._pool.execute_query(statement)
        except SQLAlchemyError as e:
            raise _storage_error("Error al actualizar tarea", "update", e) from e
        if result.affected_rows == 0:
            raise TaskNotFoundError(task_id)

    async def delete_task(self, task_id: int) -> None:
        """Remove a task; 404 when no row has this id."""
        statement = delete(tareas_table).where(tareas_table.c.id == task_id)
        try:
            result = await self._pool.execute_query(statement)
        except SQLAlchemyError as e:
            raise _storage_error("Error al eliminar tarea", "delete", e) from e
        if result.affected_rows == 0:
            raise TaskNotFoundError(task_id)


def _storage_error(message: str, operation: str, exc: SQLAlchemyError) -> DatabaseError:
    detail = str(getattr(exc, "orig", None) or exc)
    logger.error(
        f"{message}: {detail}",
        extra={"operation": operation, "error_code": "DATABASE_ERROR"},
    )
    return DatabaseError(message, operation, detail)
