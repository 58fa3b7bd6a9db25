"""Route Dependencies — resolve the storage client from application state.

Invariants:
    - The ConnectionPool lives on app.state.pool (set by the lifespan, or by tests)
    - A missing pool raises PoolNotInitializedError, so routes answer 503
      instead of crashing with AttributeError
"""

from fastapi import Depends, Request

from lista_tareas.core.errors import PoolNotInitializedError
from lista_tareas.infrastructure.database import ConnectionPool
from lista_tareas.services.task_store import TaskStore


def get_pool(request: Request) -> ConnectionPool:
    """FastAPI dependency for the process connection pool."""
    pool = getattr(request.app.state, "pool", None)
    if pool is None:
        raise PoolNotInitializedError(
            "Pool de DB no inicializado. No se puede ejecutar la consulta.",
        )
    return pool


def get_task_store(pool: ConnectionPool = Depends(get_pool)) -> TaskStore:
    """FastAPI dependency for the task storage client."""
    return TaskStore(pool)
