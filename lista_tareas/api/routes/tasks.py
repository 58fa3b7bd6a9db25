"""Task Routes — CRUD over /api/tareas.

Invariants:
    - Stateless: every request borrows one connection for one statement
    - Body and path validation happen in Pydantic/FastAPI before the handler runs;
      failures become 400 with a Spanish message (api/error_handlers.py)
    - Path ids must fit the INTEGER column; larger or smaller ints are a 400, not a
      storage error
    - Storage errors surface as TareasError subclasses: 404 not found, 503 unavailable,
      500 other — mapped by the global handler, never caught here
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from lista_tareas.api.dependencies import get_task_store
from lista_tareas.schemas.task import (
    MessageResponse, TaskCreate, TaskCreated, TaskResponse, TaskUpdate,
)
from lista_tareas.services.task_store import TaskStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/tareas", tags=["tareas"])

# Ids outside the INTEGER column range can never match a row
TaskId = Annotated[int, Path(ge=-(2**31), le=2**31 - 1)]


@router.get("", response_model=list[TaskResponse])
async def list_tasks(store: TaskStore = Depends(get_task_store)):
    """All tasks, most recent first."""
    logger.info("GET /api/tareas", extra={"method": "GET", "path": "/api/tareas"})
    return await store.list_tasks()


@router.post(
    "", response_model=TaskCreated, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskCreate, store: TaskStore = Depends(get_task_store),
):
    """Create a task; storage assigns id and creation time.

    The stored and echoed descripcion has surrounding whitespace stripped.
    """
    logger.info("POST /api/tareas", extra={"method": "POST", "path": "/api/tareas"})
    return await store.create_task(body.descripcion)


@router.put("/{task_id}", response_model=MessageResponse)
async def update_task(
    task_id: TaskId, body: TaskUpdate, store: TaskStore = Depends(get_task_store),
):
    logger.info(
        f"PUT /api/tareas/{task_id}",
        extra={"method": "PUT", "task_id": task_id},
    )
    await store.set_completed(task_id, body.completada)
    return MessageResponse(message="Tarea actualizada correctamente")


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: TaskId, store: TaskStore = Depends(get_task_store),
):
    logger.info(
        f"DELETE /api/tareas/{task_id}",
        extra={"method": "DELETE", "task_id": task_id},
    )
    await store.delete_task(task_id)
    return MessageResponse(message="Tarea eliminada correctamente")
