"""Task Schemas — Pydantic models for the /api/tareas boundary.

Invariants:
    - TaskCreate.descripcion: string, stripped, non-empty
    - TaskUpdate.completada: a JSON boolean only (1/"true" rejected)
    - Responses report completada as integer 0/1
"""

from pydantic import BaseModel, StrictBool, StrictStr, field_validator

from lista_tareas.core.task_rules import normalize_descripcion


class TaskCreate(BaseModel):
    """Task creation body."""
    descripcion: StrictStr

    @field_validator("descripcion")
    @classmethod
    def strip_descripcion(cls, v: str) -> str:
        return normalize_descripcion(v)


class TaskUpdate(BaseModel):
    """Task update body — only the completion flag is mutable."""
    completada: StrictBool


class TaskCreated(BaseModel):
    id: int
    descripcion: str
    completada: int = 0


class TaskResponse(BaseModel):
    id: int
    descripcion: str
    completada: int
    fecha_creacion: str | None = None


class MessageResponse(BaseModel):
    message: str
