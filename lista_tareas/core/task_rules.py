"""Task Rules — pure boundary rules for task fields. No IO.

Invariants:
    - completada always resolves to exactly 0 or 1
    - descripcion is non-empty after stripping surrounding whitespace
    - serialize_task output is JSON-ready (datetime → ISO 8601)
"""

from datetime import datetime
from typing import Any, Mapping

DESCRIPCION_REQUIRED = "La descripción es requerida"
COMPLETADA_NOT_BOOLEAN = 'El estado "completada" debe ser un booleano'
INVALID_TASK_ID = "ID de tarea inválido o faltante"

_TRUE_STRINGS = frozenset({"1", "true", "t", "yes", "y"})


def coerce_completada(value: Any) -> int:
    """Map any storage/driver representation of the flag to 0 or 1."""
    if isinstance(value, str):
        return 1 if value.strip().lower() in _TRUE_STRINGS else 0
    if isinstance(value, (bytes, bytearray)):
        # MySQL BIT(1) comes back as b"\x01"
        return 1 if any(value) else 0
    return 1 if value else 0


def normalize_descripcion(value: Any) -> str:
    """Return the stripped description or raise ValueError."""
    if not isinstance(value, str):
        raise ValueError(DESCRIPCION_REQUIRED)
    value = value.strip()
    if not value:
        raise ValueError(DESCRIPCION_REQUIRED)
    return value


def serialize_task(row: Mapping[str, Any]) -> dict[str, Any]:
    """Shape a storage row into the public task object."""
    fecha = row.get("fecha_creacion")
    return {
        "id": int(row["id"]),
        "descripcion": row["descripcion"],
        "completada": coerce_completada(row.get("completada")),
        "fecha_creacion": fecha.isoformat() if isinstance(fecha, datetime) else fecha,
    }
