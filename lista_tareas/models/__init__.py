"""ORM Models — SQLAlchemy table definitions.

Invariants:
    - All models inherit from Base (db/base.py)
    - Models imported here so Base.metadata is complete for alembic and create_schema
"""

from lista_tareas.models.task import Task  # noqa: F401
