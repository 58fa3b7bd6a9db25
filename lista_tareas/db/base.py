"""SQLAlchemy Declarative Base — shared base class for the ORM table definitions.

Invariants:
    - All models inherit from Base
    - Base.metadata is the single source of truth for table metadata (alembic, create_schema)
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all task-service ORM models."""
    pass
