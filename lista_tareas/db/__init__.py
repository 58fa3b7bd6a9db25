"""Database Metadata — declarative base shared by models and migrations.

Invariants:
    - Single metadata object (Base.metadata) for create_schema and alembic
"""
