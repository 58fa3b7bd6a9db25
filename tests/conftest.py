"""Root conftest — shared test configuration."""

import os

# Tests never reach a real database server
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("STATIC_DIR", "tests/__no_static__")

import pytest  # noqa: E402

from lista_tareas.infrastructure.database import ConnectionPool  # noqa: E402


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'tareas.db'}"


@pytest.fixture
async def pool(sqlite_url):
    """Initialized pool over a fresh SQLite file with the tareas table."""
    pool = ConnectionPool(sqlite_url, pool_size=5, max_attempts=1, retry_delay=0)
    await pool.initialize()
    await pool.create_schema()
    yield pool
    await pool.shutdown()

