"""API test fixtures — FastAPI app over a real pool on a temporary SQLite file.

Invariants:
    - Every test gets a fresh database file with the tareas table
    - app.state.pool set directly (ASGITransport does not run the lifespan)
    - raise_app_exceptions=False so the catch-all 500 handler's response is observed
"""

import pytest
from httpx import ASGITransport, AsyncClient

from lista_tareas.infrastructure.database import ConnectionPool
from lista_tareas.main import app


@pytest.fixture
async def client(pool):
    """Test client bound to the initialized test pool."""
    app.state.pool = pool
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
    app.state.pool = None


@pytest.fixture
async def unready_client(sqlite_url):
    """Test client whose pool was constructed but never initialized."""
    app.state.pool = ConnectionPool(sqlite_url)
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
    app.state.pool = None
