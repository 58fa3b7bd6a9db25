"""Connection Pool Manager — async engine lifecycle, startup retry, guaranteed-release query execution.

Invariants:
    - One ConnectionPool per process, constructed explicitly and stored on app.state
      (no module-level singleton)
    - initialize() is idempotent: a second call returns the live engine untouched
    - initialize() validates the pool by acquiring and releasing one connection;
      attempts are bounded (max_attempts) and delays grow by backoff_factor
    - execute_query() ALWAYS returns its connection to the pool, on every exit path
    - Availability failures (no engine, no connection) raise typed 503 errors;
      statement failures propagate unchanged
    - Pool-level async errors (invalidated/lost connections) are logged, never
      recovered here: pool_pre_ping + the SQLAlchemy pool handle reconnection

Design Decisions:
    - SQLAlchemy AsyncEngine as the pool: bounded QueuePool (pool_size, no overflow),
      pre-ping for stale connection detection
    - Bounded loop with explicit attempt counter over recursive rescheduling
    - engine_factory and sleep injectable: retry behaviour testable without waiting
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from sqlalchemy import event, text
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.sql import Executable

from lista_tareas.config import Settings
from lista_tareas.core.errors import (
    ConnectionUnavailableError,
    DatabaseConnectError,
    PoolNotInitializedError,
)
from lista_tareas.db.base import Base
import lista_tareas.models.task  # noqa: F401  (registers tareas on Base.metadata)

logger = logging.getLogger(__name__)

# Failures worth another startup attempt: driver/pool errors and socket errors
_RETRYABLE = (SQLAlchemyError, OSError)


@dataclass(frozen=True)
class QueryResult:
    """Outcome of one statement: row set for reads, summary for writes."""
    rows: list[dict[str, Any]] = field(default_factory=list)
    affected_rows: int = 0
    insert_id: int | None = None


class ConnectionPool:
    """Owns the process-wide async engine and its connection pool."""

    def __init__(
        self,
        url: str,
        pool_size: int = 10,
        max_attempts: int = 10,
        retry_delay: float = 5.0,
        backoff_factor: float = 1.0,
        max_retry_delay: float = 60.0,
        engine_factory: Callable[..., AsyncEngine] = create_async_engine,
        sleep: Callable[[float], Any] = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.url = url
        self.pool_size = pool_size
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.backoff_factor = backoff_factor
        self.max_retry_delay = max_retry_delay
        self._engine_factory = engine_factory
        self._sleep = sleep
        self._engine: AsyncEngine | None = None
        self._init_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ConnectionPool":
        return cls(
            settings.database_url_resolved(),
            pool_size=settings.db_pool_size,
            max_attempts=settings.db_connect_max_attempts,
            retry_delay=settings.db_connect_retry_delay,
            backoff_factor=settings.db_connect_backoff_factor,
            max_retry_delay=settings.db_connect_max_retry_delay,
        )

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        """The live engine. Raises PoolNotInitializedError before initialize()."""
        if self._engine is None:
            raise PoolNotInitializedError()
        return self._engine

    def retry_delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number `attempt` (1-based)."""
        delay = self.retry_delay * (self.backoff_factor ** (attempt - 1))
        return min(delay, self.max_retry_delay)

    async def initialize(self) -> AsyncEngine:
        """Create and validate the pool, retrying with backoff."""
        async with self._init_lock:
            if self._engine is not None:
                logger.info("Connection pool already initialized")
                return self._engine

            last_error: BaseException | None = None
            for attempt in range(1, self.max_attempts + 1):
                logger.info(
                    f"Initializing connection pool (attempt {attempt} of {self.max_attempts})",
                    extra={"attempt": attempt, "max_attempts": self.max_attempts},
                )
                engine: AsyncEngine | None = None
                try:
                    engine = self._create_engine()
                    connection = await engine.connect()
                    await connection.close()
                except _RETRYABLE as e:
                    last_error = e
                    if engine is not None:
                        await engine.dispose()
                    logger.error(
                        f"Database connection failed (attempt {attempt}): {e}",
                        extra={"attempt": attempt, "max_attempts": self.max_attempts},
                    )
                    if attempt < self.max_attempts:
                        delay = self.retry_delay_for(attempt)
                        logger.warning(
                            f"Retrying database connection in {delay}s",
                            extra={"attempt": attempt, "delay_seconds": delay},
                        )
                        await self._sleep(delay)
                    continue

                self._engine = engine
                logger.info(
                    "Connection pool initialized and connected",
                    extra={"attempt": attempt},
                )
                return engine

            logger.error(
                f"Giving up on database after {self.max_attempts} attempts",
                extra={"max_attempts": self.max_attempts},
            )
            raise DatabaseConnectError(
                self.max_attempts, str(last_error) if last_error else None,
            ) from last_error

    async def shutdown(self) -> None:
        """Close the pool. No-op when it was never initialized."""
        if self._engine is None:
            return
        logger.info("Closing connection pool")
        engine, self._engine = self._engine, None
        await engine.dispose()
        logger.info("Connection pool closed")

    async def execute_query(
        self,
        statement: str | Executable,
        params: Mapping[str, Any] | None = None,
    ) -> QueryResult:
        """Acquire a connection, run one statement, release the connection."""
        if self._engine is None:
            raise PoolNotInitializedError(
                "Pool de DB no inicializado. No se puede ejecutar la consulta.",
            )
        if isinstance(statement, str):
            statement = text(statement)

        try:
            connection = await self._engine.connect()
        except _RETRYABLE as e:
            logger.error(f"Could not acquire a pooled connection: {e}")
            raise ConnectionUnavailableError(str(e)) from e

        try:
            result = await connection.execute(statement, params)
            query_result = _to_query_result(result)
            await connection.commit()
            return query_result
        except Exception as e:
            logger.error(f"Query failed: {e}")
            raise
        finally:
            await connection.close()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            await self.execute_query("SELECT 1")
            return True
        except (PoolNotInitializedError, ConnectionUnavailableError, *_RETRYABLE) as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def create_schema(self) -> None:
        """Create missing tables (development and tests; production uses alembic)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    def _create_engine(self) -> AsyncEngine:
        engine = self._engine_factory(
            self.url,
            pool_size=self.pool_size,
            max_overflow=0,
            pool_pre_ping=True,
        )
        _register_pool_listeners(engine)
        return engine


def _to_query_result(result) -> QueryResult:
    """Materialize a CursorResult before its connection goes back to the pool."""
    insert_id = None
    if result.is_insert:
        try:
            primary_key = result.inserted_primary_key
        except InvalidRequestError:
            # textual INSERT: no compiled primary key to report
            primary_key = None
        if primary_key:
            insert_id = primary_key[0]
        return QueryResult(affected_rows=max(result.rowcount, 0), insert_id=insert_id)

    if result.returns_rows:
        rows = [dict(row._mapping) for row in result]
        return QueryResult(rows=rows, affected_rows=len(rows))
    return QueryResult(affected_rows=max(result.rowcount, 0))


def _register_pool_listeners(engine: AsyncEngine) -> None:
    """Log pool-level errors; recovery stays with the pool."""

    @event.listens_for(engine.sync_engine.pool, "invalidate")
    def _on_invalidate(dbapi_connection, connection_record, exception):
        if exception is not None:
            logger.error(f"Pooled connection invalidated: {exception}")

    @event.listens_for(engine.sync_engine, "handle_error")
    def _on_driver_error(context):
        if context.is_disconnect:
            logger.error(f"Database connection lost: {context.original_exception}")
