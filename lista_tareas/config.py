"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All credentials come from environment variables or .env (defaults are dev-only)
    - get_settings() is cached (lru_cache) — single instance per process
    - DATABASE_URL, when set, wins over the DB_* parts

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box with docker-compose
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    db_driver: str = "postgresql+asyncpg"
    db_host: str = "localhost"
    db_user: str = "root"
    db_password: str = "root"
    db_name: str = "lista_tareas_db"
    db_port: int = 5432
    db_pool_size: int = 10
    database_url: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str | None) -> str | None:
        """Hosting platforms hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v or None

    # Startup connection retry
    db_connect_max_attempts: int = 10
    db_connect_retry_delay: float = 5.0
    db_connect_backoff_factor: float = 1.0
    db_connect_max_retry_delay: float = 60.0
    db_auto_create_schema: bool = False

    # API
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    cors_origins: list[str] = ["*"]
    static_dir: str = "public"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def database_url_resolved(self) -> str:
        """Connection URL: DATABASE_URL if set, else assembled from DB_* parts."""
        if self.database_url:
            return self.database_url
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
