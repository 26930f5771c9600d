"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Enum-typed choices (storage backend, category policy) are validated on load

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults target the desktop build: a local SQLite file, schema created on startup
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sales_report.core.domain_types import CategoryReferencePolicy, StorageBackend


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Storage
    storage_backend: StorageBackend = StorageBackend.SQL
    database_url: str = "sqlite+aiosqlite:///sales_report.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_sqlite_url(cls, v: str) -> str:
        """Plain sqlite:// URLs need the async aiosqlite driver."""
        if isinstance(v, str) and v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 10
    auto_create_schema: bool = True

    # Records
    # CUSTOMER_CATEGORY_CHECK: "permissive" stores any positive category_id; "strict"
    # rejects ids with no Category at write time. The strict lookup runs before the
    # insert/update and is not atomic with it: a Category deleted in between still
    # leaves a dangling id, which reads back as category=None.
    customer_category_check: CategoryReferencePolicy = CategoryReferencePolicy.PERMISSIVE

    # API
    cors_origins: list[str] = ["http://localhost:1420"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
