"""Database Session Manager — async engine with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on SQLAlchemy exceptions (no partial commits leak)
    - SQLAlchemy failures surface as StorageUnavailableError (core/errors.py); details only in logs
    - Domain errors raised inside a session (ConflictError, ResourceNotFoundError, ...) pass through
    - `fold` is the SQL case-folding function search uses; on SQLite it is a `casefold`
      function registered on every connection, so SQL search folds exactly like str.casefold

Design Decisions:
    - Singleton db_manager initialized on startup: FastAPI lifespan manages lifecycle
    - expire_on_commit=False: committed rows stay readable after the session closes
    - Pool sizing only for server databases: SQLite engines pick their own pool class
    - SQLite's built-in lower() folds ASCII only; search goes through the registered
      casefold instead
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import Text, event, func, text
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)

from sales_report.core.errors import StorageUnavailableError
from sales_report.db.base import Base
from sales_report import models  # noqa: F401 — populates Base.metadata

logger = logging.getLogger(__name__)


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


def _register_casefold(dbapi_connection, connection_record) -> None:
    dbapi_connection.create_function(
        "casefold", 1, _casefold, deterministic=True,
    )


def sql_casefold(column):
    """casefold(column), answered by _casefold on SQLite connections."""
    return func.casefold(column, type_=Text)


class DatabaseSessionManager:
    """Manages async database sessions with rollback, schema creation and health checks."""

    def __init__(
        self, database_url: str, pool_size: int = 5, max_overflow: int = 10,
    ):
        is_sqlite = database_url.startswith("sqlite")
        engine_kwargs: dict = {"pool_pre_ping": True}
        if not is_sqlite:
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        if is_sqlite:
            event.listen(self.engine.sync_engine, "connect", _register_casefold)
            self.fold = sql_casefold
        else:
            self.fold = func.lower
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise StorageUnavailableError("commit")
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}")
            raise StorageUnavailableError("execute")
        except DBAPIError as e:
            await session.rollback()
            logger.error(f"DB driver error: {e}")
            raise StorageUnavailableError("query")
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise StorageUnavailableError("unknown")
        finally:
            await session.close()

    async def create_schema(self) -> None:
        """Create missing tables (desktop startup without alembic)."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            logger.error(f"Schema creation failed: {e}")
            raise StorageUnavailableError("migrate")

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Singleton (initialized on startup)
db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager
