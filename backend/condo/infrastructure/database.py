"""Database Access — async engine, request sessions, and the atomic() write boundary.

Invariants:
    - atomic() commits exactly once on success and rolls back on any failure,
      so a rejected reservation or payment never leaves partial rows
    - SQLAlchemy exceptions leave this module only as DatabaseError (503);
      domain errors (CondoError) pass through atomic() unchanged after rollback
    - Request sessions roll back on error and are always closed

Design Decisions:
    - Services wrap each operation in atomic(); stores only flush
    - expire_on_commit=False: committed rows are returned to routes without
      a lazy reload (not possible under asyncio)
    - Pool sizing applies to server databases only; SQLite uses the driver's
      default pool
    - db_manager is a module singleton assigned by the FastAPI lifespan
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from condo.core.errors import DatabaseError

logger = logging.getLogger(__name__)


def to_database_error(e: SQLAlchemyError) -> DatabaseError:
    """Translate a driver/ORM failure into the public DatabaseError."""
    if isinstance(e, IntegrityError):
        message, operation = "Constraint violated by concurrent write", "commit"
    elif isinstance(e, OperationalError):
        # includes lock timeouts ("database is locked") and dropped connections
        message, operation = "Database unavailable or busy", "execute"
    elif isinstance(e, DBAPIError):
        message, operation = "Database driver error", "query"
    else:
        message, operation = "Database operation failed", "unknown"
    logger.error(
        f"{type(e).__name__} during {operation}: {e}",
        extra={"error_code": "DATABASE_ERROR"},
    )
    return DatabaseError(message, operation)


@asynccontextmanager
async def atomic(db: AsyncSession) -> AsyncGenerator[AsyncSession, None]:
    """One unit of work: commit on success, roll back on any exception."""
    try:
        yield db
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        raise to_database_error(e) from e
    except BaseException:
        await db.rollback()
        raise


class DatabaseSessionManager:
    """Owns the engine and hands out sessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session for one request; errors outside atomic() still roll back."""
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            raise to_database_error(e) from e
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when a trivial query round-trips (readiness probe)."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (DatabaseError, SQLAlchemyError, OSError) as e:
            logger.error(f"Database health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> None:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
