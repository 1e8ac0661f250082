"""Database Sessions — one AsyncSession per request, SQLAlchemy failures translated to CourtError.

Invariants:
    - A session that exits with any exception is rolled back before it is closed,
      so a half-finished remove() (votes gone, case still there) never commits
    - No SQLAlchemy exception leaves session(): translate_db_error maps it into
      the court taxonomy (integrity → ConflictError 409, anything else → DatabaseError 503)
    - Pool uses pool_pre_ping so stale connections are replaced before use

Design Decisions:
    - The manager wraps an AsyncEngine it is handed: init_db builds the pooled
      PostgreSQL engine from settings, tests hand in their in-memory SQLite engine
    - expire_on_commit=False: stores build CaseRecord snapshots after commit
    - Stores translate the integrity failures they anticipate (duplicate vote,
      vanished case) themselves; translate_db_error covers whatever escapes them
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine,
)

from court.core.errors import ConflictError, CourtError, DatabaseError

logger = logging.getLogger(__name__)


def translate_db_error(exc: SQLAlchemyError) -> CourtError:
    """Map a SQLAlchemy failure onto the court error taxonomy."""
    if isinstance(exc, IntegrityError):
        return ConflictError("The request conflicts with existing court records")
    if isinstance(exc, OperationalError):
        return DatabaseError("Database unavailable", "execute")
    if isinstance(exc, DBAPIError):
        return DatabaseError("Database driver error", "query")
    return DatabaseError("Database operation failed", "unknown")


class DatabaseSessionManager:
    """Hands out request-scoped sessions over a shared engine."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = async_sessionmaker(
            engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            level = logging.WARNING if isinstance(e, IntegrityError) else logging.ERROR
            logger.log(level, f"DB {type(e).__name__}: {e}")
            raise translate_db_error(e) from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """True when the database answers SELECT 1 (readiness probe)."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


# Assigned on startup by init_db
db_manager: DatabaseSessionManager | None = None


def init_db(
    database_url: str, pool_size: int = 20, max_overflow: int = 10,
) -> DatabaseSessionManager:
    global db_manager
    engine = create_async_engine(
        database_url,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,
        pool_recycle=3600,
    )
    db_manager = DatabaseSessionManager(engine)
    return db_manager


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if not db_manager:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session
