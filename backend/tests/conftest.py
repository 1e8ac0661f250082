"""Root conftest — shared test configuration, principals and async DB fixtures.

Invariants:
    - Environment is pinned before any court module reads settings
    - Every DB test gets a fresh in-memory SQLite database

Design Decisions:
    - SQLite in-memory: fast, no external dependency
    - PRAGMA foreign_keys=ON on every connection so jury_votes.case_id behaves
      as on PostgreSQL (orphan votes rejected, ON DELETE CASCADE applied)
"""

import os

# Ensure tests never pick up a real secret or database
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")

import pytest  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession, create_async_engine, async_sessionmaker,
)

from court.core.domain_types import Principal, PrincipalId, Role  # noqa: E402
from court.db.base import Base  # noqa: E402
import court.models  # noqa: E402,F401


def make_principal(pid: str, role: Role, name: str | None = None) -> Principal:
    return Principal(id=PrincipalId(pid), role=role, name=name or pid.title())


@pytest.fixture
def plaintiff() -> Principal:
    return make_principal("u-plaintiff", Role.PLAINTIFF, "Gordon Ramsay")


@pytest.fixture
def defendant() -> Principal:
    return make_principal("u-defendant", Role.DEFENDANT, "Julia Child")


@pytest.fixture
def judge() -> Principal:
    return make_principal("u-judge", Role.JUDGE, "Judge Judy")


@pytest.fixture
def juror() -> Principal:
    return make_principal("u-juror-1", Role.JUROR, "Juror One")


@pytest.fixture
def second_juror() -> Principal:
    return make_principal("u-juror-2", Role.JUROR, "Juror Two")


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session
