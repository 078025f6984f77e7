"""Shared test fixtures: an in-memory SQLite store per test.

Each test function gets a fresh ``sqlite+aiosqlite`` in-memory database with
the schema created from ``Base.metadata`` and foreign keys enforced, an
``AsyncSession`` bound to it, and an ``ExecutionContext`` carrying that
session with ``tmp_path`` as its config directory.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import StaticPool

from maestro.core.context import ExecutionContext
from maestro.core.db.engine import create_engine, create_session_factory, init_schema
from maestro.core.settings import _get_settings_cached


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Point DVM_HOME at a temp dir and invalidate the settings cache."""
    monkeypatch.setenv("DVM_HOME", str(tmp_path / "home"))
    _get_settings_cached.cache_clear()


@pytest.fixture
async def db_engine() -> AsyncIterator[AsyncEngine]:
    """In-memory async engine; StaticPool keeps the single connection alive."""
    engine = create_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await init_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncIterator[AsyncSession]:
    session_factory = create_session_factory(db_engine)
    async with session_factory() as session:
        yield session


@pytest.fixture
def ctx(db_session: AsyncSession, tmp_path: Path) -> ExecutionContext:
    """Execution context with the relational store and a temp config dir."""
    return ExecutionContext(db=db_session, config_dir=tmp_path / "config")
