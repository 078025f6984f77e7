"""Async SQLAlchemy engine and session factory.

SQLite (``sqlite+aiosqlite://``) is the default backend for a local ``dvm``
install; PostgreSQL (``postgresql+psycopg://``) works with the same schema.
"""

from __future__ import annotations

from pathlib import Path

from sqlalchemy import event, insert, select
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from maestro.core.db.tables import Base, Context


def create_engine(database_url: str, **kwargs: object) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    Server databases get a small connection pool (a CLI invocation holds at
    most one connection):

    - **pool_size=1**, **max_overflow=2**
    - **pool_pre_ping=True**: survive server-side disconnects.

    SQLite keeps SQLAlchemy's own pool choice and gets ``PRAGMA foreign_keys``
    switched on for every connection, which the cascading deletes and the
    ``SET NULL`` selection references depend on.  The parent directory of a
    SQLite file is created if missing.

    All defaults can be overridden via *kwargs*.
    """
    url = make_url(database_url)
    defaults: dict[str, object] = {"echo": False}
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
    else:
        defaults.update(pool_size=1, max_overflow=2, pool_pre_ping=True)
    defaults.update(kwargs)
    engine = create_async_engine(url, **defaults)  # type: ignore[arg-type]

    if url.get_backend_name() == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to *engine*.

    ``expire_on_commit=False`` so that ORM instances remain usable after
    commit without triggering lazy loads.
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def init_schema(engine: AsyncEngine) -> None:
    """Create any missing tables and the empty selection row.

    Existing tables and an existing selection are left untouched.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        if await conn.scalar(select(Context.id).where(Context.id == 1)) is None:
            await conn.execute(insert(Context).values(id=1))


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
