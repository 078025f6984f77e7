"""Row persistence helpers shared by all managers."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from maestro.core.db.tables import Base
from maestro.core.errors import StoreFailureError


@asynccontextmanager
async def store_operation(db: AsyncSession, operation: str) -> AsyncIterator[None]:
    """Translate driver errors into ``StoreFailureError``.

    The session is rolled back so it stays usable after the failure.
    *operation* reads as a verb phrase, e.g. ``"create app 'invoicer'"``.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        await db.rollback()
        raise StoreFailureError(operation, exc) from exc


async def save_row[RowT: Base](db: AsyncSession, row: RowT, operation: str) -> RowT:
    """Insert or flush changes to *row*, commit, and reload generated columns."""
    async with store_operation(db, operation):
        db.add(row)
        await db.commit()
        await db.refresh(row)
    return row


async def delete_row(db: AsyncSession, row: Base, operation: str) -> None:
    async with store_operation(db, operation):
        await db.delete(row)
        await db.commit()
