"""Library catalog data access (plugins, themes, packages, prompts).

All four kinds share the ``CatalogRow`` column set, so one set of functions
serves every table.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from maestro.core.db.tables import CatalogRow
from maestro.core.managers.base import delete_row, save_row, store_operation


async def get_entry[RowT: CatalogRow](db: AsyncSession, model: type[RowT], name: str) -> RowT | None:
    async with store_operation(db, f"look up {model.__tablename__} '{name}'"):
        result = await db.execute(select(model).where(model.name == name))
        return result.scalar_one_or_none()


async def list_entries[RowT: CatalogRow](db: AsyncSession, model: type[RowT]) -> list[RowT]:
    async with store_operation(db, f"list {model.__tablename__}"):
        result = await db.execute(select(model).order_by(model.name))
        return list(result.scalars().all())


async def put_entry[RowT: CatalogRow](db: AsyncSession, model: type[RowT], name: str, values: dict[str, Any]) -> RowT:
    """Create the entry or overwrite every column of the existing one."""
    row = await get_entry(db, model, name)
    if row is None:
        row = model(name=name, **values)
        operation = f"create {model.__tablename__} '{name}'"
    else:
        for key, value in values.items():
            setattr(row, key, value)
        operation = f"update {model.__tablename__} '{name}'"
    return await save_row(db, row, operation)


async def delete_entry(db: AsyncSession, model: type[CatalogRow], name: str) -> bool:
    """Delete by name.  Returns ``False`` if nothing matched."""
    row = await get_entry(db, model, name)
    if row is None:
        return False
    await delete_row(db, row, f"delete {model.__tablename__} '{name}'")
    return True
