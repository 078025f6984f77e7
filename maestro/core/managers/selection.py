"""Current-selection ("context") record.

A single row (``id = 1``) records the active ecosystem, domain, app and
workspace.  Selecting a level also points every ancestor level at the
selected row's own parents and clears every descendant level, so the record
never describes a chain that does not exist.

There is no locking: two ``dvm`` processes selecting at the same time end
with whichever commit lands last.
"""

from __future__ import annotations

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from maestro.core.db.tables import App, Context, Domain, Ecosystem, Workspace
from maestro.core.managers.base import save_row, store_operation
from maestro.core.managers.hierarchy import HierarchyRow, get_by_id
from maestro.core.models.enums import SelectionLevel

SELECTION_COLUMN: dict[SelectionLevel, str] = {
    SelectionLevel.ECOSYSTEM: "active_ecosystem_id",
    SelectionLevel.DOMAIN: "active_domain_id",
    SelectionLevel.APP: "active_app_id",
    SelectionLevel.WORKSPACE: "active_workspace_id",
}

LEVEL_MODEL: dict[SelectionLevel, type[HierarchyRow]] = {
    SelectionLevel.ECOSYSTEM: Ecosystem,
    SelectionLevel.DOMAIN: Domain,
    SelectionLevel.APP: App,
    SelectionLevel.WORKSPACE: Workspace,
}


async def get_selection(db: AsyncSession) -> Context:
    """Return the selection row.

    ``init_schema`` seeds the row.  If it is missing anyway, an empty,
    unsaved row is returned; only ``set_active`` and ``clear_active`` write.
    The row is always reloaded from the database: foreign keys null its
    columns when a selected resource is deleted.
    """
    async with store_operation(db, "load the current selection"):
        row = await db.get(Context, 1, populate_existing=True)
    return row if row is not None else Context(id=1)


async def set_active(db: AsyncSession, level: SelectionLevel, row_id: int) -> Context:
    """Make *row_id* the active *level*, aligning ancestors and clearing descendants."""
    selection = await get_selection(db)

    chain = await _ancestry(db, level, row_id)
    for chain_level, chain_id in chain.items():
        setattr(selection, SELECTION_COLUMN[chain_level], chain_id)
    for below in level.descendants:
        setattr(selection, SELECTION_COLUMN[below], None)

    logger.debug("Selection: set {} -> #{}", level, row_id)
    return await save_row(db, selection, f"select {level}")


async def clear_active(db: AsyncSession, level: SelectionLevel) -> Context:
    """Unset *level* and every level below it."""
    selection = await get_selection(db)
    for cleared in (level, *level.descendants):
        setattr(selection, SELECTION_COLUMN[cleared], None)
    logger.debug("Selection: cleared {} and below", level)
    return await save_row(db, selection, f"clear the active {level}")


async def _ancestry(db: AsyncSession, level: SelectionLevel, row_id: int) -> dict[SelectionLevel, int]:
    """Map *level* and each of its ancestors to the ids along the row's chain."""
    chain = {level: row_id}
    row = await get_by_id(db, LEVEL_MODEL[level], row_id)
    current = level
    while row is not None and current.parent is not None:
        match row:
            case Workspace():
                parent_id = row.app_id
            case App():
                parent_id = row.domain_id
            case Domain():
                parent_id = row.ecosystem_id
            case _:
                break
        current = current.parent
        chain[current] = parent_id
        row = await get_by_id(db, LEVEL_MODEL[current], parent_id)
    return chain
