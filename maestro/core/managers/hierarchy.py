"""Ecosystem / Domain / App / Workspace data access.

Names are unique within the parent only, so single-row lookups always take
the parent id.  ``find_*`` helpers search by name across parents, optionally
narrowed by ancestor names, and are used to resolve the parent a document
declares.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from maestro.core.db.tables import App, Domain, Ecosystem, Workspace
from maestro.core.managers.base import store_operation

HierarchyRow = Ecosystem | Domain | App | Workspace

# Foreign key column linking each level to its parent.
PARENT_COLUMN = {
    Domain: Domain.ecosystem_id,
    App: App.domain_id,
    Workspace: Workspace.app_id,
}


# -- Single-row lookups -------------------------------------------------------


async def get_by_id[RowT: HierarchyRow](db: AsyncSession, model: type[RowT], row_id: int) -> RowT | None:
    async with store_operation(db, f"load {model.__tablename__} #{row_id}"):
        return await db.get(model, row_id)


async def get_by_name[RowT: HierarchyRow](
    db: AsyncSession,
    model: type[RowT],
    name: str,
    *,
    parent_id: int | None = None,
) -> RowT | None:
    """Get a row by name within its parent.

    *parent_id* is required for every level below ecosystem.
    """
    stmt = select(model).where(model.name == name)
    if model is not Ecosystem:
        if parent_id is None:
            msg = f"{model.__name__} lookups need a parent id"
            raise ValueError(msg)
        stmt = stmt.where(PARENT_COLUMN[model] == parent_id)
    async with store_operation(db, f"look up {model.__tablename__} '{name}'"):
        result = await db.execute(stmt)
        return result.scalar_one_or_none()


# -- Listing ------------------------------------------------------------------


async def list_rows[RowT: HierarchyRow](
    db: AsyncSession,
    model: type[RowT],
    *,
    parent_id: int | None = None,
) -> list[RowT]:
    """List rows ordered by name, scoped to *parent_id* when given."""
    stmt = select(model)
    if parent_id is not None:
        stmt = stmt.where(PARENT_COLUMN[model] == parent_id)
    stmt = stmt.order_by(model.name, model.id)
    async with store_operation(db, f"list {model.__tablename__}"):
        result = await db.execute(stmt)
        return list(result.scalars().all())


async def child_names(db: AsyncSession, model: type[HierarchyRow], parent_id: int) -> list[str]:
    return [row.name for row in await list_rows(db, model, parent_id=parent_id)]


# -- Resolution by name -----------------------------------------------------------


async def find_domains(db: AsyncSession, name: str, *, ecosystem: str | None = None) -> list[Domain]:
    stmt = select(Domain).where(Domain.name == name)
    if ecosystem is not None:
        stmt = stmt.join(Ecosystem, Domain.ecosystem_id == Ecosystem.id).where(Ecosystem.name == ecosystem)
    async with store_operation(db, f"resolve domain '{name}'"):
        result = await db.execute(stmt.order_by(Domain.id))
        return list(result.scalars().all())


async def find_apps(
    db: AsyncSession,
    name: str,
    *,
    domain: str | None = None,
    ecosystem: str | None = None,
) -> list[App]:
    stmt = select(App).where(App.name == name)
    if domain is not None or ecosystem is not None:
        stmt = stmt.join(Domain, App.domain_id == Domain.id)
        if domain is not None:
            stmt = stmt.where(Domain.name == domain)
        if ecosystem is not None:
            stmt = stmt.join(Ecosystem, Domain.ecosystem_id == Ecosystem.id).where(Ecosystem.name == ecosystem)
    async with store_operation(db, f"resolve app '{name}'"):
        result = await db.execute(stmt.order_by(App.id))
        return list(result.scalars().all())


async def find_workspaces(
    db: AsyncSession,
    name: str,
    *,
    app: str | None = None,
    domain: str | None = None,
) -> list[Workspace]:
    stmt = select(Workspace).where(Workspace.name == name)
    if app is not None or domain is not None:
        stmt = stmt.join(App, Workspace.app_id == App.id)
        if app is not None:
            stmt = stmt.where(App.name == app)
        if domain is not None:
            stmt = stmt.join(Domain, App.domain_id == Domain.id).where(Domain.name == domain)
    async with store_operation(db, f"resolve workspace '{name}'"):
        result = await db.execute(stmt.order_by(Workspace.id))
        return list(result.scalars().all())


async def ancestor_names(db: AsyncSession, row: HierarchyRow) -> dict[str, str]:
    """Names of every ancestor of *row*, keyed by level (``"ecosystem"``, ``"domain"``, ``"app"``).

    These are exactly the metadata fields Apply reads to place a document, so
    a written-back document always resolves to the same parent.
    """
    names: dict[str, str] = {}
    current: HierarchyRow | None = row
    while current is not None:
        match current:
            case Workspace():
                level, current = "app", await get_by_id(db, App, current.app_id)
            case App():
                level, current = "domain", await get_by_id(db, Domain, current.domain_id)
            case Domain():
                level, current = "ecosystem", await get_by_id(db, Ecosystem, current.ecosystem_id)
            case _:
                break
        if current is not None:
            names[level] = current.name
    return names
