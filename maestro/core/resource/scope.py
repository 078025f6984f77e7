"""Hierarchical scope resolution.

Two different rules decide which parent a child resource belongs to:

- **Apply** uses the parent named in the document (``metadata.ecosystem``,
  ``metadata.domain``, ``metadata.app``).  Ancestor names further up may be
  given to disambiguate; the current selection is never consulted.
- **Get / Delete** take only a name, so they use the current selection,
  loaded once into an ``ActiveScope`` and passed around explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from maestro.core.db.tables import Context, Ecosystem
from maestro.core.errors import NoActiveParentError, ParentNotFoundError, ResourceNotFoundError
from maestro.core.managers import hierarchy, selection
from maestro.core.managers.hierarchy import HierarchyRow
from maestro.core.models.document import ObjectMeta
from maestro.core.models.enums import Kind, SelectionLevel


@dataclass(frozen=True)
class ActiveScope:
    """Snapshot of the current-selection record."""

    ecosystem_id: int | None = None
    domain_id: int | None = None
    app_id: int | None = None
    workspace_id: int | None = None

    @classmethod
    def from_selection(cls, row: Context) -> ActiveScope:
        return cls(
            ecosystem_id=row.active_ecosystem_id,
            domain_id=row.active_domain_id,
            app_id=row.active_app_id,
            workspace_id=row.active_workspace_id,
        )

    def get(self, level: SelectionLevel) -> int | None:
        match level:
            case SelectionLevel.ECOSYSTEM:
                return self.ecosystem_id
            case SelectionLevel.DOMAIN:
                return self.domain_id
            case SelectionLevel.APP:
                return self.app_id
            case SelectionLevel.WORKSPACE:
                return self.workspace_id

    def require(self, level: SelectionLevel) -> int:
        """Return the active id at *level*.  Raises ``NoActiveParentError``."""
        value = self.get(level)
        if value is None:
            raise NoActiveParentError(level)
        return value


async def load_scope(db: AsyncSession) -> ActiveScope:
    return ActiveScope.from_selection(await selection.get_selection(db))


# -- Declared parents (Apply) ---------------------------------------------------


async def resolve_declared_parent(db: AsyncSession, kind: str, meta: ObjectMeta) -> HierarchyRow | None:
    """Resolve the parent row a document names.

    Returns ``None`` for ecosystems.  Raises ``ParentNotFoundError`` when the
    reference is missing, unknown, or matches more than one parent.
    """
    match kind:
        case Kind.ECOSYSTEM:
            return None
        case Kind.DOMAIN:
            name = _declared(kind, SelectionLevel.ECOSYSTEM, meta.ecosystem)
            ecosystem = await hierarchy.get_by_name(db, Ecosystem, name)
            if ecosystem is None:
                raise ParentNotFoundError(kind, SelectionLevel.ECOSYSTEM, name)
            return ecosystem
        case Kind.APP:
            name = _declared(kind, SelectionLevel.DOMAIN, meta.domain)
            domains = await hierarchy.find_domains(db, name, ecosystem=meta.ecosystem)
            return _single(kind, SelectionLevel.DOMAIN, name, domains, "add metadata.ecosystem")
        case Kind.WORKSPACE:
            name = _declared(kind, SelectionLevel.APP, meta.app)
            apps = await hierarchy.find_apps(db, name, domain=meta.domain, ecosystem=meta.ecosystem)
            return _single(kind, SelectionLevel.APP, name, apps, "add metadata.domain")
        case _:
            msg = f"{kind} is not part of the organizational hierarchy"
            raise ValueError(msg)


def _declared(kind: str, level: SelectionLevel, value: str | None) -> str:
    if not value:
        raise ParentNotFoundError(kind, level, None)
    return value


def _single[RowT: HierarchyRow](kind: str, level: SelectionLevel, name: str, rows: list[RowT], hint: str) -> RowT:
    if not rows:
        raise ParentNotFoundError(kind, level, name)
    if len(rows) > 1:
        raise ParentNotFoundError(kind, level, name, f"matches {len(rows)} {level}s; {hint} to pick one")
    return rows[0]


# -- Selection by name ("dvm use") ------------------------------------------------


async def resolve_for_selection(
    db: AsyncSession, level: SelectionLevel, name: str, scope: ActiveScope
) -> HierarchyRow:
    """Find the row ``dvm use <level> <name>`` refers to.

    The name is looked up under the active parent when one is selected, and
    across all parents otherwise (an ambiguous name is rejected).
    """
    kind = LEVEL_KIND[level]
    parent_level = level.parent
    parent_id = scope.get(parent_level) if parent_level is not None else None

    if parent_level is None:
        row = await hierarchy.get_by_name(db, Ecosystem, name)
        rows = [row] if row is not None else []
    elif parent_id is not None:
        row = await hierarchy.get_by_name(db, selection.LEVEL_MODEL[level], name, parent_id=parent_id)
        rows = [row] if row is not None else []
    else:
        match level:
            case SelectionLevel.DOMAIN:
                rows = await hierarchy.find_domains(db, name)
            case SelectionLevel.APP:
                rows = await hierarchy.find_apps(db, name)
            case _:
                rows = await hierarchy.find_workspaces(db, name)

    if not rows:
        raise ResourceNotFoundError(kind, name, await describe_scope(db, parent_level, parent_id))
    if len(rows) > 1:
        raise NoActiveParentError(parent_level or level)
    return rows[0]


async def describe_scope(db: AsyncSession, level: SelectionLevel | None, row_id: int | None) -> str | None:
    """Human-readable ``"<level> '<name>'"`` for error messages."""
    if level is None or row_id is None:
        return None
    row = await hierarchy.get_by_id(db, selection.LEVEL_MODEL[level], row_id)
    return f"{level} '{row.name}'" if row is not None else None


LEVEL_KIND: dict[SelectionLevel, str] = {
    SelectionLevel.ECOSYSTEM: Kind.ECOSYSTEM,
    SelectionLevel.DOMAIN: Kind.DOMAIN,
    SelectionLevel.APP: Kind.APP,
    SelectionLevel.WORKSPACE: Kind.WORKSPACE,
}
