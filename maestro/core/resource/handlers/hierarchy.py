"""Shared handler behaviour for the organizational chain.

Apply walks a fixed sequence:

1. parse the document into the kind's resource type;
2. resolve the parent the document declares;
3. ``validate`` (before anything is written);
4. look the name up under that parent and either insert a new row or
   overwrite the existing one, keeping its id.

Get and Delete resolve the parent from the current selection instead.
List is scoped to the selected parent when there is one and spans every
parent otherwise.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from loguru import logger

from maestro.core.errors import ResourceNotFoundError
from maestro.core.managers import hierarchy
from maestro.core.managers.base import delete_row, save_row
from maestro.core.managers.hierarchy import PARENT_COLUMN, HierarchyRow
from maestro.core.models.document import Document
from maestro.core.models.enums import SelectionLevel
from maestro.core.resource.base import BaseHandler, Resource
from maestro.core.resource.scope import describe_scope, load_scope, resolve_declared_parent

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from maestro.core.context import ExecutionContext


class HierarchyHandler(BaseHandler):
    """Base for Ecosystem, Domain, App and Workspace handlers.

    Subclasses provide the row model and the two mapping hooks,
    ``row_values`` and ``to_document``.
    """

    level: ClassVar[SelectionLevel]
    model: ClassVar[type[HierarchyRow]]
    child_model: ClassVar[type[HierarchyRow] | None] = None

    # -- Mapping hooks ---------------------------------------------------------

    def row_values(self, document: Document) -> dict[str, Any]:
        """Column values taken from *document*; parent and id excluded."""
        raise NotImplementedError

    def to_document(self, row: Any, ancestors: dict[str, str], children: list[str] | None) -> Document:
        """Build the document for *row*; *ancestors* maps ``ecosystem``/``domain``/``app`` to names."""
        raise NotImplementedError

    def carry_forward(self, existing: Any, values: dict[str, Any]) -> None:
        """Adjust *values* before they overwrite *existing*.  No-op by default."""

    # -- Operations ------------------------------------------------------------

    async def apply(self, ctx: ExecutionContext, data: bytes | str) -> Resource:
        resource = self.parse(data)
        db = ctx.require_db(self.kind)

        parent = await resolve_declared_parent(db, self.kind, resource.document.metadata)
        resource.validate()

        parent_id = parent.id if parent is not None else None
        values = self.row_values(resource.document)
        existing = await hierarchy.get_by_name(db, self.model, resource.name, parent_id=parent_id)

        if existing is None:
            row = self.model(**values)
            if parent is not None:
                setattr(row, PARENT_COLUMN[self.model].key, parent.id)
            row = await save_row(db, row, f"create {self.level} '{resource.name}'")
            logger.info("Created {} '{}' (id={})", self.kind, row.name, row.id)
        else:
            self.carry_forward(existing, values)
            for key, value in values.items():
                setattr(existing, key, value)
            row = await save_row(db, existing, f"update {self.level} '{resource.name}'")
            logger.info("Updated {} '{}' (id={})", self.kind, row.name, row.id)

        return await self._to_resource(db, row)

    async def get(self, ctx: ExecutionContext, name: str) -> Resource:
        db = ctx.require_db(self.kind)
        row = await self._find_in_active_scope(db, name)
        return await self._to_resource(db, row)

    async def list(self, ctx: ExecutionContext) -> list[Resource]:
        db = ctx.require_db(self.kind)
        parent_id = None
        if self.level.parent is not None:
            scope = await load_scope(db)
            parent_id = scope.get(self.level.parent)
        rows = await hierarchy.list_rows(db, self.model, parent_id=parent_id)
        return [await self._to_resource(db, row) for row in rows]

    async def delete(self, ctx: ExecutionContext, name: str) -> None:
        db = ctx.require_db(self.kind)
        row = await self._find_in_active_scope(db, name)
        await delete_row(db, row, f"delete {self.level} '{name}'")
        logger.info("Deleted {} '{}' (id={})", self.kind, name, row.id)

    # -- Helpers ---------------------------------------------------------------

    async def _find_in_active_scope(self, db: AsyncSession, name: str) -> HierarchyRow:
        parent_level = self.level.parent
        parent_id = None
        if parent_level is not None:
            scope = await load_scope(db)
            parent_id = scope.require(parent_level)

        logger.debug("Lookup {} '{}' under {} #{}", self.kind, name, parent_level, parent_id)
        row = await hierarchy.get_by_name(db, self.model, name, parent_id=parent_id)
        if row is None:
            raise ResourceNotFoundError(self.kind, name, await describe_scope(db, parent_level, parent_id))
        return row

    async def _to_resource(self, db: AsyncSession, row: HierarchyRow) -> Resource:
        ancestors = await hierarchy.ancestor_names(db, row)
        children = None
        if self.child_model is not None:
            children = await hierarchy.child_names(db, self.child_model, row.id) or None
        return self.resource_type(self.to_document(row, ancestors, children), id=row.id)
