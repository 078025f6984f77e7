"""Shared handler behaviour for the flat library kinds.

Plugins, themes, packages and prompts have no parent.  Each handler picks a
``DocumentStore`` from the execution context and performs the same
validate-then-create-or-update sequence the hierarchical kinds use.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from loguru import logger

from maestro.core.errors import ResourceNotFoundError
from maestro.core.resource.base import BaseHandler, Resource

if TYPE_CHECKING:
    from maestro.core.context import ExecutionContext
    from maestro.core.store.base import DocumentStore


class LibraryHandler(BaseHandler):
    """Base for NvimPlugin, NvimTheme, NvimPackage and TerminalPrompt handlers."""

    def document_store(self, ctx: ExecutionContext) -> DocumentStore:
        """Return the store this kind persists through.

        Raises ``CapabilityUnavailableError`` when the context has none.
        """
        raise NotImplementedError

    async def apply(self, ctx: ExecutionContext, data: bytes | str) -> Resource:
        resource = self.parse(data)
        resource.validate()
        store = self.document_store(ctx)

        existing = await store.get(resource.name)
        if existing is None:
            stored = await store.create(resource.document)
            logger.info("Created {} '{}'", self.kind, resource.name)
        else:
            stored = await store.update(resource.document)
            logger.info("Updated {} '{}'", self.kind, resource.name)
        return self.resource_type(stored)

    async def get(self, ctx: ExecutionContext, name: str) -> Resource:
        document = await self.document_store(ctx).get(name)
        if document is None:
            raise ResourceNotFoundError(self.kind, name)
        return self.resource_type(document)

    async def list(self, ctx: ExecutionContext) -> list[Resource]:
        return [self.resource_type(document) for document in await self.document_store(ctx).list()]

    async def delete(self, ctx: ExecutionContext, name: str) -> None:
        if not await self.document_store(ctx).delete(name):
            raise ResourceNotFoundError(self.kind, name)
        logger.info("Deleted {} '{}'", self.kind, name)
