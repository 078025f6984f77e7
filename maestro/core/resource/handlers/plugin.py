"""NvimPlugin: a lazy.nvim plugin definition."""

from __future__ import annotations

from typing import TYPE_CHECKING

from maestro.core.context import plugin_dir
from maestro.core.db.tables import NvimPlugin
from maestro.core.errors import CapabilityUnavailableError
from maestro.core.models.enums import Kind
from maestro.core.models.library import PluginDocument
from maestro.core.resource.base import Resource
from maestro.core.resource.handlers.library import LibraryHandler
from maestro.core.store.catalog import CatalogDocumentStore
from maestro.core.store.local import LocalDocumentStore

if TYPE_CHECKING:
    from maestro.core.context import ExecutionContext
    from maestro.core.store.base import DocumentStore


class PluginResource(Resource):
    kind = Kind.NVIM_PLUGIN
    document_type = PluginDocument

    def validate(self) -> None:
        super().validate()
        spec = self.document.spec
        if not spec.repo.strip():
            self.fail("spec.repo is required")
        for keymap in (*(spec.keys or ()), *(spec.keymaps or ())):
            if not keymap.key.strip():
                self.fail("every keymap needs a key")


class PluginHandler(LibraryHandler):
    kind = Kind.NVIM_PLUGIN
    resource_type = PluginResource

    def document_store(self, ctx: ExecutionContext) -> DocumentStore:
        if ctx.plugin_store is not None:
            return ctx.plugin_store
        if ctx.db is not None:
            return CatalogDocumentStore(ctx.db, NvimPlugin, PluginDocument)
        if ctx.config_dir is not None:
            return LocalDocumentStore(plugin_dir(ctx.config_dir), PluginDocument)
        raise CapabilityUnavailableError(self.kind, "a plugin store")
