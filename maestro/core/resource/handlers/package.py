"""NvimPackage: a named bundle of plugins, optionally extending another."""

from __future__ import annotations

from typing import TYPE_CHECKING

from maestro.core.db.tables import NvimPackage
from maestro.core.models.enums import Kind
from maestro.core.models.library import PackageDocument
from maestro.core.resource.base import Resource
from maestro.core.resource.handlers.library import LibraryHandler
from maestro.core.store.catalog import CatalogDocumentStore

if TYPE_CHECKING:
    from maestro.core.context import ExecutionContext
    from maestro.core.store.base import DocumentStore


class PackageResource(Resource):
    kind = Kind.NVIM_PACKAGE
    document_type = PackageDocument

    def validate(self) -> None:
        super().validate()
        spec = self.document.spec
        if spec.extends is not None and spec.extends == self.name:
            self.fail("a package cannot extend itself")
        if any(not plugin.strip() for plugin in spec.plugins):
            self.fail("spec.plugins entries must not be empty")


class PackageHandler(LibraryHandler):
    kind = Kind.NVIM_PACKAGE
    resource_type = PackageResource

    def document_store(self, ctx: ExecutionContext) -> DocumentStore:
        return CatalogDocumentStore(ctx.require_db(self.kind), NvimPackage, PackageDocument)
