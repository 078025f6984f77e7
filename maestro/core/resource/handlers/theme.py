"""NvimTheme: a colorscheme plugin plus palette overrides."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from maestro.core.context import theme_dir
from maestro.core.db.tables import NvimTheme
from maestro.core.errors import CapabilityUnavailableError
from maestro.core.models.enums import Kind
from maestro.core.models.library import ThemeDocument
from maestro.core.resource.base import Resource
from maestro.core.resource.handlers.library import LibraryHandler
from maestro.core.store.catalog import CatalogDocumentStore
from maestro.core.store.local import LocalDocumentStore

if TYPE_CHECKING:
    from maestro.core.context import ExecutionContext
    from maestro.core.store.base import DocumentStore

HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class ThemeResource(Resource):
    kind = Kind.NVIM_THEME
    document_type = ThemeDocument

    def validate(self) -> None:
        super().validate()
        spec = self.document.spec
        if not spec.plugin.repo.strip():
            self.fail("spec.plugin.repo is required")
        for key, value in (spec.colors or {}).items():
            if not HEX_COLOR.match(value):
                self.fail(f"color '{key}' must be #RGB or #RRGGBB, got '{value}'")


class ThemeHandler(LibraryHandler):
    kind = Kind.NVIM_THEME
    resource_type = ThemeResource

    def document_store(self, ctx: ExecutionContext) -> DocumentStore:
        if ctx.theme_store is not None:
            return ctx.theme_store
        if ctx.db is not None:
            return CatalogDocumentStore(ctx.db, NvimTheme, ThemeDocument)
        if ctx.config_dir is not None:
            return LocalDocumentStore(theme_dir(ctx.config_dir), ThemeDocument)
        raise CapabilityUnavailableError(self.kind, "a theme store")
