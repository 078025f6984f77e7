"""TerminalPrompt: a starship / powerlevel10k / oh-my-posh prompt definition."""

from __future__ import annotations

from typing import TYPE_CHECKING

from maestro.core.db.tables import TerminalPrompt
from maestro.core.models.enums import Kind, PromptType
from maestro.core.models.library import PromptDocument
from maestro.core.resource.base import Resource
from maestro.core.resource.handlers.library import LibraryHandler
from maestro.core.store.catalog import CatalogDocumentStore

if TYPE_CHECKING:
    from maestro.core.context import ExecutionContext
    from maestro.core.store.base import DocumentStore


class PromptResource(Resource):
    kind = Kind.TERMINAL_PROMPT
    document_type = PromptDocument

    def validate(self) -> None:
        super().validate()
        prompt_type = self.document.spec.type
        if not prompt_type:
            self.fail("spec.type is required")
        if prompt_type not in set(PromptType):
            allowed = ", ".join(PromptType)
            self.fail(f"spec.type must be one of {allowed}, got '{prompt_type}'")


class PromptHandler(LibraryHandler):
    kind = Kind.TERMINAL_PROMPT
    resource_type = PromptResource

    def document_store(self, ctx: ExecutionContext) -> DocumentStore:
        return CatalogDocumentStore(ctx.require_db(self.kind), TerminalPrompt, PromptDocument)
