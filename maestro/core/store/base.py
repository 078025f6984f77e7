"""Document store interface for the library kinds.

NvimPlugin and NvimTheme documents can live either in the relational store
or as YAML files under the config directory; NvimPackage and
TerminalPrompt use the relational store only.  Handlers talk to both
through this protocol.

A store instance is bound to one kind: it knows which document model to
hydrate and where that kind lives.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from maestro.core.models.document import Document


@runtime_checkable
class DocumentStore(Protocol):
    """Async protocol for named, flat resource documents."""

    async def get(self, name: str) -> Document | None:
        """Return the stored document, or ``None`` if there is none."""
        ...

    async def list(self) -> list[Document]:
        """Return every stored document, ordered by name."""
        ...

    async def create(self, document: Document) -> Document:
        """Store a new document.  Returns the stored form."""
        ...

    async def update(self, document: Document) -> Document:
        """Replace the stored document with the same name."""
        ...

    async def delete(self, name: str) -> bool:
        """Delete by name.  Returns ``False`` if nothing was stored."""
        ...
