"""Relational document store backed by the catalog tables.

Adapts a ``CatalogRow`` table to the DocumentStore protocol.  The full
``metadata`` block and ``spec`` are kept as JSON; name, description,
category and the enabled flag are also copied into their own columns so
they can be queried.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from maestro.core.db.tables import CatalogRow
from maestro.core.managers import catalog
from maestro.core.models.document import Document


class CatalogDocumentStore:
    """DocumentStore over one catalog table."""

    def __init__(self, db: AsyncSession, model: type[CatalogRow], document_type: type[Document]) -> None:
        self._db = db
        self._model = model
        self._document_type = document_type

    async def get(self, name: str) -> Document | None:
        row = await catalog.get_entry(self._db, self._model, name)
        return self._to_document(row) if row is not None else None

    async def list(self) -> list[Document]:
        return [self._to_document(row) for row in await catalog.list_entries(self._db, self._model)]

    async def create(self, document: Document) -> Document:
        row = await catalog.put_entry(self._db, self._model, document.metadata.name, _row_values(document))
        return self._to_document(row)

    async def update(self, document: Document) -> Document:
        return await self.create(document)

    async def delete(self, name: str) -> bool:
        return await catalog.delete_entry(self._db, self._model, name)

    def _to_document(self, row: CatalogRow) -> Document:
        metadata = dict(row.metadata_ or {})
        metadata["name"] = row.name
        return self._document_type.model_validate({"metadata": metadata, "spec": row.spec or {}})


def _row_values(document: Document) -> dict[str, Any]:
    wire = document.to_wire()
    spec = wire.get("spec", {})
    return {
        "description": document.metadata.description,
        "category": document.metadata.category,
        "labels": document.metadata.labels,
        "metadata_": wire.get("metadata", {}),
        "spec": spec,
        "enabled": bool(spec.get("enabled", True)),
    }
