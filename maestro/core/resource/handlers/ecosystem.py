"""Ecosystem: the top-level organizational unit."""

from __future__ import annotations

from typing import Any

from maestro.core.db.tables import Domain, Ecosystem
from maestro.core.models.document import ObjectMeta
from maestro.core.models.enums import Kind, SelectionLevel
from maestro.core.models.hierarchy import EcosystemDocument, EcosystemSpec
from maestro.core.resource.base import Resource
from maestro.core.resource.handlers.hierarchy import HierarchyHandler


class EcosystemResource(Resource):
    kind = Kind.ECOSYSTEM
    document_type = EcosystemDocument


class EcosystemHandler(HierarchyHandler):
    kind = Kind.ECOSYSTEM
    resource_type = EcosystemResource
    level = SelectionLevel.ECOSYSTEM
    model = Ecosystem
    child_model = Domain

    def row_values(self, document: EcosystemDocument) -> dict[str, Any]:
        return {
            "name": document.metadata.name,
            "description": document.metadata.description,
            "labels": document.metadata.labels,
            "theme": document.spec.theme,
        }

    def to_document(self, row: Ecosystem, ancestors: dict[str, str], children: list[str] | None) -> EcosystemDocument:
        return EcosystemDocument(
            metadata=ObjectMeta(name=row.name, description=row.description, labels=row.labels, **ancestors),
            spec=EcosystemSpec(theme=row.theme, domains=children),
        )
