"""Domain: a bounded context inside an ecosystem."""

from __future__ import annotations

from typing import Any

from maestro.core.db.tables import App, Domain
from maestro.core.models.document import ObjectMeta
from maestro.core.models.enums import Kind, SelectionLevel
from maestro.core.models.hierarchy import DomainDocument, DomainSpec
from maestro.core.resource.base import Resource
from maestro.core.resource.handlers.hierarchy import HierarchyHandler


class DomainResource(Resource):
    kind = Kind.DOMAIN
    document_type = DomainDocument


class DomainHandler(HierarchyHandler):
    kind = Kind.DOMAIN
    resource_type = DomainResource
    level = SelectionLevel.DOMAIN
    model = Domain
    child_model = App

    def row_values(self, document: DomainDocument) -> dict[str, Any]:
        return {
            "name": document.metadata.name,
            "description": document.metadata.description,
            "labels": document.metadata.labels,
        }

    def to_document(self, row: Domain, ancestors: dict[str, str], children: list[str] | None) -> DomainDocument:
        return DomainDocument(
            metadata=ObjectMeta(name=row.name, description=row.description, labels=row.labels, **ancestors),
            spec=DomainSpec(apps=children),
        )
