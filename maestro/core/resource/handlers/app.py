"""App: a codebase inside a domain."""

from __future__ import annotations

from typing import Any

from maestro.core.db.tables import App, Workspace
from maestro.core.models.document import ObjectMeta
from maestro.core.models.enums import Kind, SelectionLevel
from maestro.core.models.hierarchy import AppBuild, AppDocument, AppLanguage, AppSpec
from maestro.core.resource.base import Resource
from maestro.core.resource.handlers.hierarchy import HierarchyHandler


class AppResource(Resource):
    kind = Kind.APP
    document_type = AppDocument

    def validate(self) -> None:
        super().validate()
        language = self.document.spec.language
        if language is not None and not language.name.strip():
            self.fail("spec.language.name must not be empty")


class AppHandler(HierarchyHandler):
    kind = Kind.APP
    resource_type = AppResource
    level = SelectionLevel.APP
    model = App
    child_model = Workspace

    def row_values(self, document: AppDocument) -> dict[str, Any]:
        spec = document.spec
        return {
            "name": document.metadata.name,
            "description": document.metadata.description,
            "labels": document.metadata.labels,
            "path": spec.path,
            "language": spec.language.model_dump(exclude_none=True) if spec.language else None,
            "build": spec.build.model_dump(exclude_none=True) if spec.build else None,
        }

    def to_document(self, row: App, ancestors: dict[str, str], children: list[str] | None) -> AppDocument:
        return AppDocument(
            metadata=ObjectMeta(name=row.name, description=row.description, labels=row.labels, **ancestors),
            spec=AppSpec(
                path=row.path,
                language=AppLanguage.model_validate(row.language) if row.language else None,
                build=AppBuild.model_validate(row.build) if row.build else None,
                workspaces=children,
            ),
        )
