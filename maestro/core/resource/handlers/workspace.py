"""Workspace: a development environment for an app.

The container id and the materialized editor configuration (nvim structure
and plugin list) are written by the build/attach steps, not by documents.
Re-applying a workspace therefore keeps them: the container id is never
taken from input, and once the editor fields hold a value they are carried
forward over whatever the document says.
"""

from __future__ import annotations

from typing import Any

from maestro.core.db.tables import Workspace
from maestro.core.models.document import ObjectMeta
from maestro.core.models.enums import Kind, SelectionLevel
from maestro.core.models.hierarchy import WorkspaceDocument, WorkspaceImage, WorkspaceNvim, WorkspaceSpec
from maestro.core.resource.base import Resource
from maestro.core.resource.handlers.hierarchy import HierarchyHandler

PRESERVED_FIELDS = ("nvim_structure", "nvim_plugins")


class WorkspaceResource(Resource):
    kind = Kind.WORKSPACE
    document_type = WorkspaceDocument


class WorkspaceHandler(HierarchyHandler):
    kind = Kind.WORKSPACE
    resource_type = WorkspaceResource
    level = SelectionLevel.WORKSPACE
    model = Workspace

    def row_values(self, document: WorkspaceDocument) -> dict[str, Any]:
        spec = document.spec
        return {
            "name": document.metadata.name,
            "description": document.metadata.description,
            "labels": document.metadata.labels,
            "image_name": spec.image.name,
            "status": str(spec.status),
            "nvim_structure": spec.nvim.structure,
            "nvim_plugins": spec.nvim.plugins,
            "theme": spec.nvim.theme,
        }

    def carry_forward(self, existing: Workspace, values: dict[str, Any]) -> None:
        values["container_id"] = existing.container_id
        for field in PRESERVED_FIELDS:
            current = getattr(existing, field)
            if current is not None:
                values[field] = current

    def to_document(self, row: Workspace, ancestors: dict[str, str], children: list[str] | None) -> WorkspaceDocument:
        return WorkspaceDocument(
            metadata=ObjectMeta(name=row.name, description=row.description, labels=row.labels, **ancestors),
            spec=WorkspaceSpec(
                image=WorkspaceImage(name=row.image_name),
                status=row.status,
                nvim=WorkspaceNvim(structure=row.nvim_structure, theme=row.theme, plugins=row.nvim_plugins),
                container_id=row.container_id,
            ),
        )
