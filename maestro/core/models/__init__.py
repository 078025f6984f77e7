"""Pydantic models for resource documents."""

from maestro.core.models.document import API_VERSION, Document, DocumentModel, ObjectMeta
from maestro.core.models.enums import Kind, PromptType, SelectionLevel, WorkspaceStatus
from maestro.core.models.hierarchy import (
    AppDocument,
    AppSpec,
    DomainDocument,
    EcosystemDocument,
    WorkspaceDocument,
    WorkspaceSpec,
)
from maestro.core.models.library import (
    PackageDocument,
    PluginDocument,
    PromptDocument,
    ThemeDocument,
)

__all__ = [
    "API_VERSION",
    "AppDocument",
    "AppSpec",
    "Document",
    "DocumentModel",
    "DomainDocument",
    "EcosystemDocument",
    "Kind",
    "ObjectMeta",
    "PackageDocument",
    "PluginDocument",
    "PromptDocument",
    "PromptType",
    "SelectionLevel",
    "ThemeDocument",
    "WorkspaceDocument",
    "WorkspaceSpec",
    "WorkspaceStatus",
]
