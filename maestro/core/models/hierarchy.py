"""Documents for the organizational chain: Ecosystem > Domain > App > Workspace.

Each level names its parent in ``metadata`` (``ecosystem``, ``domain``,
``app``).  The ``domains`` / ``apps`` / ``workspaces`` lists in the specs are
output-only: they are filled in when a resource is read back and ignored on
apply.
"""

from __future__ import annotations

from pydantic import Field

from maestro.core.models.document import Document, DocumentModel
from maestro.core.models.enums import Kind, WorkspaceStatus

# -- Ecosystem / Domain -------------------------------------------------------


class EcosystemSpec(DocumentModel):
    theme: str | None = None
    domains: list[str] | None = None


class EcosystemDocument(Document):
    kind: str = Kind.ECOSYSTEM.value
    spec: EcosystemSpec = Field(default_factory=EcosystemSpec)


class DomainSpec(DocumentModel):
    apps: list[str] | None = None


class DomainDocument(Document):
    kind: str = Kind.DOMAIN.value
    spec: DomainSpec = Field(default_factory=DomainSpec)


# -- App -------------------------------------------------------------------------


class AppLanguage(DocumentModel):
    name: str
    version: str | None = None


class AppBuild(DocumentModel):
    dockerfile: str | None = None
    buildpack: str | None = None
    args: dict[str, str] | None = None
    target: str | None = None
    context: str | None = None


class AppSpec(DocumentModel):
    path: str | None = None
    language: AppLanguage | None = None
    build: AppBuild | None = None
    workspaces: list[str] | None = None


class AppDocument(Document):
    kind: str = Kind.APP.value
    spec: AppSpec = Field(default_factory=AppSpec)


# -- Workspace ---------------------------------------------------------------------


class WorkspaceImage(DocumentModel):
    name: str | None = None


class WorkspaceNvim(DocumentModel):
    """Editor configuration.

    ``structure`` and ``plugins`` are materialized by the build step; once a
    workspace has them they survive later applies.
    """

    structure: str | None = None
    theme: str | None = None
    plugins: list[str] | None = None


class WorkspaceSpec(DocumentModel):
    image: WorkspaceImage = Field(default_factory=WorkspaceImage)
    status: WorkspaceStatus = WorkspaceStatus.STOPPED
    nvim: WorkspaceNvim = Field(default_factory=WorkspaceNvim)
    container_id: str | None = Field(default=None, description="Runtime-managed; never read from input")


class WorkspaceDocument(Document):
    kind: str = Kind.WORKSPACE.value
    spec: WorkspaceSpec = Field(default_factory=WorkspaceSpec)
