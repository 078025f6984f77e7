"""Documents for the editor/shell library: plugins, themes, packages, prompts.

These kinds are flat and globally named.  Their ``spec`` is stored as-is,
so the models mostly describe shape and leave semantic checks to each
resource's ``validate``.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field

from maestro.core.models.document import Document, DocumentModel
from maestro.core.models.enums import Kind

# A field that accepts either a single string or a list of strings.
StrOrList = str | list[str]


# -- NvimPlugin ------------------------------------------------------------------


class PluginKeymap(DocumentModel):
    key: str
    mode: StrOrList | None = None
    action: str | None = None
    desc: str | None = None


class PluginDependency(DocumentModel):
    repo: str
    build: str | None = None
    version: str | None = None
    branch: str | None = None


class PluginSpec(DocumentModel):
    repo: str = ""
    branch: str | None = None
    version: str | None = None
    priority: int | None = None
    lazy: bool | None = None
    enabled: bool = True
    event: StrOrList | None = None
    ft: StrOrList | None = None
    cmd: StrOrList | None = None
    keys: list[PluginKeymap] | None = None
    dependencies: list[str | PluginDependency] | None = None
    build: str | None = None
    config: str | None = None
    init: str | None = None
    opts: dict[str, Any] | None = None
    keymaps: list[PluginKeymap] | None = None


class PluginDocument(Document):
    kind: str = Kind.NVIM_PLUGIN.value
    spec: PluginSpec = Field(default_factory=PluginSpec)


# -- NvimTheme -------------------------------------------------------------------


class ThemePlugin(DocumentModel):
    repo: str = ""
    branch: str | None = None
    tag: str | None = None


class ThemeSpec(DocumentModel):
    plugin: ThemePlugin = Field(default_factory=ThemePlugin)
    style: str | None = None
    transparent: bool | None = None
    colors: dict[str, str] | None = None
    options: dict[str, Any] | None = None


class ThemeDocument(Document):
    kind: str = Kind.NVIM_THEME.value
    spec: ThemeSpec = Field(default_factory=ThemeSpec)


# -- NvimPackage -----------------------------------------------------------------


class PackageSpec(DocumentModel):
    extends: str | None = None
    plugins: list[str] = Field(default_factory=list)
    enabled: bool = True


class PackageDocument(Document):
    kind: str = Kind.NVIM_PACKAGE.value
    spec: PackageSpec = Field(default_factory=PackageSpec)


# -- TerminalPrompt --------------------------------------------------------------


class PromptCharacter(DocumentModel):
    success_symbol: str | None = None
    error_symbol: str | None = None
    vicmd_symbol: str | None = None


class PromptSpec(DocumentModel):
    type: str = ""
    add_newline: bool | None = None
    palette: str | None = None
    palette_ref: str | None = None
    format: str | None = None
    modules: dict[str, dict[str, Any]] | None = None
    character: PromptCharacter | None = None
    colors: dict[str, str] | None = None
    raw_config: str | None = None
    enabled: bool = True


class PromptDocument(Document):
    kind: str = Kind.TERMINAL_PROMPT.value
    spec: PromptSpec = Field(default_factory=PromptSpec)
