"""Built-in handlers, one per kind."""

from __future__ import annotations

from typing import TYPE_CHECKING

from maestro.core.resource.handlers.app import AppHandler
from maestro.core.resource.handlers.domain import DomainHandler
from maestro.core.resource.handlers.ecosystem import EcosystemHandler
from maestro.core.resource.handlers.package import PackageHandler
from maestro.core.resource.handlers.plugin import PluginHandler
from maestro.core.resource.handlers.prompt import PromptHandler
from maestro.core.resource.handlers.theme import ThemeHandler
from maestro.core.resource.handlers.workspace import WorkspaceHandler

if TYPE_CHECKING:
    from maestro.core.resource.registry import HandlerRegistry

BUILTIN_HANDLERS = (
    EcosystemHandler,
    DomainHandler,
    AppHandler,
    WorkspaceHandler,
    PluginHandler,
    ThemeHandler,
    PackageHandler,
    PromptHandler,
)


def register_all(registry: HandlerRegistry) -> None:
    """Install one instance of every built-in handler."""
    for handler_cls in BUILTIN_HANDLERS:
        registry.register(handler_cls())


__all__ = [
    "BUILTIN_HANDLERS",
    "AppHandler",
    "DomainHandler",
    "EcosystemHandler",
    "PackageHandler",
    "PluginHandler",
    "PromptHandler",
    "ThemeHandler",
    "WorkspaceHandler",
    "register_all",
]
