"""Kind -> Handler registry.

Lookups read an immutable snapshot and never block; registrations are
serialized by a lock and publish a fresh snapshot (copy-on-write).  The
process-wide registry is reached only through ``get_registry``, which
installs the built-in handlers exactly once.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Mapping
from types import MappingProxyType

from loguru import logger

from maestro.core.errors import DuplicateHandlerError, UnknownKindError
from maestro.core.resource.base import Handler

# Short and plural spellings accepted on the command line.
KIND_ALIASES: dict[str, str] = {
    "eco": "Ecosystem",
    "ecosystems": "Ecosystem",
    "dom": "Domain",
    "domains": "Domain",
    "apps": "App",
    "ws": "Workspace",
    "workspaces": "Workspace",
    "plugin": "NvimPlugin",
    "plugins": "NvimPlugin",
    "theme": "NvimTheme",
    "themes": "NvimTheme",
    "pkg": "NvimPackage",
    "package": "NvimPackage",
    "packages": "NvimPackage",
    "prompt": "TerminalPrompt",
    "prompts": "TerminalPrompt",
}


class HandlerRegistry:
    """Thread-safe map from kind tag to handler."""

    def __init__(self) -> None:
        self._handlers: Mapping[str, Handler] = MappingProxyType({})
        self._lock = threading.RLock()
        self._initialized = False

    # -- Mutation --------------------------------------------------------------

    def register(self, handler: Handler) -> None:
        """Register *handler* under its kind.  Raises ``DuplicateHandlerError``."""
        with self._lock:
            if handler.kind in self._handlers:
                raise DuplicateHandlerError(handler.kind)
            updated = dict(self._handlers)
            updated[handler.kind] = handler
            self._handlers = MappingProxyType(updated)
        logger.debug("Registry: register handler for kind {}", handler.kind)

    def initialize(self, installer: Callable[[HandlerRegistry], None]) -> bool:
        """Run *installer* against this registry once.

        Returns ``False`` without calling *installer* if the registry was
        already initialized.
        """
        with self._lock:
            if self._initialized:
                return False
            installer(self)
            self._initialized = True
        return True

    # -- Query -----------------------------------------------------------------

    def lookup(self, kind: str) -> Handler:
        """Return the handler for *kind*.  Raises ``UnknownKindError``."""
        handlers = self._handlers
        try:
            return handlers[kind]
        except KeyError:
            raise UnknownKindError(kind, handlers) from None

    def kinds(self) -> frozenset[str]:
        return frozenset(self._handlers)

    def resolve_kind(self, alias: str) -> str:
        """Map a user-typed kind (any case, short or plural) to a registered kind."""
        handlers = self._handlers
        if alias in handlers:
            return alias
        folded = alias.casefold()
        for kind in handlers:
            if kind.casefold() == folded:
                return kind
        target = KIND_ALIASES.get(folded)
        if target is not None and target in handlers:
            return target
        raise UnknownKindError(alias, handlers)

    @property
    def is_initialized(self) -> bool:
        return self._initialized


# ---------------------------------------------------------------------------
# Process-wide accessor
# ---------------------------------------------------------------------------

_default_registry: HandlerRegistry | None = None
_default_lock = threading.Lock()


def get_registry() -> HandlerRegistry:
    """Return the process-wide registry with every built-in kind installed."""
    global _default_registry
    registry = _default_registry
    if registry is None:
        with _default_lock:
            if _default_registry is None:
                from maestro.core.resource.handlers import register_all

                created = HandlerRegistry()
                created.initialize(register_all)
                _default_registry = created
            registry = _default_registry
    return registry
