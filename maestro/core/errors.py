"""Domain exceptions raised by the resource core.

Every error derives from ``ResourceError`` so the CLI can translate the whole
family at one place, and from the builtin that best describes it
(``LookupError``, ``ValueError``, ``RuntimeError``) so callers that only care
about the broad category can still catch it.
"""

from __future__ import annotations

from collections.abc import Iterable


class ResourceError(Exception):
    """Base class for all resource-core failures."""


# ---------------------------------------------------------------------------
# Document decoding
# ---------------------------------------------------------------------------


class MalformedDocumentError(ResourceError, ValueError):
    """Raised when a payload is not a parseable YAML mapping."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed resource document: {reason}")


class MissingKindError(ResourceError, ValueError):
    """Raised when a document has no ``kind`` field."""

    def __init__(self) -> None:
        super().__init__("Resource document has no 'kind' field")


class ParseError(ResourceError, ValueError):
    """Raised when a document's structure does not match its kind."""

    def __init__(self, kind: str, reason: str) -> None:
        self.kind = kind
        self.reason = reason
        super().__init__(f"Failed to parse {kind} document: {reason}")


class ValidationFailedError(ResourceError, ValueError):
    """Raised when a parsed resource fails its own validation rules."""

    def __init__(self, kind: str, name: str, reason: str) -> None:
        self.kind = kind
        self.name = name
        self.reason = reason
        label = f"{kind} '{name}'" if name else kind
        super().__init__(f"Invalid {label}: {reason}")


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


class UnknownKindError(ResourceError, LookupError):
    """Raised when no handler is registered for a kind."""

    def __init__(self, kind: str, known: Iterable[str] = ()) -> None:
        self.kind = kind
        self.known = sorted(known)
        hint = f" (registered kinds: {', '.join(self.known)})" if self.known else ""
        super().__init__(f"No handler registered for kind '{kind}'{hint}")


class ResourceNotFoundError(ResourceError, LookupError):
    """Raised when the named resource does not exist in the resolved scope."""

    def __init__(self, kind: str, name: str, scope: str | None = None) -> None:
        self.kind = kind
        self.name = name
        self.scope = scope
        where = f" in {scope}" if scope else ""
        super().__init__(f"{kind} '{name}' not found{where}")


class ParentNotFoundError(ResourceError, LookupError):
    """Raised when the parent declared by a document cannot be resolved."""

    def __init__(self, kind: str, level: str, name: str | None, reason: str | None = None) -> None:
        self.kind = kind
        self.level = level
        self.name = name
        if name is None:
            msg = f"{kind} document must set metadata.{level} to name its parent {level}"
        elif reason:
            msg = f"{level} '{name}' {reason}"
        else:
            msg = f"{level} '{name}' not found; create it first with 'dvm apply -f <{level}.yaml>'"
        super().__init__(msg)


class NoActiveParentError(ResourceError, LookupError):
    """Raised when a child operation needs an active selection that is unset."""

    def __init__(self, level: str) -> None:
        self.level = level
        super().__init__(f"No active {level} set; use 'dvm use {level} <name>' first")


# ---------------------------------------------------------------------------
# Environment / infrastructure
# ---------------------------------------------------------------------------


class CapabilityUnavailableError(ResourceError, RuntimeError):
    """Raised when a handler needs a store the execution context does not carry."""

    def __init__(self, kind: str, capability: str) -> None:
        self.kind = kind
        self.capability = capability
        super().__init__(f"{kind} operations require {capability}, which is not configured")


class StoreFailureError(ResourceError, RuntimeError):
    """Raised when the underlying store fails; wraps the original error."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"Failed to {operation}: {cause}")


class DuplicateHandlerError(ResourceError, RuntimeError):
    """Raised when two handlers register the same kind.

    This is a programming error surfaced at startup; it is never caught.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Handler for kind '{kind}' already registered")
