"""Kind-agnostic entry points.

Callers hand over raw documents or ``(kind, name)`` pairs; these functions
find the handler in the registry and delegate.  Every function takes an
optional *registry* so tests can supply their own.
"""

from __future__ import annotations

from loguru import logger

from maestro.core.context import ExecutionContext
from maestro.core.resource.base import Resource
from maestro.core.resource.kind import detect_kind
from maestro.core.resource.registry import HandlerRegistry, get_registry


async def apply(ctx: ExecutionContext, data: bytes | str, *, registry: HandlerRegistry | None = None) -> Resource:
    """Create or update the resource described by *data*.

    The kind is resolved before anything else, so an unknown kind fails with
    ``UnknownKindError`` without touching the store.
    """
    registry = registry or get_registry()
    kind = detect_kind(data)
    handler = registry.lookup(kind)
    logger.debug("Dispatch: apply {}", kind)
    return await handler.apply(ctx, data)


async def get(ctx: ExecutionContext, kind: str, name: str, *, registry: HandlerRegistry | None = None) -> Resource:
    registry = registry or get_registry()
    return await registry.lookup(kind).get(ctx, name)


async def list_resources(
    ctx: ExecutionContext, kind: str, *, registry: HandlerRegistry | None = None
) -> list[Resource]:
    registry = registry or get_registry()
    return await registry.lookup(kind).list(ctx)


async def delete(ctx: ExecutionContext, kind: str, name: str, *, registry: HandlerRegistry | None = None) -> None:
    registry = registry or get_registry()
    await registry.lookup(kind).delete(ctx, name)


def to_yaml(resource: Resource, *, registry: HandlerRegistry | None = None) -> str:
    """Serialize *resource* with the handler for its own kind."""
    registry = registry or get_registry()
    return registry.lookup(resource.kind).to_yaml(resource)
