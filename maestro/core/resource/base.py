"""Resource and Handler contracts.

A **Resource** is one parsed document plus, once persisted, its store id.
A **Handler** owns every operation for one kind; the registry maps kind
tags to handlers and the generic pipeline in ``dispatch`` routes to them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

import yaml
from pydantic import ValidationError

from maestro.core.errors import MalformedDocumentError, ParseError, ValidationFailedError
from maestro.core.models.document import NAME_PATTERN, Document
from maestro.core.resource.kind import load_mapping

if TYPE_CHECKING:
    from maestro.core.context import ExecutionContext


@dataclass
class Resource:
    """A typed document of one kind.

    Subclasses set ``kind`` and ``document_type`` and extend ``validate``
    with their own rules.
    """

    kind: ClassVar[str]
    document_type: ClassVar[type[Document]] = Document

    document: Document
    id: int | None = None

    @property
    def name(self) -> str:
        return self.document.metadata.name

    def validate(self) -> None:
        """Raise ``ValidationFailedError`` if the resource is not storable."""
        if not self.name.strip():
            self.fail("metadata.name is required")
        if not NAME_PATTERN.fullmatch(self.name):
            self.fail("metadata.name may only contain letters, digits, '.', '_' and '-'")

    def fail(self, reason: str) -> None:
        raise ValidationFailedError(self.kind, self.name, reason)


@runtime_checkable
class Handler(Protocol):
    """Operations every kind supports."""

    kind: str

    async def apply(self, ctx: ExecutionContext, data: bytes | str) -> Resource: ...

    async def get(self, ctx: ExecutionContext, name: str) -> Resource: ...

    async def list(self, ctx: ExecutionContext) -> list[Resource]: ...

    async def delete(self, ctx: ExecutionContext, name: str) -> None: ...

    def to_yaml(self, resource: Resource) -> str: ...


class BaseHandler:
    """Parsing and serialization shared by all handlers."""

    kind: ClassVar[str]
    resource_type: ClassVar[type[Resource]]

    def parse(self, data: bytes | str) -> Resource:
        """Decode *data* into this handler's resource type.

        Raises ``ParseError`` when the payload is not a mapping, carries a
        different kind, or does not fit the kind's document model.
        """
        try:
            raw = load_mapping(data)
        except MalformedDocumentError as exc:
            raise ParseError(self.kind, exc.reason) from exc

        declared = raw.get("kind")
        if isinstance(declared, str):
            declared = raw["kind"] = declared.strip()
        if declared != self.kind:
            raise ParseError(self.kind, f"document declares kind {declared!r}")

        # "spec:" with no body loads as None
        for section in ("metadata", "spec"):
            if raw.get(section) is None:
                raw.pop(section, None)

        try:
            document = self.resource_type.document_type.model_validate(raw)
        except ValidationError as exc:
            raise ParseError(self.kind, _summarize(exc)) from exc
        return self.resource_type(document)

    def to_yaml(self, resource: Resource) -> str:
        if resource.kind != self.kind:
            msg = f"{type(self).__name__} cannot serialize a {resource.kind} resource"
            raise TypeError(msg)
        return dump_yaml(resource.document.to_wire())


def dump_yaml(data: Any) -> str:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def _summarize(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts)
