"""Kind detection and document stream helpers."""

from __future__ import annotations

from typing import Any

import yaml

from maestro.core.errors import MalformedDocumentError, MissingKindError


def load_mapping(data: bytes | str) -> dict[str, Any]:
    """Parse *data* as a single YAML mapping.

    Raises ``MalformedDocumentError`` for unparsable input, for an empty
    document, and for any top-level value that is not a mapping.
    """
    try:
        raw = yaml.safe_load(data)
    except yaml.YAMLError as exc:
        raise MalformedDocumentError(str(exc)) from exc
    if raw is None:
        raise MalformedDocumentError("document is empty")
    if not isinstance(raw, dict):
        raise MalformedDocumentError(f"expected a mapping at the top level, got {type(raw).__name__}")
    return raw


def detect_kind(data: bytes | str) -> str:
    """Return the ``kind`` tag of a document without interpreting the rest.

    Only the header is examined, so a document whose body is invalid for its
    kind still reports that kind.
    """
    kind = load_mapping(data).get("kind")
    if kind is None or (isinstance(kind, str) and not kind.strip()):
        raise MissingKindError
    if not isinstance(kind, str):
        raise MalformedDocumentError(f"'kind' must be a string, got {type(kind).__name__}")
    return kind.strip()


def split_documents(text: str) -> list[str]:
    """Split a multi-document YAML stream into individual documents.

    Each document is re-serialized on its own; empty documents (stray
    ``---`` separators) are dropped.
    """
    try:
        loaded = [doc for doc in yaml.safe_load_all(text) if doc is not None]
    except yaml.YAMLError as exc:
        raise MalformedDocumentError(str(exc)) from exc
    return [yaml.safe_dump(doc, sort_keys=False) for doc in loaded]
