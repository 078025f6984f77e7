"""Unit tests for kind detection and document splitting."""

from __future__ import annotations

import pytest

from maestro.core.errors import MalformedDocumentError, MissingKindError
from maestro.core.resource.kind import detect_kind, split_documents


def test_detect_kind_reads_header() -> None:
    data = "apiVersion: devopsmaestro.io/v1\nkind: App\nmetadata:\n  name: invoicer\n"
    assert detect_kind(data) == "App"


def test_detect_kind_accepts_bytes() -> None:
    assert detect_kind(b"kind: Workspace\n") == "Workspace"


def test_detect_kind_ignores_invalid_body() -> None:
    # The body is nonsense for an App, but only the header matters here.
    data = "kind: App\nspec: [1, 2, 3]\nmetadata: 42\n"
    assert detect_kind(data) == "App"


def test_detect_kind_missing_kind() -> None:
    with pytest.raises(MissingKindError):
        detect_kind("apiVersion: devopsmaestro.io/v1\nmetadata:\n  name: x\n")


def test_detect_kind_blank_kind() -> None:
    with pytest.raises(MissingKindError):
        detect_kind("kind: '  '\n")


@pytest.mark.parametrize(
    "data",
    [
        "kind: [unclosed\n",
        "- kind: App\n",
        "just a string",
        "",
    ],
)
def test_detect_kind_malformed(data: str) -> None:
    with pytest.raises(MalformedDocumentError):
        detect_kind(data)


def test_detect_kind_non_string_kind() -> None:
    with pytest.raises(MalformedDocumentError, match="'kind' must be a string"):
        detect_kind("kind: 3\n")


def test_split_documents_drops_empty_documents() -> None:
    stream = "---\nkind: Ecosystem\nmetadata:\n  name: acme\n---\n---\nkind: Domain\nmetadata:\n  name: billing\n"
    documents = split_documents(stream)
    assert [detect_kind(doc) for doc in documents] == ["Ecosystem", "Domain"]


def test_split_documents_malformed_stream() -> None:
    with pytest.raises(MalformedDocumentError):
        split_documents("kind: App\n---\nkind: [broken\n")
