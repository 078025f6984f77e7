"""Common envelope shared by every resource document.

A document is the YAML form of a resource::

    apiVersion: devopsmaestro.io/v1
    kind: App
    metadata:
      name: invoicer
      domain: billing
    spec:
      path: ~/src/invoicer

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

API_VERSION = "devopsmaestro.io/v1"

# Names double as file names for file-backed stores.
NAME_PATTERN = re.compile(r"[A-Za-z0-9][A-Za-z0-9._-]*")


class DocumentModel(BaseModel):
    """Base for every model that is read from or written to YAML."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ObjectMeta(DocumentModel):
    """``metadata`` block.

    Parent references (``ecosystem``, ``domain``, ``app``) are only meaningful
    for the hierarchical kinds; library kinds use ``category``/``tags``.
    """

    name: str = ""
    description: str | None = None
    ecosystem: str | None = None
    domain: str | None = None
    app: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    author: str | None = None
    labels: dict[str, str] | None = None
    annotations: dict[str, str] | None = None

    @model_validator(mode="after")
    def _description_from_annotations(self) -> ObjectMeta:
        # Older documents carried the description as an annotation
        if self.description is None and self.annotations and "description" in self.annotations:
            self.description = self.annotations["description"]
        return self


class Document(DocumentModel):
    """Envelope with an untyped ``spec``; per-kind documents narrow it."""

    api_version: str = API_VERSION
    kind: str
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: dict = Field(default_factory=dict)

    def to_wire(self) -> dict:
        """Plain-data form suitable for ``yaml.safe_dump``."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
