"""Document store implementations for the library kinds."""

from maestro.core.store.base import DocumentStore
from maestro.core.store.catalog import CatalogDocumentStore
from maestro.core.store.local import LocalDocumentStore

__all__ = ["CatalogDocumentStore", "DocumentStore", "LocalDocumentStore"]
