"""Local filesystem document store.

Stores one YAML file per document::

    {root}/{name}.yaml

Uses ``anyio.to_thread.run_sync`` for non-blocking file I/O.

Writes are atomic: data is written to a temporary file in the same directory,
then renamed to the target path, so a crash mid-write never leaves a
truncated document behind.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from functools import partial
from pathlib import Path

import yaml
from anyio import to_thread
from pydantic import ValidationError

from maestro.core.errors import StoreFailureError
from maestro.core.models.document import NAME_PATTERN, Document

SUFFIX = ".yaml"


class LocalDocumentStore:
    """Filesystem implementation of the DocumentStore protocol."""

    def __init__(self, root: str | Path, document_type: type[Document]) -> None:
        self._root = Path(root)
        self._document_type = document_type

    @property
    def root(self) -> Path:
        return self._root

    def _path(self, name: str) -> Path | None:
        """File for *name*, or ``None`` if *name* cannot name a file directly under ``root``."""
        if not NAME_PATTERN.fullmatch(name):
            return None
        return self._root / f"{name}{SUFFIX}"

    # -- Read ------------------------------------------------------------------

    async def get(self, name: str) -> Document | None:
        path = self._path(name)
        if path is None:
            return None
        try:
            raw = await to_thread.run_sync(partial(_read_file, path))
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StoreFailureError(f"read {path}", exc) from exc
        return self._load(path, raw)

    async def list(self) -> list[Document]:
        paths = await to_thread.run_sync(partial(_list_files, self._root))
        documents = []
        for path in paths:
            try:
                raw = await to_thread.run_sync(partial(_read_file, path))
            except OSError as exc:
                raise StoreFailureError(f"read {path}", exc) from exc
            documents.append(self._load(path, raw))
        return documents

    # -- Write -----------------------------------------------------------------

    async def create(self, document: Document) -> Document:
        return await self._write(document)

    async def update(self, document: Document) -> Document:
        return await self._write(document)

    async def delete(self, name: str) -> bool:
        path = self._path(name)
        if path is None:
            return False
        try:
            return await to_thread.run_sync(partial(_unlink, path))
        except OSError as exc:
            raise StoreFailureError(f"delete {path}", exc) from exc

    # -- Helpers ---------------------------------------------------------------

    async def _write(self, document: Document) -> Document:
        path = self._path(document.metadata.name)
        if path is None:
            raise StoreFailureError(f"write {document.kind} '{document.metadata.name}'", ValueError("invalid name"))
        data = yaml.safe_dump(document.to_wire(), sort_keys=False)
        try:
            await to_thread.run_sync(partial(_atomic_write, path, data))
        except OSError as exc:
            raise StoreFailureError(f"write {path}", exc) from exc
        return document

    def _load(self, path: Path, raw: str) -> Document:
        try:
            return self._document_type.model_validate(yaml.safe_load(raw))
        except (yaml.YAMLError, ValidationError) as exc:
            raise StoreFailureError(f"load {path}", exc) from exc


# -- Sync helpers (run in thread pool) -----------------------------------------


def _atomic_write(path: Path, data: str) -> None:
    """Write data atomically: temp file + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


def _read_file(path: Path) -> str:
    """Read file contents.  Raises ``FileNotFoundError`` if missing."""
    return path.read_text(encoding="utf-8")


def _list_files(root: Path) -> list[Path]:
    if not root.is_dir():
        return []
    return sorted(root.glob(f"*{SUFFIX}"))


def _unlink(path: Path) -> bool:
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True
