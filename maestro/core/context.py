"""Execution context handed to every handler operation.

The context carries the capabilities an operation may need as explicit,
optional, typed fields.  A handler checks for the one it requires and
raises ``CapabilityUnavailableError`` when it is absent; nothing is looked
up by string key.

``open_context`` acquires the database session once per CLI invocation and
guarantees it is closed (and the engine disposed) on every exit path.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from maestro.core.db.engine import create_engine, create_session_factory, init_schema
from maestro.core.errors import CapabilityUnavailableError, StoreFailureError
from maestro.core.models.library import PluginDocument, ThemeDocument
from maestro.core.settings import DvmSettings
from maestro.core.store.base import DocumentStore
from maestro.core.store.local import LocalDocumentStore


@dataclass
class ExecutionContext:
    """Capabilities available to one operation."""

    # -- Relational store ------------------------------------------------------
    db: AsyncSession | None = None

    # -- File-backed library stores (take precedence over ``db``) -------------
    plugin_store: DocumentStore | None = None
    theme_store: DocumentStore | None = None

    # -- Fallback location for file-backed library stores ---------------------
    config_dir: Path | None = None

    def require_db(self, kind: str) -> AsyncSession:
        if self.db is None:
            raise CapabilityUnavailableError(kind, "a database connection")
        return self.db


def plugin_dir(config_dir: Path) -> Path:
    return config_dir / "nvim" / "plugins"


def theme_dir(config_dir: Path) -> Path:
    return config_dir / "nvim" / "themes"


@asynccontextmanager
async def open_context(settings: DvmSettings) -> AsyncIterator[ExecutionContext]:
    """Open the store described by *settings* and yield a ready context.

    With ``library_store = "file"`` the plugin and theme stores point at the
    config directory; otherwise those kinds live in the database.
    """
    url = settings.resolve_database_url()
    config_dir = settings.resolve_config_dir()
    # Malformed URLs and missing drivers surface here, before any connection
    try:
        engine = create_engine(url)
    except (SQLAlchemyError, OSError, ImportError) as exc:
        raise StoreFailureError("open the database", exc) from exc

    try:
        try:
            await init_schema(engine)
        except (SQLAlchemyError, OSError) as exc:
            raise StoreFailureError("initialise the database schema", exc) from exc

        ctx = ExecutionContext(config_dir=config_dir)
        if settings.library_store == "file":
            ctx.plugin_store = LocalDocumentStore(plugin_dir(config_dir), PluginDocument)
            ctx.theme_store = LocalDocumentStore(theme_dir(config_dir), ThemeDocument)

        session_factory = create_session_factory(engine)
        async with session_factory() as session:
            ctx.db = session
            logger.debug("Context: opened store at {}", engine.url.render_as_string(hide_password=True))
            yield ctx
    finally:
        await engine.dispose()
