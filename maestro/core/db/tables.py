"""SQLAlchemy ORM models for the resource store.

These are the single source of truth for the database schema;
``init_schema`` creates them from ``Base.metadata``.  The organizational
chain (ecosystems -> domains -> apps -> workspaces) is enforced with
cascading foreign keys, and the ``context`` table holds the one-row
current-selection record.

Uses SQLAlchemy 2.0 declarative style with ``Mapped`` type annotations and
the portable ``JSON`` type so the same schema runs on SQLite and PostgreSQL.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Text, UniqueConstraint, func, true
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Timezone-aware timestamp type for all datetime columns.
TimestampTZ = DateTime(timezone=True)


class Base(DeclarativeBase):
    """Declarative base with naming convention for constraints."""

    pass


Base.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


# -- Organizational hierarchy -------------------------------------------------


class Ecosystem(Base):
    __tablename__ = "ecosystems"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(unique=True)
    description: Mapped[str | None] = mapped_column(Text)
    theme: Mapped[str | None]
    labels: Mapped[dict | None] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now(), onupdate=func.now())


class Domain(Base):
    __tablename__ = "domains"
    __table_args__ = (UniqueConstraint("ecosystem_id", "name"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    ecosystem_id: Mapped[int] = mapped_column(ForeignKey("ecosystems.id", ondelete="CASCADE"), index=True)
    name: Mapped[str]
    description: Mapped[str | None] = mapped_column(Text)
    labels: Mapped[dict | None] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now(), onupdate=func.now())


class App(Base):
    __tablename__ = "apps"
    __table_args__ = (UniqueConstraint("domain_id", "name"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    domain_id: Mapped[int] = mapped_column(ForeignKey("domains.id", ondelete="CASCADE"), index=True)
    name: Mapped[str]
    path: Mapped[str | None]
    description: Mapped[str | None] = mapped_column(Text)
    language: Mapped[dict | None] = mapped_column(JSON)
    build: Mapped[dict | None] = mapped_column(JSON)
    labels: Mapped[dict | None] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now(), onupdate=func.now())


class Workspace(Base):
    __tablename__ = "workspaces"
    __table_args__ = (UniqueConstraint("app_id", "name"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    app_id: Mapped[int] = mapped_column(ForeignKey("apps.id", ondelete="CASCADE"), index=True)
    name: Mapped[str]
    description: Mapped[str | None] = mapped_column(Text)
    image_name: Mapped[str | None]
    status: Mapped[str] = mapped_column(default="stopped", server_default="stopped")
    labels: Mapped[dict | None] = mapped_column(JSON)

    # Runtime-managed state, carried forward across applies
    container_id: Mapped[str | None]
    nvim_structure: Mapped[str | None]
    nvim_plugins: Mapped[list | None] = mapped_column(JSON)
    theme: Mapped[str | None]

    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now(), onupdate=func.now())


# -- Current selection ----------------------------------------------------------


class Context(Base):
    """Singleton row recording the active ecosystem/domain/app/workspace."""

    __tablename__ = "context"
    __table_args__ = (CheckConstraint("id = 1", name="singleton"),)

    id: Mapped[int] = mapped_column(primary_key=True, default=1)
    active_ecosystem_id: Mapped[int | None] = mapped_column(ForeignKey("ecosystems.id", ondelete="SET NULL"))
    active_domain_id: Mapped[int | None] = mapped_column(ForeignKey("domains.id", ondelete="SET NULL"))
    active_app_id: Mapped[int | None] = mapped_column(ForeignKey("apps.id", ondelete="SET NULL"))
    active_workspace_id: Mapped[int | None] = mapped_column(ForeignKey("workspaces.id", ondelete="SET NULL"))
    updated_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now(), onupdate=func.now())


# -- Editor / shell library ---------------------------------------------------
# Flat, globally-named documents.  The type-specific body lives in ``spec``.


class CatalogRow:
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(unique=True)
    description: Mapped[str | None] = mapped_column(Text)
    category: Mapped[str | None] = mapped_column()
    labels: Mapped[dict | None] = mapped_column(JSON)
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSON)
    spec: Mapped[dict] = mapped_column(JSON, default=dict)
    enabled: Mapped[bool] = mapped_column(default=True, server_default=true())
    created_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(TimestampTZ, server_default=func.now(), onupdate=func.now())


class NvimPlugin(CatalogRow, Base):
    __tablename__ = "nvim_plugins"


class NvimTheme(CatalogRow, Base):
    __tablename__ = "nvim_themes"


class NvimPackage(CatalogRow, Base):
    __tablename__ = "nvim_packages"


class TerminalPrompt(CatalogRow, Base):
    __tablename__ = "terminal_prompts"
