from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import IO

import click

from maestro.core.errors import ResourceError
from maestro.core.models.enums import SelectionLevel
from maestro.core.settings import DvmSettings, get_settings


@click.group()
@click.option(
    "--db-url",
    default=None,
    help="Database URL (default: from DVM_DATABASE_URL or a SQLite file under ~/.devopsmaestro).",
)
@click.option(
    "--config-dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for file-backed plugin/theme libraries.",
)
@click.option("--log-level", default=None, help="Log level (default: from DVM_LOG_LEVEL or WARNING).")
@click.pass_context
def main(ctx: click.Context, db_url: str | None, config_dir: Path | None, log_level: str | None) -> None:
    """DevOpsMaestro - declarative configuration for ecosystems, apps and workspaces."""
    from maestro.core.log import setup_logging

    overrides = {"database_url": db_url, "config_dir": config_dir, "log_level": log_level}
    settings = get_settings().model_copy(update={k: v for k, v in overrides.items() if v is not None})
    setup_logging(settings.log_level)
    ctx.obj = settings


def _run[T](settings: DvmSettings, operation: Callable, *args: object) -> T:
    """Run ``operation(exec_ctx, *args)`` inside one execution context.

    Resource errors become ``click.ClickException`` so they print as a
    single ``Error: ...`` line with exit code 1.
    """
    from maestro.core.context import open_context

    async def _main() -> T:
        async with open_context(settings) as exec_ctx:
            coro: Awaitable[T] = operation(exec_ctx, *args)
            return await coro

    try:
        return asyncio.run(_main())
    except ResourceError as exc:
        raise click.ClickException(str(exc)) from exc


def _resolve_kind(kind: str) -> str:
    from maestro.core.resource.registry import get_registry

    try:
        return get_registry().resolve_kind(kind)
    except ResourceError as exc:
        raise click.ClickException(str(exc)) from exc


# ---------------------------------------------------------------------------
# Resource commands
# ---------------------------------------------------------------------------


@main.command()
@click.option(
    "-f",
    "--filename",
    "files",
    multiple=True,
    required=True,
    type=click.File("r"),
    help="Resource file to apply ('-' reads stdin).  May be repeated.",
)
@click.pass_obj
def apply(settings: DvmSettings, files: tuple[IO[str], ...]) -> None:
    """Create or update resources from YAML documents."""
    from maestro.core.resource import dispatch
    from maestro.core.resource.kind import split_documents

    texts = [stream.read() for stream in files]

    async def _apply(exec_ctx) -> None:
        for text in texts:
            for document in split_documents(text):
                resource = await dispatch.apply(exec_ctx, document)
                click.echo(f"{resource.kind.lower()}/{resource.name} applied")

    _run(settings, _apply)


@main.command()
@click.argument("kind")
@click.argument("name", required=False)
@click.option(
    "-o",
    "--output",
    type=click.Choice(["yaml", "name"]),
    default=None,
    help="Output format (default: yaml for one resource, name for a list).",
)
@click.pass_obj
def get(settings: DvmSettings, kind: str, name: str | None, output: str | None) -> None:
    """Show one resource, or list every resource of KIND when NAME is omitted."""
    from maestro.core.resource import dispatch

    kind = _resolve_kind(kind)

    async def _get(exec_ctx) -> list:
        if name is not None:
            return [await dispatch.get(exec_ctx, kind, name)]
        return await dispatch.list_resources(exec_ctx, kind)

    resources = _run(settings, _get)
    fmt = output or ("yaml" if name is not None else "name")
    if fmt == "name":
        for resource in resources:
            click.echo(f"{resource.kind.lower()}/{resource.name}")
        return
    click.echo("---\n".join(dispatch.to_yaml(resource) for resource in resources), nl=False)


@main.command()
@click.argument("kind")
@click.argument("name")
@click.pass_obj
def delete(settings: DvmSettings, kind: str, name: str) -> None:
    """Delete a resource.  Child kinds are looked up under the active selection."""
    from maestro.core.resource import dispatch

    kind = _resolve_kind(kind)
    _run(settings, dispatch.delete, kind, name)
    click.echo(f"{kind.lower()}/{name} deleted")


@main.command()
def kinds() -> None:
    """List the resource kinds this build understands."""
    from maestro.core.resource.registry import get_registry

    for kind in sorted(get_registry().kinds()):
        click.echo(kind)


# ---------------------------------------------------------------------------
# Current selection
# ---------------------------------------------------------------------------


@main.command()
@click.argument(
    "level",
    required=False,
    type=click.Choice([lvl.value for lvl in SelectionLevel], case_sensitive=False),
)
@click.argument("name", required=False)
@click.option("--clear", is_flag=True, default=False, help="Clear the whole selection.")
@click.pass_obj
def use(settings: DvmSettings, level: str | None, name: str | None, clear: bool) -> None:
    """Select the active ecosystem, domain, app or workspace.

    Selecting a level also selects its parents and clears everything below
    it.  Use NAME ``none`` to clear a level.
    """
    from maestro.core.managers import selection
    from maestro.core.resource.scope import LEVEL_KIND, load_scope, resolve_for_selection

    if clear:
        level, name = SelectionLevel.ECOSYSTEM.value, "none"
    elif level is None or name is None:
        raise click.UsageError("Expected LEVEL and NAME (or --clear).")

    target = SelectionLevel(level.lower())

    async def _use(exec_ctx) -> None:
        db = exec_ctx.require_db(LEVEL_KIND[target])
        if name == "none":
            await selection.clear_active(db, target)
            return
        scope = await load_scope(db)
        row = await resolve_for_selection(db, target, name, scope)
        await selection.set_active(db, target, row.id)

    _run(settings, _use)
    if clear:
        click.echo("Selection cleared.")
    elif name == "none":
        click.echo(f"Cleared active {target}.")
    else:
        click.echo(f"Switched to {target} '{name}'.")


@main.command()
@click.pass_obj
def status(settings: DvmSettings) -> None:
    """Show the current selection."""
    from maestro.core.managers import hierarchy, selection
    from maestro.core.resource.scope import load_scope

    async def _status(exec_ctx) -> list[tuple[SelectionLevel, str | None]]:
        db = exec_ctx.require_db("status")
        scope = await load_scope(db)
        active = []
        for lvl in SelectionLevel:
            row_id = scope.get(lvl)
            row = await hierarchy.get_by_id(db, selection.LEVEL_MODEL[lvl], row_id) if row_id is not None else None
            active.append((lvl, row.name if row is not None else None))
        return active

    for lvl, active_name in _run(settings, _status):
        label = f"{lvl.value.capitalize()}:"
        click.echo(f"{label:<11}{active_name or '(none)'}")


if __name__ == "__main__":
    main()
