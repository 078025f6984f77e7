"""Tests for the NvimPlugin / NvimTheme / NvimPackage / TerminalPrompt handlers."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from maestro.core.context import ExecutionContext, plugin_dir, theme_dir
from maestro.core.db.tables import NvimPackage, NvimPlugin, TerminalPrompt
from maestro.core.errors import CapabilityUnavailableError, ResourceNotFoundError, ValidationFailedError
from maestro.core.models.library import PluginDocument
from maestro.core.resource import dispatch
from maestro.core.store.local import LocalDocumentStore

PLUGIN = """\
apiVersion: devopsmaestro.io/v1
kind: NvimPlugin
metadata:
  name: telescope
  description: Fuzzy finder
  category: navigation
  tags: [search, files]
spec:
  repo: nvim-telescope/telescope.nvim
  branch: 0.1.x
  dependencies:
    - nvim-lua/plenary.nvim
    - repo: nvim-telescope/telescope-fzf-native.nvim
      build: make
  cmd: Telescope
  keys:
    - key: <leader>ff
      action: <cmd>Telescope find_files<cr>
      desc: Find files
"""

THEME = """\
apiVersion: devopsmaestro.io/v1
kind: NvimTheme
metadata:
  name: tokyonight-night
  author: folke
spec:
  plugin:
    repo: folke/tokyonight.nvim
  style: night
  colors:
    bg: "#1a1b26"
    fg: "#c0caf5"
"""

PACKAGE = """\
apiVersion: devopsmaestro.io/v1
kind: NvimPackage
metadata:
  name: core
spec:
  plugins: [telescope, treesitter]
"""

PROMPT = """\
apiVersion: devopsmaestro.io/v1
kind: TerminalPrompt
metadata:
  name: minimal
spec:
  type: starship
  addNewline: false
  format: "$directory$character"
"""


# ---------------------------------------------------------------------------
# Relational store
# ---------------------------------------------------------------------------


async def test_plugin_lifecycle_in_database(ctx: ExecutionContext, db_session: AsyncSession) -> None:
    created = await dispatch.apply(ctx, PLUGIN)
    assert created.name == "telescope"

    row = (await db_session.execute(select(NvimPlugin))).scalar_one()
    assert row.category == "navigation"
    assert row.enabled is True
    assert row.spec["repo"] == "nvim-telescope/telescope.nvim"

    await dispatch.apply(ctx, PLUGIN.replace("branch: 0.1.x", "branch: master"))
    fetched = await dispatch.get(ctx, "NvimPlugin", "telescope")
    assert fetched.document.spec.branch == "master"
    assert fetched.document.metadata.tags == ["search", "files"]
    assert len((await db_session.execute(select(NvimPlugin))).scalars().all()) == 1

    await dispatch.delete(ctx, "NvimPlugin", "telescope")
    with pytest.raises(ResourceNotFoundError):
        await dispatch.get(ctx, "NvimPlugin", "telescope")


async def test_plugin_yaml_round_trip(ctx: ExecutionContext) -> None:
    await dispatch.apply(ctx, PLUGIN)
    data = yaml.safe_load(dispatch.to_yaml(await dispatch.get(ctx, "NvimPlugin", "telescope")))

    assert data["kind"] == "NvimPlugin"
    assert data["metadata"]["description"] == "Fuzzy finder"
    assert data["spec"]["dependencies"] == [
        "nvim-lua/plenary.nvim",
        {"repo": "nvim-telescope/telescope-fzf-native.nvim", "build": "make"},
    ]
    assert data["spec"]["keys"][0] == {
        "key": "<leader>ff",
        "action": "<cmd>Telescope find_files<cr>",
        "desc": "Find files",
    }
    assert data["spec"]["enabled"] is True


async def test_plugin_requires_repo(ctx: ExecutionContext, db_session: AsyncSession) -> None:
    with pytest.raises(ValidationFailedError, match="spec.repo is required"):
        await dispatch.apply(ctx, "kind: NvimPlugin\nmetadata:\n  name: broken\nspec:\n  lazy: true\n")
    assert (await db_session.execute(select(NvimPlugin))).first() is None


async def test_theme_rejects_bad_colors(ctx: ExecutionContext) -> None:
    with pytest.raises(ValidationFailedError, match="color 'bg'"):
        await dispatch.apply(ctx, THEME.replace('"#1a1b26"', '"navy"'))


async def test_theme_requires_plugin_repo(ctx: ExecutionContext) -> None:
    with pytest.raises(ValidationFailedError, match="spec.plugin.repo"):
        await dispatch.apply(ctx, "kind: NvimTheme\nmetadata:\n  name: bare\n")


async def test_list_themes(ctx: ExecutionContext) -> None:
    await dispatch.apply(ctx, THEME)
    await dispatch.apply(ctx, THEME.replace("tokyonight-night", "tokyonight-day").replace("style: night", "style: day"))
    themes = await dispatch.list_resources(ctx, "NvimTheme")
    assert [t.name for t in themes] == ["tokyonight-day", "tokyonight-night"]
    assert themes[0].document.metadata.author == "folke"


async def test_package_and_prompt_use_database(ctx: ExecutionContext, db_session: AsyncSession) -> None:
    await dispatch.apply(ctx, PACKAGE)
    await dispatch.apply(ctx, PROMPT)

    package = (await db_session.execute(select(NvimPackage))).scalar_one()
    prompt = (await db_session.execute(select(TerminalPrompt))).scalar_one()
    assert package.spec["plugins"] == ["telescope", "treesitter"]
    assert prompt.spec["addNewline"] is False

    fetched = await dispatch.get(ctx, "TerminalPrompt", "minimal")
    assert fetched.document.spec.format == "$directory$character"


async def test_package_cannot_extend_itself(ctx: ExecutionContext) -> None:
    with pytest.raises(ValidationFailedError, match="extend itself"):
        await dispatch.apply(ctx, PACKAGE.replace("spec:\n", "spec:\n  extends: core\n"))


async def test_prompt_type_must_be_known(ctx: ExecutionContext) -> None:
    with pytest.raises(ValidationFailedError, match="spec.type must be one of"):
        await dispatch.apply(ctx, PROMPT.replace("type: starship", "type: bash"))
    with pytest.raises(ValidationFailedError, match="spec.type is required"):
        await dispatch.apply(ctx, "kind: TerminalPrompt\nmetadata:\n  name: untyped\n")


# ---------------------------------------------------------------------------
# Capability selection
# ---------------------------------------------------------------------------


async def test_plugins_fall_back_to_config_dir(tmp_path: Path) -> None:
    ctx = ExecutionContext(config_dir=tmp_path)
    await dispatch.apply(ctx, PLUGIN)

    path = plugin_dir(tmp_path) / "telescope.yaml"
    assert path.exists()
    assert yaml.safe_load(path.read_text())["spec"]["repo"] == "nvim-telescope/telescope.nvim"

    await dispatch.apply(ctx, THEME)
    assert (theme_dir(tmp_path) / "tokyonight-night.yaml").exists()

    listed = await dispatch.list_resources(ctx, "NvimPlugin")
    assert [r.name for r in listed] == ["telescope"]


async def test_explicit_plugin_store_wins_over_database(
    ctx: ExecutionContext, db_session: AsyncSession, tmp_path: Path
) -> None:
    ctx.plugin_store = LocalDocumentStore(tmp_path / "plugins", PluginDocument)
    await dispatch.apply(ctx, PLUGIN)

    assert (tmp_path / "plugins" / "telescope.yaml").exists()
    assert (await db_session.execute(select(NvimPlugin))).first() is None


async def test_missing_capability(tmp_path: Path) -> None:
    bare = ExecutionContext()
    with pytest.raises(CapabilityUnavailableError, match="plugin store"):
        await dispatch.apply(bare, PLUGIN)
    with pytest.raises(CapabilityUnavailableError, match="database"):
        await dispatch.apply(ExecutionContext(config_dir=tmp_path), PACKAGE)
    with pytest.raises(CapabilityUnavailableError):
        await dispatch.list_resources(bare, "TerminalPrompt")


async def test_file_store_rejects_path_names(tmp_path: Path) -> None:
    ctx = ExecutionContext(config_dir=tmp_path)
    victim = tmp_path / "x.yaml"
    victim.write_text("kept\n", encoding="utf-8")

    with pytest.raises(ResourceNotFoundError):
        await dispatch.delete(ctx, "NvimPlugin", "../../x")
    with pytest.raises(ResourceNotFoundError):
        await dispatch.get(ctx, "NvimPlugin", "../../x")
    assert victim.read_text(encoding="utf-8") == "kept\n"
