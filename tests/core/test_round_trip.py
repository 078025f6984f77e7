"""Every built-in kind re-applies cleanly from its own YAML."""

from __future__ import annotations

import pytest

from maestro.core.context import ExecutionContext
from maestro.core.models.enums import Kind
from maestro.core.resource import dispatch
from maestro.core.resource.registry import get_registry

DOCUMENTS = {
    Kind.ECOSYSTEM: """\
kind: Ecosystem
metadata:
  name: acme
  description: Acme Corp
spec:
  theme: tokyonight
""",
    Kind.DOMAIN: """\
kind: Domain
metadata:
  name: billing
  ecosystem: acme
  labels:
    owner: finance
""",
    Kind.APP: """\
kind: App
metadata:
  name: invoicer
  domain: billing
spec:
  path: /src/invoicer
  language:
    name: go
    version: "1.23"
  build:
    dockerfile: Dockerfile
    args:
      CGO_ENABLED: "0"
""",
    Kind.WORKSPACE: """\
kind: Workspace
metadata:
  name: main
  app: invoicer
spec:
  image:
    name: dvm/invoicer:dev
  nvim:
    structure: lazyvim
    theme: tokyonight-night
    plugins: [telescope, treesitter]
""",
    Kind.NVIM_PLUGIN: """\
kind: NvimPlugin
metadata:
  name: telescope
  category: navigation
spec:
  repo: nvim-telescope/telescope.nvim
  dependencies:
    - nvim-lua/plenary.nvim
    - repo: nvim-telescope/telescope-fzf-native.nvim
      build: make
  keys:
    - key: <leader>ff
      action: <cmd>Telescope find_files<cr>
""",
    Kind.NVIM_THEME: """\
kind: NvimTheme
metadata:
  name: tokyonight-night
spec:
  plugin:
    repo: folke/tokyonight.nvim
  style: night
  colors:
    bg: "#1a1b26"
""",
    Kind.NVIM_PACKAGE: """\
kind: NvimPackage
metadata:
  name: core
spec:
  plugins: [telescope, treesitter]
""",
    Kind.TERMINAL_PROMPT: """\
kind: TerminalPrompt
metadata:
  name: minimal
spec:
  type: starship
  addNewline: false
  format: "$directory$character"
""",
}


def test_every_builtin_kind_is_covered() -> None:
    assert frozenset(DOCUMENTS) == get_registry().kinds()


@pytest.fixture
async def parents(ctx: ExecutionContext) -> None:
    for kind in (Kind.ECOSYSTEM, Kind.DOMAIN, Kind.APP):
        await dispatch.apply(ctx, DOCUMENTS[kind])


@pytest.mark.usefixtures("parents")
@pytest.mark.parametrize("kind", list(DOCUMENTS), ids=str)
async def test_reapply_own_yaml(ctx: ExecutionContext, kind: Kind) -> None:
    first = await dispatch.apply(ctx, DOCUMENTS[kind])
    text = dispatch.to_yaml(first)
    before = len(await dispatch.list_resources(ctx, kind))

    second = await dispatch.apply(ctx, text)

    assert second.id == first.id
    assert second.document.metadata == first.document.metadata
    assert second.document.spec == first.document.spec
    assert dispatch.to_yaml(second) == text
    assert len(await dispatch.list_resources(ctx, kind)) == before == 1
