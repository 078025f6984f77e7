"""Shared enumerations used across the resource core."""

from __future__ import annotations

from enum import StrEnum

# -- Resource kinds ------------------------------------------------------------


class Kind(StrEnum):
    """Kind tags recognised in the ``kind`` field of a document."""

    ECOSYSTEM = "Ecosystem"
    DOMAIN = "Domain"
    APP = "App"
    WORKSPACE = "Workspace"
    NVIM_PLUGIN = "NvimPlugin"
    NVIM_THEME = "NvimTheme"
    NVIM_PACKAGE = "NvimPackage"
    TERMINAL_PROMPT = "TerminalPrompt"


# -- Hierarchy -------------------------------------------------------------------


class SelectionLevel(StrEnum):
    """Levels of the organizational chain, outermost first."""

    ECOSYSTEM = "ecosystem"
    DOMAIN = "domain"
    APP = "app"
    WORKSPACE = "workspace"

    @property
    def parent(self) -> SelectionLevel | None:
        index = _LEVEL_ORDER.index(self)
        return _LEVEL_ORDER[index - 1] if index else None

    @property
    def descendants(self) -> tuple[SelectionLevel, ...]:
        return _LEVEL_ORDER[_LEVEL_ORDER.index(self) + 1 :]

    @property
    def ancestors(self) -> tuple[SelectionLevel, ...]:
        return _LEVEL_ORDER[: _LEVEL_ORDER.index(self)]


_LEVEL_ORDER: tuple[SelectionLevel, ...] = tuple(SelectionLevel)


class WorkspaceStatus(StrEnum):
    STOPPED = "stopped"
    CREATED = "created"
    RUNNING = "running"
    ERROR = "error"


# -- Library -----------------------------------------------------------------------


class PromptType(StrEnum):
    STARSHIP = "starship"
    POWERLEVEL10K = "powerlevel10k"
    OH_MY_POSH = "oh-my-posh"
