"""
Core value types shared by the planner, the backends and the CLI.

Everything here is a plain enum or frozen dataclass so that a planning pass
can be reproduced from its inputs alone.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class BackendName(str, Enum):
    """Closed set of backends that can host a new command surface."""

    TMUX = "tmux"
    ZELLIJ = "zellij"
    TERMINAL = "Terminal"
    ITERM2 = "iTerm2"
    KITTY = "kitty"
    GHOSTTY = "Ghostty"
    WARP = "Warp"

    def __str__(self) -> str:
        return self.value


class Target(str, Enum):
    """Granularity of the new surface: split pane, tab, or window."""

    PANE = "pane"
    TAB = "tab"
    WINDOW = "window"

    def __str__(self) -> str:
        return self.value


class Direction(str, Enum):
    """Split direction for pane targets."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    def __str__(self) -> str:
        return self.value


DEFAULT_DIRECTION = Direction.RIGHT


class HostOS(str, Enum):
    MACOS = "macos"
    OTHER = "other"


class TerminalProgram(str, Enum):
    """Best-effort identification of the terminal hosting this process."""

    TERMINAL = "Terminal"
    ITERM2 = "iTerm2"
    KITTY = "kitty"
    GHOSTTY = "Ghostty"
    WARP = "Warp"
    VSCODE = "VSCode"
    CURSOR = "Cursor"
    UNKNOWN = "unknown"

    @property
    def is_supported(self) -> bool:
        """Editor-embedded and unidentified terminals have no automation path."""
        return self not in (
            TerminalProgram.VSCODE,
            TerminalProgram.CURSOR,
            TerminalProgram.UNKNOWN,
        )

    @property
    def is_editor_embedded(self) -> bool:
        return self in (TerminalProgram.VSCODE, TerminalProgram.CURSOR)

    def as_backend(self) -> BackendName | None:
        """Map to the GUI backend of the same name, if there is one."""
        if not self.is_supported:
            return None
        return BackendName(self.value)


@dataclass(frozen=True)
class Options:
    """
    A single "run this elsewhere" request.

    Attributes:
        terminal: Explicit backend name as typed by the caller (validated later)
        target: Explicit target kind, or None for the backend's default
        direction: Explicit split direction, or None for the default
        strict: Forbid degrading the target (the CLI's --no)
        auto_select: Pick the first viable backend without asking
        interactive: Always ask the chooser, even with one viable backend
        dry_run: Print the plan instead of executing it
    """

    terminal: str | None = None
    target: Target | None = None
    direction: Direction | None = None
    strict: bool = False
    auto_select: bool = False
    interactive: bool = False
    dry_run: bool = False

    def with_selection(self, backend: BackendName, target: Target | None) -> "Options":
        """Return options that force a chooser's selection as an explicit override."""
        return replace(
            self,
            terminal=backend.value,
            target=target if target is not None else self.target,
            interactive=False,
        )


__all__ = [
    "BackendName",
    "DEFAULT_DIRECTION",
    "Direction",
    "HostOS",
    "Options",
    "Target",
    "TerminalProgram",
]
