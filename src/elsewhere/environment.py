"""
Environment snapshot consumed by the planner.

The snapshot is captured once per invocation (see elsewhere.detect) and then
threaded explicitly through planning. Nothing in the planner reads
os.environ directly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .models import BackendName, HostOS, TerminalProgram


@dataclass(frozen=True)
class MultiplexerState:
    """Whether we run inside a multiplexer session and whether its binary exists."""

    inside: bool = False
    available: bool = False

    @property
    def usable(self) -> bool:
        return self.inside and self.available


@dataclass(frozen=True)
class Environment:
    """
    Immutable description of the current process context.

    Attributes:
        tmux: tmux session/binary state
        zellij: zellij session/binary state
        is_remote: True for SSH/Mosh sessions
        host_os: macOS or anything else
        gui_installed: Which GUI terminals are installed, keyed by backend
        current_terminal: Terminal program hosting this process (best effort)
        host_terminal: GUI terminal hosting the multiplexer session, if known
    """

    tmux: MultiplexerState = field(default_factory=MultiplexerState)
    zellij: MultiplexerState = field(default_factory=MultiplexerState)
    is_remote: bool = False
    host_os: HostOS = HostOS.OTHER
    gui_installed: Mapping[BackendName, bool] = field(default_factory=dict)
    current_terminal: TerminalProgram = TerminalProgram.UNKNOWN
    host_terminal: BackendName | None = None

    def __post_init__(self) -> None:
        # Freeze the mapping so the snapshot stays read-only for the whole pass.
        object.__setattr__(
            self, "gui_installed", MappingProxyType(dict(self.gui_installed))
        )

    @property
    def is_macos(self) -> bool:
        return self.host_os is HostOS.MACOS

    @property
    def inside_multiplexer(self) -> bool:
        return self.tmux.inside or self.zellij.inside

    def is_gui_installed(self, name: BackendName) -> bool:
        return bool(self.gui_installed.get(name, False))

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary (dry-run and MCP output)."""
        return {
            "tmux": {"inside": self.tmux.inside, "available": self.tmux.available},
            "zellij": {"inside": self.zellij.inside, "available": self.zellij.available},
            "is_remote": self.is_remote,
            "host_os": self.host_os.value,
            "gui_installed": {
                name.value: installed for name, installed in self.gui_installed.items()
            },
            "current_terminal": self.current_terminal.value,
            "host_terminal": self.host_terminal.value if self.host_terminal else None,
        }


__all__ = ["Environment", "MultiplexerState"]
