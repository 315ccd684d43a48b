"""Shared fixtures: synthetic environment snapshots."""

from __future__ import annotations

from pathlib import Path

import pytest

from elsewhere import config as config_module
from elsewhere.environment import Environment, MultiplexerState
from elsewhere.models import BackendName, HostOS, TerminalProgram

ALL_GUI = {
    BackendName.TERMINAL: True,
    BackendName.ITERM2: True,
    BackendName.KITTY: True,
    BackendName.GHOSTTY: True,
    BackendName.WARP: True,
}


def make_env(
    *,
    tmux: bool = False,
    zellij: bool = False,
    remote: bool = False,
    macos: bool = False,
    gui: dict | None = None,
    current_terminal: TerminalProgram = TerminalProgram.UNKNOWN,
    host_terminal: BackendName | None = None,
) -> Environment:
    """Build an Environment; `tmux=True` means inside a session with the binary present."""
    return Environment(
        tmux=MultiplexerState(inside=tmux, available=tmux),
        zellij=MultiplexerState(inside=zellij, available=zellij),
        is_remote=remote,
        host_os=HostOS.MACOS if macos else HostOS.OTHER,
        gui_installed=gui or {},
        current_terminal=current_terminal,
        host_terminal=host_terminal,
    )


@pytest.fixture
def mac_env() -> Environment:
    """Local macOS desktop with every GUI terminal installed, no multiplexer."""
    return make_env(macos=True, gui=ALL_GUI)


@pytest.fixture
def tmux_env() -> Environment:
    """Local Linux box inside a tmux session."""
    return make_env(tmux=True)


@pytest.fixture(autouse=True)
def config_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config path to a temp location for deterministic tests."""
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_PATH", path)
    monkeypatch.delenv("ELSEWHERE_TERMINAL", raising=False)
    return path
