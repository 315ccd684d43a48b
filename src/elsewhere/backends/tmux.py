"""
tmux backend.

Panes come from `split-window`, tabs map onto a new tmux window. A "window"
request is normally delegated by the planner to the GUI terminal hosting the
session; when that terminal is unknown it falls back to a new tmux window too.
The command text is typed with `send-keys` so it lands in shell history.
"""

from __future__ import annotations

from ..environment import Environment
from ..models import BackendName, Direction, Target, DEFAULT_DIRECTION
from ..utils import escape_for_shell, truncate_for_description
from .base import ALL_DIRECTIONS, BackendDescriptor, Capabilities, DryRunInfo

CAPABILITIES = Capabilities(
    pane=True,
    tab=True,
    window=True,
    directions=ALL_DIRECTIONS,
)

# -h splits left/right, -v splits top/bottom, -b places the new pane before.
SPLIT_FLAGS: dict[Direction, str] = {
    Direction.LEFT: "-h -b",
    Direction.RIGHT: "-h",
    Direction.UP: "-v -b",
    Direction.DOWN: "-v",
}


def is_available(env: Environment) -> bool:
    """tmux is usable only from inside a tmux session with the binary on PATH."""
    return env.tmux.usable


def send_keys(command: str) -> str:
    return f'tmux send-keys "{escape_for_shell(command)}" Enter'


def build_command(target: Target, command: str, direction: Direction | None = None) -> str:
    """Return the shell command that opens the surface and types `command` into it."""
    if target is Target.PANE:
        flags = SPLIT_FLAGS[direction or DEFAULT_DIRECTION]
        return f"tmux split-window {flags} && {send_keys(command)}"
    return f"tmux new-window && {send_keys(command)}"


def dry_run_info(target: Target, command: str, direction: Direction | None = None) -> DryRunInfo:
    short = truncate_for_description(command)
    if target is Target.PANE:
        label = f"tmux pane ({direction or DEFAULT_DIRECTION})"
    elif target is Target.TAB:
        label = "tmux window (tab)"
    else:
        label = "tmux window (host terminal not detected)"
    return DryRunInfo(
        exact_command=build_command(target, command, direction),
        description=f'{label}: "{short}"',
    )


DESCRIPTOR = BackendDescriptor(
    name=BackendName.TMUX,
    display_name="tmux",
    capabilities=CAPABILITIES,
    is_available=is_available,
    dry_run_info=dry_run_info,
    multiplexer=True,
)
