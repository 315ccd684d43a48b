"""
zellij backend.

Opens a pane (`new-pane --direction`) or a tab (`new-tab`), then types the
command with `write-chars` and presses Enter (`write 13`), which mirrors
tmux's send-keys and keeps the command in shell history.

Direction mapping is one-to-one (left/right/up/down -> Left/Right/Up/Down),
defaulting to Right. zellij itself currently opens up/down below and
left/right to the right (zellij-org/zellij#3332); we pass the requested
direction through unchanged.
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

ZELLIJ_DIRECTIONS: dict[Direction, str] = {
    Direction.LEFT: "Left",
    Direction.RIGHT: "Right",
    Direction.UP: "Up",
    Direction.DOWN: "Down",
}

ENTER = "13"


def is_available(env: Environment) -> bool:
    return env.zellij.usable


def write_command(command: str) -> str:
    return (
        f'zellij action write-chars "{escape_for_shell(command)}"'
        f" && zellij action write {ENTER}"
    )


def build_command(target: Target, command: str, direction: Direction | None = None) -> str:
    if target is Target.PANE:
        zellij_direction = ZELLIJ_DIRECTIONS[direction or DEFAULT_DIRECTION]
        opener = f'zellij action new-pane --direction "{zellij_direction}"'
    else:
        opener = "zellij action new-tab"
    return f"{opener} && {write_command(command)}"


def dry_run_info(target: Target, command: str, direction: Direction | None = None) -> DryRunInfo:
    short = truncate_for_description(command)
    if target is Target.PANE:
        label = f"zellij pane ({direction or DEFAULT_DIRECTION})"
    elif target is Target.TAB:
        label = "zellij tab"
    else:
        label = "zellij tab (host terminal not detected)"
    return DryRunInfo(
        exact_command=build_command(target, command, direction),
        description=f'{label}: "{short}"',
    )


DESCRIPTOR = BackendDescriptor(
    name=BackendName.ZELLIJ,
    display_name="zellij",
    capabilities=CAPABILITIES,
    is_available=is_available,
    dry_run_info=dry_run_info,
    multiplexer=True,
)
