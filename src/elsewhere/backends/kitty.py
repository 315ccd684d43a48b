"""
kitty backend (remote control).

Uses `kitty @ launch`, which requires `allow_remote_control` in kitty.conf.
The command runs under `$SHELL -c` followed by `exec $SHELL`, so the new tab
or OS window stays open on an interactive shell once the command finishes.
"""

from __future__ import annotations

from ..environment import Environment
from ..models import BackendName, Direction, Target
from ..utils import escape_for_shell, truncate_for_description
from .base import BackendDescriptor, Capabilities, DryRunInfo

CAPABILITIES = Capabilities(pane=False, tab=True, window=True)

WINDOW_TITLE = "Elsewhere"

LAUNCH_TYPES: dict[Target, str] = {
    Target.TAB: "tab",
    Target.WINDOW: "os-window",
}


def is_available(env: Environment) -> bool:
    # kitty is cross-platform; no macOS requirement.
    return env.is_gui_installed(BackendName.KITTY)


def build_command(target: Target, command: str) -> str:
    launch_type = LAUNCH_TYPES.get(target, "os-window")
    return (
        f'kitty @ launch --type={launch_type} --title "{WINDOW_TITLE}" '
        f'-- $SHELL -c "{escape_for_shell(command)}; exec $SHELL"'
    )


def dry_run_info(target: Target, command: str, direction: Direction | None = None) -> DryRunInfo:
    kind = Target.TAB if target is Target.TAB else Target.WINDOW
    return DryRunInfo(
        exact_command=build_command(kind, command),
        description=f'kitty {kind}: "{truncate_for_description(command)}"',
    )


DESCRIPTOR = BackendDescriptor(
    name=BackendName.KITTY,
    display_name="kitty",
    capabilities=CAPABILITIES,
    is_available=is_available,
    dry_run_info=dry_run_info,
)
