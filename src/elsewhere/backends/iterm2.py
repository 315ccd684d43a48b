"""
iTerm2 backend (AppleScript).

Splitting panes through AppleScript needs the session layout of the front
window, so only tabs and windows are offered.
"""

from __future__ import annotations

from ..environment import Environment
from ..models import BackendName, Direction, Target
from ..utils import escape_for_applescript, osascript_command, truncate_for_description
from .base import BackendDescriptor, Capabilities, DryRunInfo

CAPABILITIES = Capabilities(pane=False, tab=True, window=True)


def is_available(env: Environment) -> bool:
    return env.is_macos and env.is_gui_installed(BackendName.ITERM2)


def build_script(target: Target, command: str) -> str:
    if target is Target.TAB:
        # Fall back to a window when iTerm2 has none open to add a tab to.
        opener = (
            "  if (count of windows) = 0 then\n"
            "    create window with default profile\n"
            "  else\n"
            "    tell current window to create tab with default profile\n"
            "  end if\n"
        )
    else:
        opener = "  create window with default profile\n"
    return (
        'tell application "iTerm"\n'
        "  activate\n"
        f"{opener}"
        "  tell current session of current window\n"
        f'    write text "{escape_for_applescript(command)}"\n'
        "  end tell\n"
        "end tell"
    )


def dry_run_info(target: Target, command: str, direction: Direction | None = None) -> DryRunInfo:
    kind = Target.TAB if target is Target.TAB else Target.WINDOW
    return DryRunInfo(
        exact_command=osascript_command(build_script(kind, command)),
        description=f'iTerm2 {kind}: "{truncate_for_description(command)}"',
    )


DESCRIPTOR = BackendDescriptor(
    name=BackendName.ITERM2,
    display_name="iTerm2",
    capabilities=CAPABILITIES,
    is_available=is_available,
    dry_run_info=dry_run_info,
)
