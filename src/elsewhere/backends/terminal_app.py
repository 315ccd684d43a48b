"""
Terminal.app backend (AppleScript).

Terminal.app has no reliable way to open a tab from AppleScript: `do script`
either opens a new window or, with `in window 1`, reuses the current tab.
Tabs are therefore not declared and tab requests degrade to a window.
"""

from __future__ import annotations

from ..environment import Environment
from ..models import BackendName, Direction, Target
from ..utils import escape_for_applescript, osascript_command, truncate_for_description
from .base import BackendDescriptor, Capabilities, DryRunInfo

CAPABILITIES = Capabilities(pane=False, tab=False, window=True)


def is_available(env: Environment) -> bool:
    return env.is_macos and env.is_gui_installed(BackendName.TERMINAL)


def build_script(command: str) -> str:
    return (
        'tell application "Terminal"\n'
        "  activate\n"
        f'  do script "{escape_for_applescript(command)}"\n'
        "end tell"
    )


def dry_run_info(target: Target, command: str, direction: Direction | None = None) -> DryRunInfo:
    return DryRunInfo(
        exact_command=osascript_command(build_script(command)),
        description=f'Terminal.app window: "{truncate_for_description(command)}"',
    )


DESCRIPTOR = BackendDescriptor(
    name=BackendName.TERMINAL,
    display_name="Terminal.app",
    capabilities=CAPABILITIES,
    is_available=is_available,
    dry_run_info=dry_run_info,
)
