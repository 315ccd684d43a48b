"""
System Events keystroke automation shared by Ghostty and Warp.

Neither app exposes a scripting dictionary, so we activate the app, press the
new-tab/new-window shortcut, type the command and press Return. This needs
Accessibility permission for the calling terminal and can fail silently if
focus moves while the keys are sent.
"""

from __future__ import annotations

from ..models import Target
from ..utils import escape_for_applescript, osascript_command

# Cmd+T / Cmd+N
SHORTCUT_KEYS: dict[Target, str] = {
    Target.TAB: "t",
    Target.WINDOW: "n",
}

RETURN_KEY_CODE = 36


def build_script(app_name: str, target: Target, command: str) -> str:
    key = SHORTCUT_KEYS.get(target, "n")
    return (
        f'tell application "{app_name}"\n'
        "  activate\n"
        "end tell\n"
        "delay 0.2\n"
        'tell application "System Events"\n'
        f'  keystroke "{key}" using command down\n'
        "end tell\n"
        "delay 0.1\n"
        'tell application "System Events"\n'
        f'  keystroke "{escape_for_applescript(command)}"\n'
        f"  key code {RETURN_KEY_CODE}\n"
        "end tell"
    )


def build_command(app_name: str, target: Target, command: str) -> str:
    return osascript_command(build_script(app_name, target, command))


__all__ = ["build_command", "build_script", "SHORTCUT_KEYS"]
