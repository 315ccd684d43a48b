"""
Quoting helpers for the command strings handed to backends.
"""

from __future__ import annotations

import shlex


def escape_for_applescript(text: str) -> str:
    """Escape a string for an AppleScript double-quoted literal."""
    # Backslashes first, otherwise the quote escapes get doubled.
    return text.replace("\\", "\\\\").replace('"', '\\"')


def escape_for_shell(text: str) -> str:
    """
    Escape a string for a POSIX shell double-quoted argument.

    Escapes backslash, double quote, dollar sign and backtick so the command
    reaches the backend literally instead of being expanded by our shell.

    Examples:
        >>> escape_for_shell('echo "$HOME"')
        'echo \\\\"\\\\$HOME\\\\"'
    """
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("$", "\\$")
        .replace("`", "\\`")
    )


def osascript_command(script: str) -> str:
    """Build the `osascript -e '...'` shell command for an AppleScript program."""
    return f"osascript -e {shlex.quote(script)}"


def truncate_for_description(command: str, max_length: int = 60) -> str:
    """Shorten long commands for human-readable plan descriptions."""
    if len(command) <= max_length:
        return command
    return command[: max_length - 3] + "..."


__all__ = [
    "escape_for_applescript",
    "escape_for_shell",
    "osascript_command",
    "truncate_for_description",
]
