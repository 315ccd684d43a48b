"""
Shared utilities for elsewhere backends.
"""

from .escape import (
    escape_for_applescript,
    escape_for_shell,
    osascript_command,
    truncate_for_description,
)

__all__ = [
    "escape_for_applescript",
    "escape_for_shell",
    "osascript_command",
    "truncate_for_description",
]
