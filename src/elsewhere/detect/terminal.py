"""
Terminal emulator identification.

Two different questions are answered here:

- detect_current_terminal(): which terminal program is hosting *this*
  process (used for menu hints and for the warning shown when an
  editor-embedded terminal hands the command to a GUI terminal).
- detect_host_terminal(): which GUI terminal is hosting the surrounding
  multiplexer session, so a multiplexer "window" request can open a real
  window in it. The hints come from variables captured when the multiplexer
  server started, so they can be stale or missing.
"""

from __future__ import annotations

import logging
import os
from typing import Callable, Mapping, Optional

from ..models import BackendName, TerminalProgram
from .process_tree import match_terminal_name, walk_process_tree

logger = logging.getLogger("elsewhere.detect")

_TERM_PROGRAM_VALUES = {
    "iterm.app": TerminalProgram.ITERM2,
    "apple_terminal": TerminalProgram.TERMINAL,
    "vscode": TerminalProgram.VSCODE,
    "cursor": TerminalProgram.CURSOR,
    "kitty": TerminalProgram.KITTY,
    "ghostty": TerminalProgram.GHOSTTY,
    "warp": TerminalProgram.WARP,
    "warpterminal": TerminalProgram.WARP,
}

BUNDLE_IDENTIFIERS = {
    "com.apple.terminal": BackendName.TERMINAL,
    "com.googlecode.iterm2": BackendName.ITERM2,
    "net.kovidgoyal.kitty": BackendName.KITTY,
    "com.mitchellh.ghostty": BackendName.GHOSTTY,
    "dev.warp.warp-stable": BackendName.WARP,
}

ProcessWalker = Callable[[], Optional[TerminalProgram]]


def walk_from_parent() -> TerminalProgram | None:
    return walk_process_tree(os.getppid())


def map_term_program(value: str) -> TerminalProgram:
    """Map a $TERM_PROGRAM value (case-insensitive) to a terminal."""
    return _TERM_PROGRAM_VALUES.get(value.strip().lower(), TerminalProgram.UNKNOWN)


def detect_current_terminal(
    env: Mapping[str, str] | None = None,
    *,
    walk: ProcessWalker | None = walk_from_parent,
) -> TerminalProgram:
    """
    Identify the terminal program running this process.

    Checks, in order: $TERM_PROGRAM, $LC_TERMINAL, then a parent-process walk.
    Pass walk=None to skip the process walk.
    """
    environ = os.environ if env is None else env

    term_program = environ.get("TERM_PROGRAM")
    if term_program:
        return map_term_program(term_program)

    lc_terminal = environ.get("LC_TERMINAL")
    if lc_terminal:
        return match_terminal_name(lc_terminal) or TerminalProgram.UNKNOWN

    if walk is not None:
        found = walk()
        if found is not None:
            return found

    return TerminalProgram.UNKNOWN


def detect_host_terminal(env: Mapping[str, str] | None = None) -> BackendName | None:
    """
    Identify the GUI terminal hosting the multiplexer session.

    Returns:
        The backend name, or None when there is no usable hint. A miss is
        expected (Linux, stale server environment) and is not an error.
    """
    environ = os.environ if env is None else env

    lc_terminal = environ.get("LC_TERMINAL")
    if lc_terminal:
        program = match_terminal_name(lc_terminal)
        if program is not None and program.as_backend() is not None:
            return program.as_backend()

    bundle_id = environ.get("__CFBundleIdentifier")
    if bundle_id:
        backend = BUNDLE_IDENTIFIERS.get(bundle_id.strip().lower())
        if backend is not None:
            return backend
        logger.debug("Unrecognized host bundle identifier: %s", bundle_id)

    return None


__all__ = [
    "BUNDLE_IDENTIFIERS",
    "detect_current_terminal",
    "detect_host_terminal",
    "map_term_program",
    "walk_from_parent",
]
