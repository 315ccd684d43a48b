"""
Parent-process walk for terminal detection.

When no environment hint identifies the terminal, walk up from a PID with
`ps` until a known terminal emulator shows up. The walk is bounded and stops
at an sshd boundary (the terminal beyond it is on another machine).
"""

from __future__ import annotations

import logging
import subprocess
from typing import Callable

from ..models import TerminalProgram

logger = logging.getLogger("elsewhere.detect")

MAX_HOPS = 64

# Runs `ps -o <field>= -p <pid>` and returns its stripped stdout.
PsRunner = Callable[[str, int], str]

# Checked in order; the first substring found in the lowercased name wins.
_TERMINAL_NAME_PATTERNS: tuple[tuple[str, TerminalProgram], ...] = (
    ("iterm", TerminalProgram.ITERM2),
    ("ghostty", TerminalProgram.GHOSTTY),
    ("warp", TerminalProgram.WARP),
    ("kitty", TerminalProgram.KITTY),
    ("vscode", TerminalProgram.VSCODE),
    ("code helper", TerminalProgram.VSCODE),
    ("cursor", TerminalProgram.CURSOR),
)

# Terminal.app only matches by its exact executable name; gnome-terminal,
# xfce4-terminal and friends must not.
_TERMINAL_APP_EXECUTABLE = "terminal"


def run_ps(field: str, pid: int) -> str:
    """Query one `ps` field for a PID."""
    result = subprocess.run(
        ["ps", "-o", f"{field}=", "-p", str(pid)],
        check=True,
        capture_output=True,
        text=True,
        timeout=2,
    )
    return result.stdout.strip()


def match_terminal_name(raw: str) -> TerminalProgram | None:
    """Map a process name or LC_TERMINAL value to a terminal, or None if unrecognized."""
    name = raw.strip().lower()
    for needle, terminal in _TERMINAL_NAME_PATTERNS:
        if needle in name:
            return terminal
    if name.rsplit("/", 1)[-1] == _TERMINAL_APP_EXECUTABLE:
        return TerminalProgram.TERMINAL
    return None


def walk_process_tree(
    start_pid: int,
    *,
    max_hops: int = MAX_HOPS,
    ps: PsRunner = run_ps,
) -> TerminalProgram | None:
    """
    Walk parent processes from `start_pid` looking for a terminal emulator.

    Args:
        start_pid: PID to start from (usually our parent)
        max_hops: Upper bound on the number of processes inspected
        ps: Injected `ps` runner (tests pass a fake)

    Returns:
        The matched terminal, or None when the walk hits
        sshd, PID 1, the hop limit, or a `ps` failure.
    """
    pid = start_pid
    for _ in range(max_hops):
        if pid <= 1:
            break
        try:
            comm = ps("comm", pid)
            ppid_text = ps("ppid", pid)
        except (subprocess.SubprocessError, OSError) as exc:
            logger.debug("ps failed for PID %s (%s); stopping walk", pid, exc)
            return None

        terminal = match_terminal_name(comm)
        logger.debug(
            "PID %s: comm=%r -> %s", pid, comm, terminal.value if terminal else "no match"
        )
        if terminal:
            return terminal
        if "sshd" in comm.lower():
            logger.debug("Reached sshd at PID %s; remote session, stopping walk", pid)
            return None

        try:
            ppid = int(ppid_text)
        except ValueError:
            return None
        if ppid == pid:
            return None
        pid = ppid
    return None


__all__ = ["MAX_HOPS", "match_terminal_name", "run_ps", "walk_process_tree"]
