"""
Environment probe.

detect_environment() captures one immutable Environment snapshot per
invocation. Every probe reads from an injected mapping and injected helpers
so tests can describe a machine without touching the real one.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path
from typing import Mapping

from ..backends import GUI_TERMINALS
from ..environment import Environment, MultiplexerState
from ..models import HostOS
from .apps import Which, is_app_installed, is_binary_available
from .process_tree import walk_process_tree
from .remote import is_remote_session
from .terminal import (
    ProcessWalker,
    detect_current_terminal,
    detect_host_terminal,
    walk_from_parent,
)

logger = logging.getLogger("elsewhere.detect")


def detect_host_os(platform: str | None = None) -> HostOS:
    return HostOS.MACOS if (platform or sys.platform) == "darwin" else HostOS.OTHER


def detect_environment(
    env: Mapping[str, str] | None = None,
    *,
    platform: str | None = None,
    which: Which = shutil.which,
    home: Path | None = None,
    walk: ProcessWalker | None = walk_from_parent,
) -> Environment:
    """
    Capture the current process context.

    Args:
        env: Environment variables (defaults to os.environ)
        platform: sys.platform override
        which: PATH lookup used for tmux, zellij and kitty
        home: Home directory for ~/Applications lookups
        walk: Parent-process walker (None skips the walk)

    Returns:
        Environment snapshot for one planning pass
    """
    environ = os.environ if env is None else env
    host_os = detect_host_os(platform)
    is_macos = host_os is HostOS.MACOS

    snapshot = Environment(
        tmux=MultiplexerState(
            inside=bool(environ.get("TMUX")),
            available=is_binary_available("tmux", which=which),
        ),
        zellij=MultiplexerState(
            inside=bool(environ.get("ZELLIJ")),
            available=is_binary_available("zellij", which=which),
        ),
        is_remote=is_remote_session(environ),
        host_os=host_os,
        gui_installed={
            name: is_app_installed(name, is_macos=is_macos, which=which, home=home)
            for name in GUI_TERMINALS
        },
        current_terminal=detect_current_terminal(environ, walk=walk),
        host_terminal=detect_host_terminal(environ),
    )
    logger.debug("Detected environment: %s", snapshot.to_dict())
    return snapshot


__all__ = [
    "detect_current_terminal",
    "detect_environment",
    "detect_host_os",
    "detect_host_terminal",
    "is_app_installed",
    "is_remote_session",
    "walk_process_tree",
]
