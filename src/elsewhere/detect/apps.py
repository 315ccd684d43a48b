"""Installed-application checks for GUI terminals and multiplexer binaries."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Callable, Optional

from ..models import BackendName

Which = Callable[[str], Optional[str]]

APP_BUNDLES = {
    BackendName.TERMINAL: "Terminal.app",
    BackendName.ITERM2: "iTerm.app",
    BackendName.KITTY: "kitty.app",
    BackendName.GHOSTTY: "Ghostty.app",
    BackendName.WARP: "Warp.app",
}

# Terminal.app moved to /System/Applications/Utilities in Catalina.
_SYSTEM_APP_DIRS = (
    Path("/Applications"),
    Path("/Applications/Utilities"),
    Path("/System/Applications"),
    Path("/System/Applications/Utilities"),
)


def app_search_dirs(home: Path | None = None) -> list[Path]:
    home_dir = home or Path.home()
    return [*_SYSTEM_APP_DIRS, home_dir / "Applications"]


def find_app_bundle(bundle: str, *, home: Path | None = None) -> Path | None:
    for directory in app_search_dirs(home):
        candidate = directory / bundle
        if candidate.is_dir():
            return candidate
    return None


def is_app_installed(
    name: BackendName,
    *,
    is_macos: bool,
    which: Which = shutil.which,
    home: Path | None = None,
) -> bool:
    """
    Check whether a GUI terminal is installed.

    kitty is scriptable on any platform, so a `kitty` binary on PATH counts.
    Everything else is an .app bundle and only exists on macOS.
    """
    if name is BackendName.KITTY and which("kitty"):
        return True
    if not is_macos:
        return False
    bundle = APP_BUNDLES.get(name)
    if bundle is None:
        return False
    return find_app_bundle(bundle, home=home) is not None


def is_binary_available(binary: str, *, which: Which = shutil.which) -> bool:
    return which(binary) is not None


__all__ = [
    "APP_BUNDLES",
    "app_search_dirs",
    "find_app_bundle",
    "is_app_installed",
    "is_binary_available",
]
