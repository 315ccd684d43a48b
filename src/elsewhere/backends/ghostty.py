"""
Ghostty backend (experimental).

Ghostty has no public automation API yet, so this drives it through System
Events keystrokes. See ghostty-org/ghostty discussion #2353.
"""

from __future__ import annotations

from ..environment import Environment
from ..models import BackendName, Direction, Target
from ..utils import truncate_for_description
from . import keystroke
from .base import BackendDescriptor, Capabilities, DryRunInfo

APP_NAME = "Ghostty"

CAPABILITIES = Capabilities(pane=False, tab=True, window=True, experimental=True)


def is_available(env: Environment) -> bool:
    return env.is_macos and env.is_gui_installed(BackendName.GHOSTTY)


def dry_run_info(target: Target, command: str, direction: Direction | None = None) -> DryRunInfo:
    kind = Target.TAB if target is Target.TAB else Target.WINDOW
    return DryRunInfo(
        exact_command=keystroke.build_command(APP_NAME, kind, command),
        description=(
            f"Ghostty {kind} (experimental, requires Accessibility permissions): "
            f'"{truncate_for_description(command)}"'
        ),
        requires_permissions=True,
    )


DESCRIPTOR = BackendDescriptor(
    name=BackendName.GHOSTTY,
    display_name="Ghostty",
    capabilities=CAPABILITIES,
    is_available=is_available,
    dry_run_info=dry_run_info,
)
