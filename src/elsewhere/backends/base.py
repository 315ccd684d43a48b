"""
Backend descriptor types.

A backend is data, not a subclass: a BackendDescriptor bundles the static
capability table entry with two plain functions, an availability predicate
and a dry-run describer. The planner only ever talks to descriptors.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..environment import Environment
from ..models import BackendName, Direction, Target


@dataclass(frozen=True)
class Capabilities:
    """
    What a backend can open.

    Attributes:
        pane: Can split the current view (multiplexers only)
        tab: Can open a new tab
        window: Can open a new window
        directions: Split directions accepted for pane targets
        experimental: Automation relies on keystroke simulation and may fail
            silently or need extra permissions
    """

    pane: bool
    tab: bool
    window: bool
    directions: frozenset[Direction] = frozenset()
    experimental: bool = False

    def supports(self, target: Target) -> bool:
        if target is Target.PANE:
            return self.pane
        if target is Target.TAB:
            return self.tab
        return self.window

    def targets(self) -> tuple[Target, ...]:
        """Supported targets, most contained first."""
        return tuple(t for t in (Target.PANE, Target.TAB, Target.WINDOW) if self.supports(t))


ALL_DIRECTIONS = frozenset(Direction)


@dataclass(frozen=True)
class DryRunInfo:
    """
    What an executor would do for a (target, command, direction) request.

    Attributes:
        exact_command: The literal shell command the executor runs
        description: Human-readable summary
        requires_permissions: True when macOS Accessibility access is needed
    """

    exact_command: str
    description: str
    requires_permissions: bool = False


AvailabilityCheck = Callable[[Environment], bool]
DryRunDescriber = Callable[[Target, str, Optional[Direction]], DryRunInfo]


@dataclass(frozen=True)
class BackendDescriptor:
    """Static description of one backend."""

    name: BackendName
    display_name: str
    capabilities: Capabilities
    is_available: AvailabilityCheck
    dry_run_info: DryRunDescriber
    multiplexer: bool = False

    def __post_init__(self) -> None:
        caps = self.capabilities
        if not (caps.pane or caps.tab or caps.window):
            raise ValueError(
                f"Backend {self.name} declares no pane, tab, or window capability"
            )
        if caps.pane and not caps.directions:
            raise ValueError(f"Backend {self.name} supports panes but no directions")


__all__ = [
    "ALL_DIRECTIONS",
    "BackendDescriptor",
    "Capabilities",
    "DryRunInfo",
]
