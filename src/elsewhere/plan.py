"""
Plan values produced by the planner.

A Plan is either a PlanError (terminal, no side effect implied) or a
PlanReady carrying everything an executor needs, including the exact shell
command it will run. Both are frozen and consumed exactly once, by the
dry-run printer or by the executor.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .errors import ElsewhereError, ErrorCategory, ExitCode
from .models import BackendName, Direction, Target


@dataclass(frozen=True)
class PlanError:
    """A planning failure with its category and process exit code."""

    category: ErrorCategory
    exit_code: ExitCode
    message: str
    hint: str | None = None

    ok = False

    @classmethod
    def from_exception(cls, exc: ElsewhereError) -> "PlanError":
        return cls(
            category=exc.category,
            exit_code=exc.exit_code,
            message=exc.message,
            hint=exc.hint,
        )

    def to_dict(self) -> dict:
        result = {
            "type": "error",
            "category": self.category.value,
            "exit_code": int(self.exit_code),
            "error": self.message,
        }
        if self.hint:
            result["hint"] = self.hint
        return result


@dataclass(frozen=True)
class PlanReady:
    """
    A fully resolved decision, ready to execute.

    Attributes:
        backend: Backend selected by the planner
        command: The user's command, unmodified
        target: Target that will be opened
        requested_target: Target the caller asked for, if any
        degraded: True when target differs from requested_target
        direction: Split direction (pane targets only)
        exact_command: Literal shell command the executor runs
        description: Human-readable summary of the action
        requires_permissions: True when Accessibility access is needed
        experimental: True when the executing backend uses keystroke automation
        delegate: GUI terminal that actually opens a multiplexer "window"
        warnings: Degradation, experimental-backend and host-terminal notes
    """

    backend: BackendName
    command: str
    target: Target
    exact_command: str
    description: str
    requested_target: Target | None = None
    degraded: bool = False
    direction: Direction | None = None
    requires_permissions: bool = False
    experimental: bool = False
    delegate: BackendName | None = None
    warnings: tuple[str, ...] = ()

    ok = True

    @property
    def executing_backend(self) -> BackendName:
        """The backend whose automation actually runs."""
        return self.delegate or self.backend

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary for dry-run output."""
        return {
            "type": self.backend.value,
            "backend": self.backend.value,
            "command": self.command,
            "target": self.target.value,
            "requested_target": self.requested_target.value if self.requested_target else None,
            "degraded": self.degraded,
            "direction": self.direction.value if self.direction else None,
            "delegate": self.delegate.value if self.delegate else None,
            "exact_command": self.exact_command,
            "description": self.description,
            "requires_permissions": self.requires_permissions,
            "experimental": self.experimental,
            "warnings": list(self.warnings),
        }


Plan = Union[PlanReady, PlanError]


__all__ = ["Plan", "PlanError", "PlanReady"]
