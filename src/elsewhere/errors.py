"""
Error taxonomy and exit codes for elsewhere.

Every failure the planner can produce maps onto one ErrorCategory and one
ExitCode. The numeric values follow sysexits.h so that wrapping scripts can
tell categories apart.
"""

from __future__ import annotations

from enum import Enum, IntEnum


class ExitCode(IntEnum):
    """Process exit statuses used by the CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    USAGE_ERROR = 64
    SOFTWARE_ERROR = 70
    ENVIRONMENT_INFEASIBLE = 73
    NO_VIABLE_BACKEND = 75


class ErrorCategory(str, Enum):
    """Why a plan could not be produced (or executed)."""

    USAGE = "usage"
    CAPABILITY = "capability"
    AVAILABILITY = "availability"
    NO_VIABLE_BACKEND = "no-viable-backend"
    ENVIRONMENT_INFEASIBLE = "environment-infeasible"
    INTERNAL = "internal"
    EXECUTION = "execution"
    CANCELLED = "cancelled"


ERROR_MESSAGES = {
    "no_command": "No command provided. Use -c, --, or stdin.",
    "remote_no_multiplexer": (
        "Remote session detected and not inside tmux or zellij; "
        "cannot open a GUI terminal."
    ),
    "no_supported_terminal": "No supported terminal available.",
}


# Recovery hints keyed by category, surfaced by the CLI and the MCP server
HINTS = {
    ErrorCategory.USAGE: "Run `elsewhere --help` for usage.",
    ErrorCategory.CAPABILITY: (
        "Request a different target (--pane, --tab, --window) or drop --no "
        "to allow degrading to a supported one."
    ),
    ErrorCategory.AVAILABILITY: (
        "Omit --terminal to auto-select, or start the requested terminal first "
        "(multiplexers must be running a session)."
    ),
    ErrorCategory.NO_VIABLE_BACKEND: (
        "Run inside tmux or zellij, or install a supported GUI terminal "
        "(Terminal.app, iTerm2, kitty, Ghostty, Warp)."
    ),
    ErrorCategory.ENVIRONMENT_INFEASIBLE: (
        "Start tmux or zellij on the remote host and run elsewhere from inside it."
    ),
}


class ElsewhereError(Exception):
    """Base class for planning and execution failures."""

    category: ErrorCategory = ErrorCategory.INTERNAL
    exit_code: ExitCode = ExitCode.SOFTWARE_ERROR

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint if hint is not None else HINTS.get(self.category)


class UsageError(ElsewhereError):
    """Bad input: missing command, unknown backend, conflicting flags."""

    category = ErrorCategory.USAGE
    exit_code = ExitCode.USAGE_ERROR


class CapabilityError(ElsewhereError):
    """The backend cannot provide the requested target, even after degrading."""

    category = ErrorCategory.CAPABILITY
    exit_code = ExitCode.SOFTWARE_ERROR


class InternalCapabilityError(CapabilityError):
    """A backend declares no target kinds at all. Indicates a broken table."""

    category = ErrorCategory.INTERNAL


class BackendUnavailableError(ElsewhereError):
    """An explicitly requested backend is not viable in this context."""

    category = ErrorCategory.AVAILABILITY
    exit_code = ExitCode.SOFTWARE_ERROR


class NoViableBackendError(ElsewhereError):
    category = ErrorCategory.NO_VIABLE_BACKEND
    exit_code = ExitCode.NO_VIABLE_BACKEND


class EnvironmentInfeasibleError(ElsewhereError):
    """Remote session without a multiplexer: GUI automation would be unsafe."""

    category = ErrorCategory.ENVIRONMENT_INFEASIBLE
    exit_code = ExitCode.ENVIRONMENT_INFEASIBLE


class SelectionCancelled(ElsewhereError):
    """The interactive chooser was dismissed without a selection."""

    category = ErrorCategory.CANCELLED
    exit_code = ExitCode.GENERIC_ERROR


class ExecutionError(ElsewhereError):
    """Raised when a backend's automation command fails."""

    category = ErrorCategory.EXECUTION
    exit_code = ExitCode.GENERIC_ERROR

    def __init__(
        self,
        message: str,
        *,
        backend: str | None = None,
        target: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.backend = backend
        self.target = target


def error_response(
    message: str,
    hint: str | None = None,
    **extra_fields,
) -> dict:
    """
    Create a standardized error response with optional recovery hint.

    Args:
        message: The error message describing what went wrong
        hint: Actionable instructions for recovery (optional)
        **extra_fields: Additional fields to include in the response

    Returns:
        Dict with 'error', optional 'hint', and any extra fields
    """
    result = {"error": message}
    if hint:
        result["hint"] = hint
    result.update(extra_fields)
    return result


__all__ = [
    "BackendUnavailableError",
    "CapabilityError",
    "ERROR_MESSAGES",
    "ElsewhereError",
    "EnvironmentInfeasibleError",
    "ErrorCategory",
    "ExecutionError",
    "ExitCode",
    "HINTS",
    "InternalCapabilityError",
    "NoViableBackendError",
    "SelectionCancelled",
    "UsageError",
    "error_response",
]
