"""
Plan execution.

Every runner hands plan.exact_command to the shell unchanged, so what
--dry-run prints is exactly what runs. Runners differ only in the guards
they apply first and in the hints they attach to failures.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
from typing import Awaitable, Callable

from .environment import Environment
from .errors import ExecutionError
from .models import BackendName
from .plan import Plan, PlanReady

logger = logging.getLogger("elsewhere")

Runner = Callable[[PlanReady, Environment], Awaitable[None]]

EXECUTION_TIMEOUT = 30


async def run_shell(command: str) -> str:
    """Run a shell command line and return its stdout."""

    def _run() -> subprocess.CompletedProcess[str]:
        return subprocess.run(
            command,
            shell=True,
            check=True,
            capture_output=True,
            text=True,
            timeout=EXECUTION_TIMEOUT,
        )

    result = await asyncio.to_thread(_run)
    return result.stdout.strip()


def _failure_detail(exc: Exception) -> str:
    if isinstance(exc, subprocess.CalledProcessError):
        stderr = (exc.stderr or "").strip()
        if stderr:
            return stderr
        return f"exit status {exc.returncode}"
    return str(exc)


async def _run_checked(plan: PlanReady, hint: str | None = None) -> None:
    backend = plan.executing_backend
    logger.debug("Executing via %s: %s", backend.value, plan.exact_command)
    try:
        await run_shell(plan.exact_command)
    except (subprocess.SubprocessError, OSError) as exc:
        raise ExecutionError(
            f"{backend} failed to open a {plan.target}: {_failure_detail(exc)}",
            backend=backend.value,
            target=plan.target.value,
            hint=hint,
        ) from exc


# =============================================================================
# Runners
# =============================================================================


async def _run_multiplexer(plan: PlanReady, env: Environment) -> None:
    await _run_checked(
        plan,
        hint=f"Check that the {plan.executing_backend} session is still running.",
    )


async def _run_applescript(plan: PlanReady, env: Environment) -> None:
    backend = plan.executing_backend
    # Refuse before osascript can raise a permission dialog nobody will see.
    if not env.is_macos:
        raise ExecutionError(
            f"{backend} can only be automated on macOS",
            backend=backend.value,
            target=plan.target.value,
        )
    if env.is_remote and not env.inside_multiplexer:
        raise ExecutionError(
            f"Refusing to automate {backend} from a remote session",
            backend=backend.value,
            target=plan.target.value,
            hint="Run elsewhere inside tmux or zellij on the remote host.",
        )

    if plan.requires_permissions:
        hint = (
            "Grant Accessibility permissions to your terminal in System Settings "
            "> Privacy & Security > Accessibility."
        )
    else:
        hint = (
            f"Allow your terminal to control {backend} in System Settings "
            "> Privacy & Security > Automation."
        )
    await _run_checked(plan, hint=hint)


async def _run_kitty(plan: PlanReady, env: Environment) -> None:
    await _run_checked(
        plan,
        hint="Enable remote control in kitty.conf (allow_remote_control yes).",
    )


RUNNERS: dict[BackendName, Runner] = {
    BackendName.TMUX: _run_multiplexer,
    BackendName.ZELLIJ: _run_multiplexer,
    BackendName.TERMINAL: _run_applescript,
    BackendName.ITERM2: _run_applescript,
    BackendName.KITTY: _run_kitty,
    BackendName.GHOSTTY: _run_applescript,
    BackendName.WARP: _run_applescript,
}


async def execute_plan(plan: Plan, env: Environment) -> None:
    """
    Carry out a ready plan.

    Args:
        plan: Result of create_plan(); must be a PlanReady
        env: The snapshot the plan was made from

    Raises:
        ValueError: If given an error plan
        ExecutionError: If the backend's command fails
    """
    if not plan.ok:
        raise ValueError(f"Cannot execute an error plan: {plan.message}")
    runner = RUNNERS[plan.executing_backend]
    await runner(plan, env)
    logger.info("Opened %s via %s", plan.target.value, plan.executing_backend.value)


__all__ = ["EXECUTION_TIMEOUT", "RUNNERS", "execute_plan", "run_shell"]
