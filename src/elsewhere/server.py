"""
Elsewhere MCP Server

FastMCP-based server that lets agent tooling plan and open a new terminal
pane, tab, or window for a command.
"""

import logging

from mcp.server.fastmcp import FastMCP

from .backends import BACKENDS
from .config import apply_config, config_path
from .detect import detect_environment
from .errors import ElsewhereError, ErrorCategory, HINTS, error_response
from .executor import execute_plan
from .models import Direction, Options, Target
from .planner import create_plan, viable_backends

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("elsewhere-mcp")


# =============================================================================
# Argument Helpers
# =============================================================================


def _parse_choice(enum_cls, value: str | None, name: str):
    """Parse an optional enum argument, returning (member, error_dict)."""
    if value is None or value == "":
        return None, None
    try:
        return enum_cls(value.strip().lower()), None
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        return None, error_response(
            f"Invalid {name}: {value!r}",
            hint=f"Use one of: {valid}",
        )


def _build_options(
    terminal: str | None,
    target: str | None,
    direction: str | None,
    strict: bool,
    *,
    dry_run: bool,
) -> tuple[Options | None, dict | None]:
    parsed_target, err = _parse_choice(Target, target, "target")
    if err:
        return None, err
    parsed_direction, err = _parse_choice(Direction, direction, "direction")
    if err:
        return None, err

    # No one can answer a chooser prompt over stdio, so always auto-select.
    options = Options(
        terminal=terminal or None,
        target=parsed_target,
        direction=parsed_direction,
        strict=strict,
        auto_select=True,
        dry_run=dry_run,
    )
    return apply_config(options), None


# =============================================================================
# FastMCP Server
# =============================================================================

mcp = FastMCP("Elsewhere")


@mcp.tool()
async def plan_command(
    command: str,
    terminal: str | None = None,
    target: str | None = None,
    direction: str | None = None,
    strict: bool = False,
) -> dict:
    """
    Plan where a command would run, without running it.

    Args:
        command: Shell command to run in the new surface
        terminal: Backend to force: tmux, zellij, Terminal, iTerm2, kitty,
            Ghostty, or Warp. Omit to auto-select.
        target: "pane", "tab", or "window". Omit for the backend's default.
        direction: Pane split direction: "left", "right", "up", or "down"
        strict: If True, fail instead of degrading to a different target

    Returns:
        The plan dict (backend, target, exact_command, description, warnings,
        ...), or an error dict with "error", "hint", "category", "exit_code".
    """
    options, err = _build_options(terminal, target, direction, strict, dry_run=True)
    if err:
        return err

    plan = create_plan(command, options, detect_environment())
    return plan.to_dict()


@mcp.tool()
async def run_command(
    command: str,
    terminal: str | None = None,
    target: str | None = None,
    direction: str | None = None,
    strict: bool = False,
) -> dict:
    """
    Run a command in a new terminal pane, tab, or window.

    Plans exactly like plan_command (auto-selecting the first viable
    backend) and then executes the plan.

    Args:
        command: Shell command to run in the new surface
        terminal: Backend to force (see plan_command)
        target: "pane", "tab", or "window"
        direction: Pane split direction
        strict: If True, fail instead of degrading to a different target

    Returns:
        The executed plan dict with "executed": True, or an error dict.
    """
    options, err = _build_options(terminal, target, direction, strict, dry_run=False)
    if err:
        return err

    env = detect_environment()
    plan = create_plan(command, options, env)
    if not plan.ok:
        return error_response(
            plan.message,
            hint=plan.hint,
            category=plan.category.value,
            exit_code=int(plan.exit_code),
        )

    try:
        await execute_plan(plan, env)
    except ElsewhereError as exc:
        logger.error("Execution failed: %s", exc.message)
        return error_response(
            exc.message,
            hint=exc.hint,
            category=exc.category.value,
            exit_code=int(exc.exit_code),
            backend=getattr(exc, "backend", None),
            target=getattr(exc, "target", None),
        )

    logger.info("Ran command via %s (%s)", plan.executing_backend.value, plan.target.value)
    result = plan.to_dict()
    result["executed"] = True
    return result


@mcp.tool()
async def describe_environment() -> dict:
    """
    Describe the detected terminal environment.

    Returns:
        Dict with:
            - environment: The detected snapshot (multiplexers, remote, OS,
              installed GUI terminals, current and host terminal)
            - viable_backends: Backends usable right now, in priority order
            - backends: Capabilities of every known backend
            - config_path: Location of the config file
    """
    env = detect_environment()
    viable = viable_backends(env)
    result = {
        "environment": env.to_dict(),
        "viable_backends": [d.name.value for d in viable],
        "backends": {
            name.value: {
                "targets": [t.value for t in d.capabilities.targets()],
                "directions": sorted(dr.value for dr in d.capabilities.directions),
                "experimental": d.capabilities.experimental,
            }
            for name, d in BACKENDS.items()
        },
        "config_path": str(config_path()),
    }
    if not viable:
        category = (
            ErrorCategory.ENVIRONMENT_INFEASIBLE
            if env.is_remote
            else ErrorCategory.NO_VIABLE_BACKEND
        )
        result["hint"] = HINTS[category]
    return result


def run_server():
    """Run the MCP server with stdio transport."""
    logger.info("Starting Elsewhere MCP Server...")
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
