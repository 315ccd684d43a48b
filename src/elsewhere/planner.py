"""
Plan synthesis: decide where a command runs without running it.

create_plan() is a pure function of (command, options, environment). Each
stage raises an ElsewhereError on failure, which is converted into a
PlanError at the boundary:

    validate -> enumerate + context filter -> override -> select
             -> resolve target -> resolve direction -> synthesize command

create_plan_interactive() wraps it for callers that can ask the user to pick
a backend; the chooser's answer is treated exactly like an explicit
--terminal override.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Sequence

from .backends import BACKENDS, MULTIPLEXERS, BackendDescriptor, parse_backend_name
from .environment import Environment
from .errors import (
    ERROR_MESSAGES,
    BackendUnavailableError,
    CapabilityError,
    ElsewhereError,
    EnvironmentInfeasibleError,
    NoViableBackendError,
    UsageError,
)
from .models import DEFAULT_DIRECTION, BackendName, Direction, Options, Target
from .plan import Plan, PlanError, PlanReady
from .targets import resolve_target

if TYPE_CHECKING:
    from .interactive import MenuSelection

logger = logging.getLogger("elsewhere")

Chooser = Callable[[Sequence[BackendDescriptor], Environment], Awaitable["MenuSelection"]]


# =============================================================================
# Context viability
# =============================================================================


def viable_backends(env: Environment) -> list[BackendDescriptor]:
    """
    Backends that may be used in this environment, in priority order.

    A remote session outside any multiplexer only admits multiplexers: GUI
    automation over SSH/Mosh would raise permission prompts nobody can see.
    """
    candidates = list(BACKENDS.values())
    if env.is_remote and not env.inside_multiplexer:
        candidates = [d for d in candidates if d.multiplexer]
    return [d for d in candidates if d.is_available(env)]


def _no_backend_error(env: Environment) -> ElsewhereError:
    if env.is_remote and not env.inside_multiplexer:
        return EnvironmentInfeasibleError(ERROR_MESSAGES["remote_no_multiplexer"])
    return NoViableBackendError(ERROR_MESSAGES["no_supported_terminal"])


def _unavailable_message(name: BackendName) -> str:
    if name in MULTIPLEXERS:
        return (
            f"Forced --terminal={name} but {name} is not available "
            f"or not in a {name} session."
        )
    if name is BackendName.KITTY:
        return "Forced --terminal=kitty but kitty is not installed."
    display = BACKENDS[name].display_name
    return f"Forced --terminal={name} but {display} is not available or not on macOS."


# =============================================================================
# Stages
# =============================================================================


def _require_command(command: str | None) -> str:
    if command is None or not command.strip():
        raise UsageError(ERROR_MESSAGES["no_command"])
    return command


def _apply_override(
    raw_name: str,
    env: Environment,
    viable: Sequence[BackendDescriptor],
) -> BackendDescriptor:
    name = parse_backend_name(raw_name)
    for descriptor in viable:
        if descriptor.name is name:
            return descriptor
    # An explicit request never falls back to another backend.
    if env.is_remote and not env.inside_multiplexer and not viable:
        raise EnvironmentInfeasibleError(ERROR_MESSAGES["remote_no_multiplexer"])
    raise BackendUnavailableError(_unavailable_message(name))


def _select_backend(
    options: Options,
    env: Environment,
    viable: Sequence[BackendDescriptor],
) -> BackendDescriptor:
    if options.terminal:
        return _apply_override(options.terminal, env, viable)
    if not viable:
        raise _no_backend_error(env)
    selected = viable[0]
    if len(viable) > 1 and not options.auto_select:
        logger.debug(
            "Several backends viable (%s); picking %s by priority",
            ", ".join(d.name.value for d in viable),
            selected.name.value,
        )
    return selected


def _resolve_direction(
    target: Target,
    options: Options,
    backend: BackendDescriptor,
) -> Direction | None:
    if target is not Target.PANE:
        return None
    direction = options.direction or DEFAULT_DIRECTION
    if direction not in backend.capabilities.directions:
        raise CapabilityError(
            f"{backend.display_name} cannot split panes to the {direction}"
        )
    return direction


def _window_delegate(env: Environment) -> BackendDescriptor | None:
    """
    GUI terminal that hosts the current multiplexer session, when it can open a window.

    The hint is captured when the multiplexer server started and may be stale
    or missing; a miss is not an error.
    """
    if env.host_terminal is None or env.is_remote:
        return None
    delegate = BACKENDS.get(env.host_terminal)
    if delegate is None or delegate.multiplexer:
        return None
    if not delegate.capabilities.window or not delegate.is_available(env):
        return None
    return delegate


def _host_terminal_warning(env: Environment, executing: BackendDescriptor) -> str | None:
    """Note when the command leaves a terminal that cannot be automated."""
    current = env.current_terminal
    if env.inside_multiplexer or executing.multiplexer or current.is_supported:
        return None
    if not current.is_editor_embedded:
        logger.debug("Host terminal not identified; opening %s", executing.display_name)
        return None
    return (
        f"Running inside {current.value}, which cannot be automated; "
        f"opening {executing.display_name} instead"
    )


def _synthesize(command: str | None, options: Options, env: Environment) -> PlanReady:
    command = _require_command(command)
    viable = viable_backends(env)
    backend = _select_backend(options, env, viable)

    resolved = resolve_target(options.target, backend, strict=options.strict)
    direction = _resolve_direction(resolved.target, options, backend)

    executing = backend
    delegate: BackendDescriptor | None = None
    if backend.multiplexer and resolved.target is Target.WINDOW:
        delegate = _window_delegate(env)
        if delegate is not None:
            executing = delegate
        else:
            logger.info(
                "Host terminal for %s not detected; opening another %s window instead",
                backend.name.value,
                backend.name.value,
            )

    info = executing.dry_run_info(resolved.target, command, direction)

    warnings: list[str] = []
    if resolved.warning:
        warnings.append(resolved.warning)
    host_note = _host_terminal_warning(env, executing)
    if host_note:
        warnings.append(host_note)
    if executing.capabilities.experimental:
        warnings.append(
            f"{executing.display_name} support is experimental: it simulates "
            "keystrokes and needs Accessibility permissions"
        )

    description = info.description
    if delegate is not None:
        description = f"{backend.display_name} host terminal, {info.description}"

    return PlanReady(
        backend=backend.name,
        command=command,
        target=resolved.target,
        requested_target=resolved.requested_target,
        degraded=resolved.degraded,
        direction=direction,
        exact_command=info.exact_command,
        description=description,
        requires_permissions=info.requires_permissions,
        experimental=executing.capabilities.experimental,
        delegate=delegate.name if delegate is not None else None,
        warnings=tuple(warnings),
    )


# =============================================================================
# Entry points
# =============================================================================


def create_plan(command: str | None, options: Options, env: Environment) -> Plan:
    """
    Decide where and how to run `command`.

    Args:
        command: Shell command to run elsewhere
        options: The caller's request
        env: Environment snapshot for this invocation

    Returns:
        PlanReady on success, PlanError otherwise. Never raises ElsewhereError.
    """
    try:
        plan = _synthesize(command, options, env)
    except ElsewhereError as exc:
        logger.debug("Planning failed (%s): %s", exc.category.value, exc.message)
        return PlanError.from_exception(exc)
    logger.debug("Planned %s %s: %s", plan.backend.value, plan.target.value, plan.exact_command)
    return plan


async def create_plan_interactive(
    command: str | None,
    options: Options,
    env: Environment,
    chooser: Chooser | None = None,
) -> Plan:
    """
    Like create_plan(), but ask `chooser` when the backend choice is open.

    The chooser runs when --interactive is set, or when several backends are
    viable and neither --terminal nor auto-select decided it. Its selection is
    applied as an explicit override (and explicit target, if one was picked).
    """
    if options.terminal or command is None or not command.strip():
        return create_plan(command, options, env)

    viable = viable_backends(env)
    needs_choice = options.interactive or (len(viable) > 1 and not options.auto_select)
    if not viable or not needs_choice:
        return create_plan(command, options, env)

    if chooser is None:
        from .interactive import select_backend_interactive

        chooser = select_backend_interactive

    try:
        selection = await chooser(viable, env)
    except ElsewhereError as exc:
        return PlanError.from_exception(exc)

    logger.debug(
        "Chooser selected %s (%s)",
        selection.backend.value,
        selection.target.value if selection.target else "default target",
    )
    return create_plan(command, options.with_selection(selection.backend, selection.target), env)


__all__ = [
    "Chooser",
    "create_plan",
    "create_plan_interactive",
    "viable_backends",
]
