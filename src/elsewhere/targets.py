"""
Target resolution: map a requested pane/tab/window onto what a backend can do.

Degradation only ever moves toward a more visible surface:

    pane -> tab -> window
    tab  -> window
    window (never degrades)

Strict mode turns any needed degradation into a CapabilityError.
"""

from __future__ import annotations

from dataclasses import dataclass

from .backends import BackendDescriptor
from .errors import CapabilityError, InternalCapabilityError
from .models import Target

DEGRADATION_LADDER: dict[Target, tuple[Target, ...]] = {
    Target.PANE: (Target.TAB, Target.WINDOW),
    Target.TAB: (Target.WINDOW,),
    Target.WINDOW: (),
}


@dataclass(frozen=True)
class ResolvedTarget:
    """
    Outcome of target resolution.

    Attributes:
        target: The target that will actually be used
        requested_target: What the caller explicitly asked for, if anything
        degraded: True when target differs from the request
        warning: Human-readable note describing the substitution
    """

    target: Target
    requested_target: Target | None = None
    degraded: bool = False
    warning: str | None = None


def default_target(backend: BackendDescriptor) -> Target:
    """
    Smart default for a backend: pane for multiplexers, else window, else tab.

    Raises:
        InternalCapabilityError: If the backend declares no target kinds.
    """
    caps = backend.capabilities
    if caps.pane:
        return Target.PANE
    if caps.window:
        return Target.WINDOW
    if caps.tab:
        return Target.TAB
    raise InternalCapabilityError(
        f"Backend {backend.name} supports neither pane, tab, nor window"
    )


def can_achieve_without_degradation(target: Target, backend: BackendDescriptor) -> bool:
    return backend.capabilities.supports(target)


def _degradation_warning(backend: BackendDescriptor, requested: Target, actual: Target) -> str:
    chain = (requested, *DEGRADATION_LADDER[requested])
    skipped = [f"{t}s" for t in chain[: chain.index(actual)]]
    return (
        f"{backend.display_name} does not support {' or '.join(skipped)}; "
        f"degrading {requested} to {actual}"
    )


def resolve_target(
    requested: Target | None,
    backend: BackendDescriptor,
    strict: bool = False,
) -> ResolvedTarget:
    """
    Resolve the target to use for `backend`.

    Args:
        requested: Explicitly requested target, or None for the smart default
        backend: Descriptor of the selected backend
        strict: Fail instead of degrading

    Returns:
        ResolvedTarget with the achievable target.

    Raises:
        CapabilityError: If the target is unsupported and strict is set, or
            the ladder is exhausted.
    """
    wanted = requested if requested is not None else default_target(backend)
    caps = backend.capabilities

    if caps.supports(wanted):
        return ResolvedTarget(target=wanted, requested_target=requested)

    if strict:
        raise CapabilityError(
            f"{backend.display_name} does not support {wanted} targets "
            "and strict mode forbids degrading"
        )

    for fallback in DEGRADATION_LADDER[wanted]:
        if caps.supports(fallback):
            return ResolvedTarget(
                target=fallback,
                requested_target=requested,
                degraded=True,
                warning=_degradation_warning(backend, wanted, fallback),
            )

    if wanted is Target.WINDOW:
        raise CapabilityError(f"{backend.display_name} does not support window targets")
    attempted = " or ".join(t.value for t in (wanted, *DEGRADATION_LADDER[wanted]))
    raise CapabilityError(f"{backend.display_name} does not support {attempted} targets")


__all__ = [
    "DEGRADATION_LADDER",
    "ResolvedTarget",
    "can_achieve_without_degradation",
    "default_target",
    "resolve_target",
]
