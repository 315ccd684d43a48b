"""Backend capability table and lookups."""

from __future__ import annotations

from ..environment import Environment
from ..errors import UsageError
from ..models import BackendName
from . import ghostty, iterm2, kitty, terminal_app, tmux, warp, zellij
from .base import ALL_DIRECTIONS, BackendDescriptor, Capabilities, DryRunInfo

# Insertion order is the auto-selection priority: in-session multiplexers
# first, then GUI terminals.
BACKENDS: dict[BackendName, BackendDescriptor] = {
    descriptor.name: descriptor
    for descriptor in (
        tmux.DESCRIPTOR,
        zellij.DESCRIPTOR,
        terminal_app.DESCRIPTOR,
        iterm2.DESCRIPTOR,
        kitty.DESCRIPTOR,
        ghostty.DESCRIPTOR,
        warp.DESCRIPTOR,
    )
}

MULTIPLEXERS = frozenset(name for name, d in BACKENDS.items() if d.multiplexer)
GUI_TERMINALS = tuple(name for name, d in BACKENDS.items() if not d.multiplexer)

_ALIASES = {
    "terminal.app": BackendName.TERMINAL,
    "apple_terminal": BackendName.TERMINAL,
    "iterm": BackendName.ITERM2,
    "iterm.app": BackendName.ITERM2,
}


def valid_backend_names() -> list[str]:
    return [name.value for name in BACKENDS]


def parse_backend_name(raw: str) -> BackendName:
    """
    Case-normalize a user-supplied backend name.

    Raises:
        UsageError: If the name does not match a known backend.
    """
    key = raw.strip().lower()
    for name in BACKENDS:
        if name.value.lower() == key:
            return name
    if key in _ALIASES:
        return _ALIASES[key]
    raise UsageError(
        f"Invalid --terminal option {raw!r}. "
        f"Use one of: {', '.join(valid_backend_names())}."
    )


def get_backend(name: BackendName) -> BackendDescriptor:
    return BACKENDS[name]


def available_backends(env: Environment) -> list[BackendDescriptor]:
    """Backends whose own availability predicate accepts this environment."""
    return [d for d in BACKENDS.values() if d.is_available(env)]


__all__ = [
    "ALL_DIRECTIONS",
    "BACKENDS",
    "BackendDescriptor",
    "Capabilities",
    "DryRunInfo",
    "GUI_TERMINALS",
    "MULTIPLEXERS",
    "available_backends",
    "get_backend",
    "parse_backend_name",
    "valid_backend_names",
]
