"""
Interactive backend chooser.

Renders a numbered menu of the viable backends on stderr and, when the chosen
backend offers more than one target kind, asks for the target too.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import click

from .backends import BackendDescriptor
from .environment import Environment
from .errors import SelectionCancelled
from .models import BackendName, Target


@dataclass(frozen=True)
class MenuSelection:
    """The user's pick: a backend and optionally a target kind."""

    backend: BackendName
    target: Target | None = None


def context_hints(backend: BackendDescriptor, env: Environment) -> list[str]:
    """Annotations shown next to a menu entry."""
    hints: list[str] = []
    if backend.name is BackendName.TMUX and env.tmux.inside:
        hints.append("current")
    elif backend.name is BackendName.ZELLIJ and env.zellij.inside:
        hints.append("current")
    elif env.current_terminal.as_backend() is backend.name:
        hints.append("detected")
    if backend.capabilities.experimental:
        hints.append("experimental")
    return hints


def format_choice(backend: BackendDescriptor, env: Environment) -> str:
    """
    Format one menu line.

    Examples:
        tmux (pane/tab/window) [current]
        Ghostty (tab/window) [experimental]
    """
    targets = "/".join(t.value for t in backend.capabilities.targets())
    hints = context_hints(backend, env)
    suffix = f" [{', '.join(hints)}]" if hints else ""
    return f"{backend.display_name} ({targets}){suffix}"


def _prompt_index(label: str, count: int) -> int:
    try:
        choice = click.prompt(
            label,
            type=click.IntRange(1, count),
            default=1,
            err=True,
        )
    except click.exceptions.Abort as exc:
        raise SelectionCancelled("Interactive selection cancelled") from exc
    return choice - 1


async def select_backend_interactive(
    backends: Sequence[BackendDescriptor],
    env: Environment,
) -> MenuSelection:
    """
    Ask the user to pick one of `backends`, then a target if there is a choice.

    Raises:
        SelectionCancelled: If the prompt is aborted (Ctrl-C / EOF) or no
            backend is offered.
    """
    if not backends:
        raise SelectionCancelled("No backends to choose from")

    click.echo(err=True)
    click.secho("  Select terminal backend:", bold=True, err=True)
    for i, backend in enumerate(backends, 1):
        click.echo(f"    {i}) {format_choice(backend, env)}", err=True)
    selected = backends[_prompt_index("  Backend", len(backends))]

    targets = selected.capabilities.targets()
    if len(targets) == 1:
        return MenuSelection(backend=selected.name, target=targets[0])

    click.echo(err=True)
    click.secho("  Select target type:", bold=True, err=True)
    for i, target in enumerate(targets, 1):
        click.echo(f"    {i}) {target.value}", err=True)
    target = targets[_prompt_index("  Target", len(targets))]
    return MenuSelection(backend=selected.name, target=target)


__all__ = ["MenuSelection", "context_hints", "format_choice", "select_backend_interactive"]
