"""Resolve the command text from -c, trailing arguments, or piped stdin."""

from __future__ import annotations

import logging
from typing import Sequence, TextIO

logger = logging.getLogger("elsewhere")


def normalize_stdin(data: str) -> str | None:
    """Normalize CRLF line endings and trim; empty input means no command."""
    text = data.replace("\r\n", "\n").strip()
    return text or None


def resolve_command(
    c_flag: str | None,
    args: Sequence[str],
    stdin: TextIO | None = None,
) -> str | None:
    """
    Pick the command to run.

    Precedence: the -c flag, then the arguments after `--` (joined with
    spaces), then piped stdin. Pass stdin only when it is not a TTY.

    Returns:
        The command text, or None when no source provided one.
    """
    if c_flag:
        return c_flag
    if args:
        return " ".join(args)
    if stdin is not None:
        try:
            data = stdin.read()
        except OSError as exc:
            logger.debug("Could not read command from stdin: %s", exc)
            return None
        return normalize_stdin(data)
    return None


__all__ = ["normalize_stdin", "resolve_command"]
