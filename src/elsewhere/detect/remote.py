"""Remote session detection."""

from __future__ import annotations

import os
from typing import Mapping

REMOTE_ENV_VARS = ("SSH_TTY", "SSH_CONNECTION", "MOSH_CONNECTION")


def is_remote_session(env: Mapping[str, str] | None = None) -> bool:
    """Return True when running over SSH or Mosh, where GUI automation is infeasible."""
    environ = os.environ if env is None else env
    return any(environ.get(name) for name in REMOTE_ENV_VARS)
