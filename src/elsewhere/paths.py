"""Shared filesystem paths for elsewhere."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

DATA_DIRNAME = ".elsewhere"
CONFIG_FILENAME = "config.json"
HOME_ENV_VAR = "ELSEWHERE_HOME"


def resolve_data_dir(
    *,
    home: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Path:
    """Return the data dir path to use.

    `ELSEWHERE_HOME` wins when set; otherwise `~/.elsewhere/`. The directory
    is not created.
    """

    environ = os.environ if env is None else env
    override = environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()

    home_dir = home or Path.home()
    return home_dir / DATA_DIRNAME


def resolve_config_path(
    *,
    home: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Path:
    return resolve_data_dir(home=home, env=env) / CONFIG_FILENAME


__all__ = [
    "CONFIG_FILENAME",
    "DATA_DIRNAME",
    "HOME_ENV_VAR",
    "resolve_config_path",
    "resolve_data_dir",
]
