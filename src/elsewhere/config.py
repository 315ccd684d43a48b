"""
User configuration for elsewhere.

The config lives at `~/.elsewhere/config.json` (or `$ELSEWHERE_HOME/config.json`):

    {
      "version": 1,
      "defaults": {
        "backend": "iTerm2",
        "target": "tab",
        "direction": "down",
        "strict": false,
        "auto_select": true
      }
    }

Every key is optional. Explicit CLI/MCP arguments beat `ELSEWHERE_TERMINAL`,
which beats the file.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

from .backends import parse_backend_name
from .errors import UsageError
from .models import Direction, Options, Target
from .paths import resolve_config_path

logger = logging.getLogger("elsewhere")

CONFIG_VERSION = 1
TERMINAL_ENV_VAR = "ELSEWHERE_TERMINAL"

# Overridden in tests; None means resolve from ELSEWHERE_HOME / ~/.elsewhere.
CONFIG_PATH: Path | None = None


class ConfigError(ValueError):
    """Raised when the config file exists but cannot be used."""


@dataclass(frozen=True)
class DefaultsConfig:
    backend: str | None = None
    target: Target | None = None
    direction: Direction | None = None
    strict: bool = False
    auto_select: bool = False


@dataclass(frozen=True)
class ElsewhereConfig:
    version: int = CONFIG_VERSION
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)


def config_path() -> Path:
    return CONFIG_PATH if CONFIG_PATH is not None else resolve_config_path()


def _parse_enum(enum_cls, value: Any, key: str):
    if value is None:
        return None
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        valid = ", ".join(member.value for member in enum_cls)
        raise ConfigError(
            f"defaults.{key} must be one of: {valid} (got {value!r})"
        ) from None


def _parse_bool(value: Any, key: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f"defaults.{key} must be a boolean (got {value!r})")
    return value


def _parse_defaults(raw: Any) -> DefaultsConfig:
    if raw is None:
        return DefaultsConfig()
    if not isinstance(raw, dict):
        raise ConfigError("defaults must be an object")

    known = {"backend", "target", "direction", "strict", "auto_select"}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"Unknown key(s) in defaults: {', '.join(unknown)}")

    backend = raw.get("backend")
    if backend is not None:
        if not isinstance(backend, str):
            raise ConfigError(f"defaults.backend must be a string (got {backend!r})")
        try:
            backend = parse_backend_name(backend).value
        except UsageError as exc:
            raise ConfigError(f"defaults.backend: {exc.message}") from exc

    return DefaultsConfig(
        backend=backend,
        target=_parse_enum(Target, raw.get("target"), "target"),
        direction=_parse_enum(Direction, raw.get("direction"), "direction"),
        strict=_parse_bool(raw.get("strict"), "strict"),
        auto_select=_parse_bool(raw.get("auto_select"), "auto_select"),
    )


def parse_config(data: Any) -> ElsewhereConfig:
    """Validate decoded JSON and build an ElsewhereConfig."""
    if not isinstance(data, dict):
        raise ConfigError("Config root must be an object")
    version = data.get("version", CONFIG_VERSION)
    if version != CONFIG_VERSION:
        raise ConfigError(f"Unsupported config version: {version!r}")
    return ElsewhereConfig(version=version, defaults=_parse_defaults(data.get("defaults")))


def load_config(path: Path | None = None) -> ElsewhereConfig:
    """
    Load the config file.

    Returns:
        The parsed config, or defaults when the file does not exist.

    Raises:
        ConfigError: If the file cannot be read, is not JSON, or holds invalid values.
    """
    path = path or config_path()
    if not path.exists():
        return ElsewhereConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path}: invalid JSON ({exc})") from exc
    except OSError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    return parse_config(data)


def apply_config(
    options: Options,
    config: ElsewhereConfig | None = None,
    env: Mapping[str, str] | None = None,
) -> Options:
    """
    Fill unset options from ELSEWHERE_TERMINAL and the config file.

    A default backend never applies to an interactive request: only an explicit
    --terminal skips the chooser. An unusable config file is logged and ignored.
    """
    environ = os.environ if env is None else env
    if config is None:
        try:
            config = load_config()
        except ConfigError as exc:
            logger.warning("Invalid config file; ignoring configured defaults: %s", exc)
            config = ElsewhereConfig()
    defaults = config.defaults

    terminal = options.terminal
    if not terminal and not options.interactive:
        terminal = (environ.get(TERMINAL_ENV_VAR) or "").strip() or defaults.backend

    return replace(
        options,
        terminal=terminal,
        target=options.target or defaults.target,
        direction=options.direction or defaults.direction,
        strict=options.strict or defaults.strict,
        auto_select=options.auto_select or defaults.auto_select,
    )


__all__ = [
    "CONFIG_PATH",
    "ConfigError",
    "DefaultsConfig",
    "ElsewhereConfig",
    "TERMINAL_ENV_VAR",
    "apply_config",
    "config_path",
    "load_config",
    "parse_config",
]
