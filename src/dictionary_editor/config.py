"""Editor settings read from a YAML file and ``DICTIONARY_EDITOR_*`` variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from dictionary_editor.autosave import AutoSaveConfig
from dictionary_editor.exceptions import ConfigError, ParseError
from dictionary_editor.serialization import load_yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "DICTIONARY_EDITOR_"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})
_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Tunable behaviour of an editing session."""

    quiet_period: float = 2.0
    saved_display: float = 2.0
    error_display: float = 3.0
    editor_mode: bool = False
    log_level: str = "WARNING"

    def autosave_config(self) -> AutoSaveConfig:
        return AutoSaveConfig(
            quiet_period=self.quiet_period,
            saved_display=self.saved_display,
            error_display=self.error_display,
        )


def _coerce(name: str, value: Any) -> Any:
    if name == "editor_mode":
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in _TRUE:
            return True
        if text in _FALSE:
            return False
        raise ConfigError(f"Setting 'editor_mode' must be a boolean, got {value!r}")
    if name == "log_level":
        level = str(value).strip().upper()
        if level not in _LEVELS:
            raise ConfigError(f"Unknown log level: {value!r}")
        return level
    try:
        seconds = float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Setting {name!r} must be a number of seconds") from e
    if seconds < 0:
        raise ConfigError(f"Setting {name!r} cannot be negative")
    return seconds


def load_settings(
    path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> EditorSettings:
    """Build settings from defaults, then *path*, then the environment."""
    settings = EditorSettings()
    known = {f.name for f in fields(EditorSettings)}

    if path is not None:
        try:
            data = load_yaml(Path(path))
        except ParseError as e:
            raise ConfigError(f"Cannot read settings from {path}: {e}") from e
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown setting(s): {', '.join(sorted(unknown))}")
        settings = replace(settings, **{k: _coerce(k, v) for k, v in data.items()})

    env = os.environ if environ is None else environ
    overrides = {}
    for name in known:
        value = env.get(ENV_PREFIX + name.upper())
        if value is not None:
            overrides[name] = _coerce(name, value)
    if overrides:
        logger.debug("Settings overridden from environment: %s", sorted(overrides))
        settings = replace(settings, **overrides)
    return settings
