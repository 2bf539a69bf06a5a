"""
pickercraft configuration.

Settings are read from ~/.config/pickercraft/config.json and deep-merged over
the built-in defaults, so a user file only needs the keys it changes:

    {
        "debounce_ms": 120,
        "pickers": {
            "todo": {
                "located": true,
                "commands": [{"cmd": "rg", "args": ["--vimgrep", "TODO.*{query}"]}]
            }
        },
        "preview": {"commands": [{"cmd": "bat", "args": ["--color=never", "{query}"]}]}
    }

The directory can be moved with PICKERCRAFT_CONFIG_DIR and the debounce delay
overridden with PICKERCRAFT_DEBOUNCE_MS.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..exceptions import ConfigurationError
from .constants import (
    CONFIG_FILE_NAME,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_PICKERS,
    DEFAULT_PREVIEW,
    ENV_CONFIG_DIR,
    ENV_DEBOUNCE_MS,
    PICKERCRAFT_CONFIG_DIR,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: dict[str, Any] = {
    "debounce_ms": DEFAULT_DEBOUNCE_MS,
    "pickers": DEFAULT_PICKERS,
    "preview": DEFAULT_PREVIEW,
}


@dataclass
class PickerConfig:
    """Command chain and parse mode for one named picker."""

    name: str
    commands: list[dict[str, Any]]
    located: bool = False


@dataclass
class PickerSettings:
    """Fully resolved configuration."""

    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    pickers: dict[str, PickerConfig] = field(default_factory=dict)
    preview_commands: list[dict[str, Any]] = field(default_factory=list)

    def get_picker(self, name: str) -> PickerConfig:
        """Look up a picker by name."""
        try:
            return self.pickers[name]
        except KeyError:
            available = ", ".join(sorted(self.pickers)) or "none"
            raise ConfigurationError(
                f"Unknown picker '{name}'", available=available
            ) from None


def get_config_dir() -> Path:
    """Get the configuration directory, respecting PICKERCRAFT_CONFIG_DIR."""
    override = os.environ.get(ENV_CONFIG_DIR)
    if override:
        return Path(override).expanduser()
    return PICKERCRAFT_CONFIG_DIR


def get_config_path() -> Path:
    """Get path to the JSON config file."""
    return get_config_dir() / CONFIG_FILE_NAME


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base``.

    Nested dicts are merged key by key; any other value in ``override``
    (lists included) replaces the one in ``base``.
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(path: Path | None = None) -> dict[str, Any]:
    """
    Load the raw configuration dict, merged with defaults.

    Args:
        path: Explicit config file, or None for the default location

    Returns:
        Config dict; the defaults when no file exists

    Raises:
        ConfigurationError: If the file exists but is not a JSON object
    """
    path = path or get_config_path()
    if not path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        user_config = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigurationError(f"Cannot read config: {e}", path=str(path)) from e

    if not isinstance(user_config, dict):
        raise ConfigurationError("Config root must be a JSON object", path=str(path))

    logger.debug(f"Loaded config from {path}")
    return deep_merge(DEFAULT_CONFIG, user_config)


def _validate_commands(commands: Any, where: str) -> list[dict[str, Any]]:
    """Check a list of ``{"cmd": str, "args": [str]}`` stage entries."""
    if not isinstance(commands, list) or not commands:
        raise ConfigurationError(f"{where}: 'commands' must be a non-empty list")

    for index, command in enumerate(commands, start=1):
        if not isinstance(command, dict) or not isinstance(command.get("cmd"), str):
            raise ConfigurationError(f"{where}: stage {index} needs a string 'cmd'")
        args = command.get("args", [])
        if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            raise ConfigurationError(f"{where}: stage {index} 'args' must be a list of strings")
    return commands


def _resolve_debounce(raw: Any) -> int:
    env_value = os.environ.get(ENV_DEBOUNCE_MS)
    if env_value is not None:
        raw = env_value
    try:
        debounce_ms = int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Invalid debounce delay: {raw!r}") from None
    if debounce_ms < 0:
        raise ConfigurationError(f"Debounce delay must not be negative: {debounce_ms}")
    return debounce_ms


def load_settings(path: Path | None = None) -> PickerSettings:
    """Load, merge and validate the configuration into PickerSettings."""
    config = load_config(path)

    pickers: dict[str, PickerConfig] = {}
    raw_pickers = config.get("pickers", {})
    if not isinstance(raw_pickers, dict):
        raise ConfigurationError("'pickers' must be an object")

    for name, raw in raw_pickers.items():
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Picker '{name}' must be an object")
        pickers[name] = PickerConfig(
            name=name,
            commands=_validate_commands(raw.get("commands"), f"picker '{name}'"),
            located=bool(raw.get("located", False)),
        )

    preview = config.get("preview", {})
    if not isinstance(preview, dict):
        raise ConfigurationError("'preview' must be an object")

    return PickerSettings(
        debounce_ms=_resolve_debounce(config.get("debounce_ms", DEFAULT_DEBOUNCE_MS)),
        pickers=pickers,
        preview_commands=_validate_commands(preview.get("commands"), "preview"),
    )
