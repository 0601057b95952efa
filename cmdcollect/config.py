"""Configuration loading for cmdcollect (.cmdcollect.yml)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".cmdcollect.yml"
DEFAULT_OUTPUT_DIR = "target/tauri_commands_list"
DEFAULT_MARKER_ATTRIBUTE = "auto_collect_command"
DEFAULT_COMMAND_ATTRIBUTE = "tauri::command"


@dataclass
class CollectConfig:
    """Settings that shape the scan and generation phases.

    ``collect_all`` also picks up functions that carry only the command
    attribute. Leaving it off keeps collection opt-in, so a stray
    ``#[tauri::command]`` never ends up in the handler by accident.
    """

    collect_all: bool = False
    marker_attribute: str = DEFAULT_MARKER_ATTRIBUTE
    command_attribute: str = DEFAULT_COMMAND_ATTRIBUTE
    output_dir: str = DEFAULT_OUTPUT_DIR

    def commands_dir(self, workspace_root: Path) -> Path:
        return workspace_root / self.output_dir


def load_config(config_path: Path) -> CollectConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return CollectConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = CollectConfig()
    collect_all = _as_bool(data.get("collect_all"))
    if collect_all is not None:
        config.collect_all = collect_all
    marker = _as_str(data.get("marker_attribute"))
    if marker:
        config.marker_attribute = marker
    command = _as_str(data.get("command_attribute"))
    if command:
        config.command_attribute = command
    output_dir = _as_str(data.get("output_dir"))
    if output_dir:
        config.output_dir = output_dir
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = ["CollectConfig", "CONFIG_FILENAME", "DEFAULT_OUTPUT_DIR", "load_config"]
