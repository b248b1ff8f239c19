"""Configuration helpers for ghquery."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional

CONFIG_ENV_VAR = "GHQUERY_CONFIG"
DEFAULT_CONFIG_PATH = Path(
    os.environ.get(CONFIG_ENV_VAR, "~/.config/ghquery/config.json")
).expanduser()


@dataclass(slots=True)
class Settings:
    """Values applied to every query built from the command line."""

    defaults: Dict[str, str] = field(default_factory=dict)
    timezoned: bool = False


def _read_config(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Config file at {path} is not valid JSON") from exc
    if not isinstance(data, dict):
        raise RuntimeError(f"Config file at {path} must contain a JSON object")
    return data


def _save_config(path: Path, data: dict) -> None:
    """Write ``data`` to ``path``; an empty config removes the file."""
    if not data:
        path.unlink(missing_ok=True)
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def _stored_defaults(data: dict, path: Path) -> dict:
    raw = data.get("defaults") or {}
    if not isinstance(raw, dict):
        raise RuntimeError(f"'defaults' in {path} must be an object")
    return raw


def _stored_timezoned(data: dict, path: Path) -> bool:
    value = data.get("timezoned", False)
    if not isinstance(value, bool):
        raise RuntimeError(f"'timezoned' in {path} must be true or false, not {value!r}")
    return value


def load_settings(*, config_path: Optional[Path] = None) -> Settings:
    """Read settings from the config file, falling back to empty defaults."""
    path = config_path or DEFAULT_CONFIG_PATH
    data = _read_config(path)
    defaults = {
        str(key).strip(): str(value).strip()
        for key, value in _stored_defaults(data, path).items()
        if str(key).strip()
    }
    return Settings(defaults=defaults, timezoned=_stored_timezoned(data, path))


def store_defaults(
    defaults: Mapping[str, str],
    *,
    config_path: Optional[Path] = None,
) -> Path:
    """Merge ``defaults`` into the stored default qualifiers."""
    if not defaults:
        raise ValueError("No default qualifiers given")
    path = config_path or DEFAULT_CONFIG_PATH
    data = _read_config(path)
    data["defaults"] = {**_stored_defaults(data, path), **defaults}
    _save_config(path, data)
    return path


def clear_defaults(*, config_path: Optional[Path] = None) -> None:
    """Remove the stored default qualifiers if present."""
    path = config_path or DEFAULT_CONFIG_PATH
    data = _read_config(path)
    if data.pop("defaults", None) is not None:
        _save_config(path, data)
