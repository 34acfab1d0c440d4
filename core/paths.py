from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

__all__ = [
    "get_default_settings_paths",
    "resolve_config_dir",
]

_ENV_HOME = "DBACKUP_HOME"
_ENV_SETTINGS = "DBACKUP_SETTINGS"


def _expand_path(value: str) -> Path:
    expanded = os.path.expandvars(os.path.expanduser(value))
    return Path(expanded).resolve()


def resolve_config_dir() -> Path:
    """Return the directory holding dbackup's settings; it is not created."""

    env_home = os.environ.get(_ENV_HOME)
    if env_home and env_home.strip():
        return _expand_path(env_home)
    return Path.home() / ".dbackup"


def get_default_settings_paths(explicit: Optional[Path] = None) -> list[Path]:
    """Return the search order for settings.json files."""

    paths: list[Path] = []
    if explicit is not None:
        paths.append(Path(explicit))
    env_settings = os.environ.get(_ENV_SETTINGS)
    if env_settings and env_settings.strip():
        paths.append(_expand_path(env_settings))
    paths.append(resolve_config_dir() / "settings.json")
    return paths
