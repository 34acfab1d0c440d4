from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from .paths import get_default_settings_paths
from .settings_schema import SETTINGS_VALIDATOR

__all__ = [
    "DEFAULT_SETTINGS",
    "SETTINGS_VERSION",
    "load_settings",
    "merge_defaults",
    "save_settings",
    "validate_values",
]

LOGGER = logging.getLogger("dbackup.settings")

SETTINGS_VERSION = 1


DEFAULT_SETTINGS: Dict[str, Any] = {
    "version": SETTINGS_VERSION,
    "ignore": {
        "filename": None,
        "defaults": None,
    },
    "archive": {
        "extension": "zip",
        "compresslevel": None,
    },
    "disk_space": {
        "buffer_mb": 300,
    },
    "logging": {
        "level": "INFO",
        "json_path": None,
    },
}


def merge_defaults(data: Dict[str, Any]) -> Dict[str, Any]:
    def _merge(default: Dict[str, Any], payload: Dict[str, Any]) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, value in default.items():
            if isinstance(value, dict):
                current = payload.get(key)
                result[key] = _merge(value, current if isinstance(current, dict) else {})
            elif isinstance(value, list):
                current = payload.get(key)
                result[key] = list(current) if isinstance(current, list) else list(value)
            else:
                result[key] = payload.get(key, value)
        for key, value in payload.items():
            if key not in result:
                result[key] = value
        return result

    return _merge(DEFAULT_SETTINGS, data or {})


_MAX_BUFFER_MB = (2**64 - 1) // 1024**2


def _is_count(value: Any, upper: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= upper


_VALUE_RULES: Dict[Tuple[str, str], Callable[[Any], bool]] = {
    ("ignore", "filename"): lambda value: value is None or (isinstance(value, str) and bool(value.strip())),
    ("ignore", "defaults"): lambda value: value is None or (isinstance(value, list) and all(isinstance(line, str) for line in value)),
    ("archive", "extension"): lambda value: isinstance(value, str) and bool(value.strip(".")),
    ("archive", "compresslevel"): lambda value: value is None or _is_count(value, 9),
    ("disk_space", "buffer_mb"): lambda value: _is_count(value, _MAX_BUFFER_MB),
}


def validate_values(settings: Dict[str, Any]) -> Dict[str, Any]:
    """Replace out-of-range values in merged ``settings`` with their defaults."""
    for (section, key), valid in _VALUE_RULES.items():
        block = settings.get(section)
        if not isinstance(block, dict) or valid(block.get(key)):
            continue
        default = DEFAULT_SETTINGS[section][key]
        LOGGER.warning("Invalid setting %s.%s=%r, using %r", section, key, block.get(key), default)
        block[key] = default
    return settings


def _apply_migrations(settings: Dict[str, Any]) -> Dict[str, Any]:
    version = settings.get("version")
    try:
        version_int = int(version)
    except (TypeError, ValueError):
        version_int = 0
    if version_int < SETTINGS_VERSION:
        settings["version"] = SETTINGS_VERSION
    return settings


def _log_unknown_keys(settings: Dict[str, Any], source: Optional[Path]) -> None:
    unknown = list(SETTINGS_VALIDATOR.unknown_keys(settings))
    if unknown:
        LOGGER.warning("Ignoring unknown settings keys in %s: %s", source or "defaults", ", ".join(unknown))


def load_settings(explicit: Optional[Path] = None) -> Dict[str, Any]:
    """Load the first readable settings file and merge it over the defaults."""
    data: Dict[str, Any] = {}
    source: Optional[Path] = None
    for candidate in get_default_settings_paths(explicit):
        try:
            with open(candidate, "r", encoding="utf-8") as handle:
                loaded = json.load(handle)
        except FileNotFoundError:
            continue
        except json.JSONDecodeError as exc:
            LOGGER.warning("Skipping malformed settings file %s: %s", candidate, exc)
            continue
        except OSError:
            continue
        if isinstance(loaded, dict):
            data = loaded
            source = candidate
            break
    merged = validate_values(_apply_migrations(merge_defaults(data)))
    _log_unknown_keys(merged, source)
    return merged


def save_settings(settings: Dict[str, Any], path: Path) -> None:
    merged = _apply_migrations(merge_defaults(dict(settings)))
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(merged, handle, ensure_ascii=False, indent=2)
