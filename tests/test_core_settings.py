"""Tests for core.settings helpers."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path

from core.settings import (
    DEFAULT_SETTINGS,
    SETTINGS_VERSION,
    load_settings,
    merge_defaults,
    save_settings,
    validate_values,
)


def test_merge_defaults_fills_every_section() -> None:
    merged = merge_defaults({})

    assert merged["archive"] == {"extension": "zip", "compresslevel": None}
    assert merged["disk_space"]["buffer_mb"] == 300
    assert merged["ignore"] == {"filename": None, "defaults": None}
    assert merged["logging"]["level"] == "INFO"
    assert merged["version"] == SETTINGS_VERSION


def test_merge_defaults_keeps_overrides_and_nested_defaults() -> None:
    merged = merge_defaults({"archive": {"compresslevel": 9}, "disk_space": "oops"})

    assert merged["archive"] == {"extension": "zip", "compresslevel": 9}
    assert merged["disk_space"] == {"buffer_mb": 300}
    assert DEFAULT_SETTINGS["archive"]["compresslevel"] is None


def test_load_settings_without_any_file_returns_defaults() -> None:
    assert load_settings() == merge_defaults({})


def test_load_settings_prefers_explicit_path(tmp_path: Path, monkeypatch) -> None:
    explicit = tmp_path / "explicit.json"
    explicit.write_text(json.dumps({"disk_space": {"buffer_mb": 1}}), encoding="utf-8")
    from_env = tmp_path / "env.json"
    from_env.write_text(json.dumps({"disk_space": {"buffer_mb": 2}}), encoding="utf-8")
    monkeypatch.setenv("DBACKUP_SETTINGS", str(from_env))

    assert load_settings(explicit)["disk_space"]["buffer_mb"] == 1
    assert load_settings()["disk_space"]["buffer_mb"] == 2


def test_load_settings_skips_malformed_file(tmp_path: Path, monkeypatch, caplog) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    monkeypatch.setenv("DBACKUP_SETTINGS", str(broken))

    with caplog.at_level(logging.WARNING, logger="dbackup.settings"):
        loaded = load_settings()

    assert loaded == merge_defaults({})
    assert any("malformed" in record.getMessage() for record in caplog.records)


def test_unknown_keys_are_reported(tmp_path: Path, caplog) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"archive": {"format": "tar"}, "colour": "blue"}), encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="dbackup.settings"):
        loaded = load_settings(path)

    assert loaded["colour"] == "blue"
    messages = " ".join(record.getMessage() for record in caplog.records)
    assert "archive.format" in messages
    assert "colour" in messages


def test_save_settings_writes_merged_document(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"

    save_settings({"version": 0, "ignore": {"defaults": ["/dist"]}}, path)

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["version"] == SETTINGS_VERSION
    assert saved["ignore"]["defaults"] == ["/dist"]
    assert saved["archive"]["extension"] == "zip"
    assert load_settings(path) == saved


def test_load_settings_replaces_invalid_values(tmp_path: Path, caplog) -> None:
    path = tmp_path / "settings.json"
    payload = {"disk_space": {"buffer_mb": "lots"}, "archive": {"compresslevel": 12, "extension": ""}}
    path.write_text(json.dumps(payload), encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="dbackup.settings"):
        loaded = load_settings(path)

    assert loaded["disk_space"]["buffer_mb"] == 300
    assert loaded["archive"] == {"extension": "zip", "compresslevel": None}
    messages = " ".join(record.getMessage() for record in caplog.records)
    assert "disk_space.buffer_mb" in messages
    assert "archive.compresslevel" in messages


def test_validate_values_keeps_valid_overrides() -> None:
    settings = merge_defaults({"disk_space": {"buffer_mb": 0}, "ignore": {"defaults": ["/dist"]}})
    expected = copy.deepcopy(settings)

    assert validate_values(settings) == expected
    assert settings["disk_space"]["buffer_mb"] == 0
    assert settings["ignore"]["defaults"] == ["/dist"]
