from __future__ import annotations

import logging

import pytest


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path_factory, monkeypatch):
    home = tmp_path_factory.mktemp("dbackup-home")
    monkeypatch.setenv("DBACKUP_HOME", str(home))
    monkeypatch.delenv("DBACKUP_SETTINGS", raising=False)
    return home


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger = logging.getLogger("dbackup")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_tree(tmp_path):
    """Create files below ``tmp_path / "src"`` from a mapping of relative path to bytes."""

    def _make(files, root=None):
        base = root or (tmp_path / "src")
        base.mkdir(parents=True, exist_ok=True)
        for relative, payload in files.items():
            target = base / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(payload)
        return base

    return _make
