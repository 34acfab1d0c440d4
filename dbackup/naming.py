"""Date-stamped output names."""
from __future__ import annotations

import os
from datetime import date
from typing import Optional

from .errors import require
from .store import PathLike, normalize_path


def is_valid_path(path: object) -> bool:
    """Return ``True`` for a non-empty path string free of NUL characters."""
    if isinstance(path, os.PathLike):
        path = os.fspath(path)
    return isinstance(path, str) and bool(path) and "\0" not in path


def build_path_with_current_date(path: PathLike, extension: str = "", *, today: Optional[date] = None) -> str:
    """Return the base name of ``path`` suffixed with ``-YYYY-MM-DD``.

    ``path`` is made absolute and normalized first, so ``"."`` and ``"./.."``
    resolve to real directory names. A non-empty ``extension`` is appended
    after a dot.
    """
    require(is_valid_path(path), f"invalid path: {path!r}")
    stamp = (today or date.today()).isoformat()
    name = f"{os.path.basename(normalize_path(path))}-{stamp}"
    if extension:
        name = f"{name}.{extension.lstrip('.')}"
    require(is_valid_path(name), f"invalid result path: {name!r}")
    return name


__all__ = ["build_path_with_current_date", "is_valid_path"]
