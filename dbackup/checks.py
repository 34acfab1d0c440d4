"""Pre-flight checks run before a backup is planned."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Optional

from .errors import require
from .store import FileStore, LocalFileStore, PathLike
from .types import SizeBudget
from .units import UINT64_MAX, checked_add, mb

LOGGER = logging.getLogger("dbackup.checks")

DEFAULT_BUFFER_BYTES = mb(300)


def required_bytes(source: PathLike, *, store: FileStore) -> int:
    """Sum the sizes of every file below ``source``."""
    total = 0
    for entry in store.list_recursive(source):
        if entry.is_file:
            total = checked_add(total, entry.size_bytes)
    return total


def size_budget(source: PathLike, destination: PathLike, buffer: int, *, store: FileStore) -> SizeBudget:
    require(store.exists(source), f"source {source} does not exist")
    require(store.exists(destination), f"destination {destination} does not exist")
    require(isinstance(buffer, int) and 0 <= buffer <= UINT64_MAX, f"buffer out of range: {buffer!r}")
    required = checked_add(required_bytes(source, store=store), buffer)
    return SizeBudget(available_bytes=store.available_space(destination), required_bytes=required)


def enough_disk_space(
    source: PathLike,
    destination: PathLike,
    buffer: int = DEFAULT_BUFFER_BYTES,
    *,
    store: Optional[FileStore] = None,
) -> bool:
    """Return ``True`` when ``destination`` can hold ``source`` plus ``buffer`` bytes."""
    budget = size_budget(source, destination, buffer, store=store or LocalFileStore())
    LOGGER.debug(
        "Disk space check: available=%d required=%d", budget.available_bytes, budget.required_bytes
    )
    return budget.sufficient


def existed_for(
    path: PathLike,
    duration: timedelta,
    *,
    store: Optional[FileStore] = None,
    now: Optional[datetime] = None,
) -> bool:
    """Return ``True`` if ``path`` was last modified at least ``duration`` ago.

    Unreadable or missing paths report ``False``.
    """
    require(duration >= timedelta(0), f"duration must not be negative: {duration}")
    store = store or LocalFileStore()
    try:
        modified = store.last_modified_time(path)
    except OSError as exc:
        LOGGER.debug("Cannot read modification time of %s: %s", path, exc)
        return False
    current = now or datetime.now()
    return abs(current - modified) >= duration


__all__ = [
    "DEFAULT_BUFFER_BYTES",
    "enough_disk_space",
    "existed_for",
    "required_bytes",
    "size_budget",
]
