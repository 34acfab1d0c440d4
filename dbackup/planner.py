"""Turn a source tree into a sorted, filtered archive plan."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List

from .matcher import Matcher
from .naming import build_path_with_current_date
from .store import FileStore, PathLike, normalize_path
from .types import ArchivePlan, CandidateEntry

LOGGER = logging.getLogger("dbackup.planner")


def archive_path_for(source: PathLike, destination: PathLike, extension: str = "zip") -> str:
    """Return the dated archive path for ``source`` inside ``destination``."""
    return os.path.join(normalize_path(destination), build_path_with_current_date(source, extension))


def filter_entries(entries: Iterable[CandidateEntry], matcher: Matcher, output_path: str) -> Iterator[CandidateEntry]:
    for entry in entries:
        if entry.path == output_path:
            LOGGER.debug("Skipping archive output %s", entry.path)
            continue
        if matcher.is_excluded_entry(entry):
            LOGGER.debug("Excluded %s", entry.relative_path)
            continue
        yield entry


def sort_entries(entries: Iterable[CandidateEntry]) -> List[CandidateEntry]:
    return sorted(entries, key=lambda entry: entry.relative_path)


class ArchivePlanner:
    """Enumerate, filter and order the entries of one backup.

    The plan is identical whether or not it is later written, which keeps
    annotate-mode diagnostics faithful to a real run.
    """

    def __init__(self, store: FileStore, matcher: Matcher) -> None:
        self._store = store
        self._matcher = matcher

    def plan(self, source: PathLike, destination: PathLike, *, extension: str = "zip") -> ArchivePlan:
        output_path = archive_path_for(source, destination, extension)
        entries = sort_entries(filter_entries(self._store.list_recursive(source), self._matcher, output_path))
        plan = ArchivePlan(
            source=Path(normalize_path(source)),
            output_path=output_path,
            entries=entries,
            overwrite=self._store.exists(output_path),
        )
        LOGGER.debug(
            "Planned %d entries (%d files) for %s", len(plan.entries), len(plan.files), plan.output_path
        )
        return plan


__all__ = ["ArchivePlanner", "archive_path_for", "filter_entries", "sort_entries"]
