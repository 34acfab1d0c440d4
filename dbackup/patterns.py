"""Parse ``.dbackupignore`` files into classified patterns.

Each non-blank line is one pattern, classified by its first character:

``/name``
    directory pattern, matches any directory segment equal to ``name``
``*.ext``
    extension pattern, matches base names ending in ``.ext``
anything else
    filename pattern, matches base names equal to the whole line
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, FrozenSet, Iterable, Iterator, List, Optional, Tuple

from .types import IgnorePattern, PatternKind

if TYPE_CHECKING:  # pragma: no cover - typing guard
    from .store import FileStore

LOGGER = logging.getLogger("dbackup.patterns")

IGNORE_FILENAME = ".dbackupignore"

DEFAULT_IGNORE_PATTERNS: Tuple[str, ...] = (
    "/build",
    "/.dub",
    "/.git",
    "*.a",
    "*.dll",
    "*.dylib",
    "*.exe",
    "*.lib",
    "*.o",
    "*.obj",
    "*.so",
)

_PREFIXES = {
    "/": PatternKind.DIRECTORY,
    "*": PatternKind.EXTENSION,
}


def classify(line: str) -> Optional[IgnorePattern]:
    """Classify one ignore-file line, or return ``None`` for blank lines."""
    if not line.strip():
        return None
    kind = _PREFIXES.get(line[0])
    if kind is None:
        return IgnorePattern(PatternKind.FILENAME, line)
    value = line[1:]
    if not value:
        LOGGER.warning("Skipping ignore pattern %r: nothing follows the prefix", line)
        return None
    return IgnorePattern(kind, value)


@dataclass(frozen=True, slots=True)
class PatternSet:
    """Immutable collection of ignore patterns, split by kind."""

    directories: FrozenSet[str] = frozenset()
    extensions: FrozenSet[str] = frozenset()
    filenames: FrozenSet[str] = frozenset()

    @property
    def is_empty(self) -> bool:
        return not (self.directories or self.extensions or self.filenames)

    def patterns(self) -> Iterator[IgnorePattern]:
        for value in sorted(self.directories):
            yield IgnorePattern(PatternKind.DIRECTORY, value)
        for value in sorted(self.extensions):
            yield IgnorePattern(PatternKind.EXTENSION, value)
        for value in sorted(self.filenames):
            yield IgnorePattern(PatternKind.FILENAME, value)

    def __len__(self) -> int:
        return len(self.directories) + len(self.extensions) + len(self.filenames)


def parse_patterns(lines: Iterable[str]) -> PatternSet:
    buckets: dict[PatternKind, List[str]] = {kind: [] for kind in PatternKind}
    for line in lines:
        pattern = classify(line.rstrip("\r\n"))
        if pattern is not None:
            buckets[pattern.kind].append(pattern.value)
    return PatternSet(
        directories=frozenset(buckets[PatternKind.DIRECTORY]),
        extensions=frozenset(buckets[PatternKind.EXTENSION]),
        filenames=frozenset(buckets[PatternKind.FILENAME]),
    )


def load_pattern_set(source: Path, *, store: "FileStore", filename: str = IGNORE_FILENAME) -> PatternSet:
    """Read the ignore file in ``source``; an absent file yields no patterns."""
    path = Path(source) / filename
    if not store.is_file(path):
        LOGGER.debug("No ignore file at %s", path)
        return PatternSet()
    text = store.read_all(path).decode("utf-8-sig")
    patterns = parse_patterns(text.splitlines())
    LOGGER.debug("Loaded %d ignore patterns from %s", len(patterns), path)
    return patterns


__all__ = [
    "DEFAULT_IGNORE_PATTERNS",
    "IGNORE_FILENAME",
    "PatternSet",
    "classify",
    "load_pattern_set",
    "parse_patterns",
]
