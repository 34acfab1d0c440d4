"""Common dataclasses shared across dbackup modules."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple


class PatternKind(enum.Enum):
    DIRECTORY = "directory"
    EXTENSION = "extension"
    FILENAME = "filename"


@dataclass(frozen=True, slots=True)
class IgnorePattern:
    """Single classified rule read from an ignore file."""

    kind: PatternKind
    value: str


class EntryKind(enum.Enum):
    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class CandidateEntry:
    """One entry found while walking a source tree."""

    path: str
    relative_path: str
    kind: EntryKind
    size_bytes: int = 0

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE


@dataclass(frozen=True, slots=True)
class SizeBudget:
    available_bytes: int
    required_bytes: int

    @property
    def sufficient(self) -> bool:
        return self.available_bytes > self.required_bytes


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """Single member written into an archive."""

    name: str
    data: bytes
    modified: Tuple[int, int, int, int, int, int]


@dataclass(slots=True)
class ArchivePlan:
    """Sorted, filtered entries destined for one archive."""

    source: Path
    output_path: str
    entries: List[CandidateEntry]
    overwrite: bool = False

    @property
    def files(self) -> List[CandidateEntry]:
        return [entry for entry in self.entries if entry.is_file]

    @property
    def total_bytes(self) -> int:
        return sum(entry.size_bytes for entry in self.files)


@dataclass(slots=True)
class BackupResult:
    archive_path: Path
    annotate: bool
    overwritten: bool
    members: List[str] = field(default_factory=list)
    total_bytes: int = 0


@dataclass(slots=True)
class InitResult:
    path: Path
    patterns: List[str]
    annotate: bool


__all__ = [
    "ArchiveEntry",
    "ArchivePlan",
    "BackupResult",
    "CandidateEntry",
    "EntryKind",
    "IgnorePattern",
    "InitResult",
    "PatternKind",
    "SizeBudget",
]
