"""Snapshot a directory into a dated ZIP archive, honouring .dbackupignore."""
from __future__ import annotations

__version__ = "1.0.0"

from .api import BackupService
from .checks import enough_disk_space, existed_for
from .errors import BackupError, PreconditionViolation
from .matcher import Matcher
from .models import CommandOptions
from .naming import build_path_with_current_date
from .patterns import DEFAULT_IGNORE_PATTERNS, IGNORE_FILENAME, PatternSet, parse_patterns
from .types import ArchivePlan, BackupResult, InitResult
from .units import gb, kb, mb

__all__ = [
    "ArchivePlan",
    "BackupError",
    "BackupResult",
    "BackupService",
    "CommandOptions",
    "DEFAULT_IGNORE_PATTERNS",
    "IGNORE_FILENAME",
    "InitResult",
    "Matcher",
    "PatternSet",
    "PreconditionViolation",
    "build_path_with_current_date",
    "enough_disk_space",
    "existed_for",
    "gb",
    "kb",
    "mb",
    "parse_patterns",
]
