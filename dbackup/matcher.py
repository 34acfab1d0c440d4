"""Decide whether a traversal entry is excluded by a :class:`PatternSet`."""
from __future__ import annotations

import os
from typing import List

from .patterns import PatternSet
from .types import CandidateEntry


def path_segments(path: str) -> List[str]:
    """Split a relative path into segments, dropping empty and ``.`` segments."""
    return [part for part in path.replace(os.sep, "/").split("/") if part and part != "."]


def extension_of(name: str) -> str:
    """Return the suffix of ``name`` starting at its final dot.

    A name without a dot, or whose only dot is the leading one (``.gitignore``),
    has no extension.
    """
    index = name.rfind(".")
    if index <= 0:
        return ""
    return name[index:]


class Matcher:
    """Three-way exclusion test: directory OR extension OR filename.

    Paths are given relative to the source root. Comparisons are exact and
    case-sensitive on every platform.
    """

    def __init__(self, patterns: PatternSet) -> None:
        self._patterns = patterns

    @property
    def patterns(self) -> PatternSet:
        return self._patterns

    def matches_directory(self, path: str, *, is_file: bool) -> bool:
        if not self._patterns.directories:
            return False
        segments = path_segments(path)
        if is_file:
            segments = segments[:-1]
        return any(segment in self._patterns.directories for segment in segments)

    def matches_extension(self, path: str) -> bool:
        segments = path_segments(path)
        if not segments:
            return False
        extension = extension_of(segments[-1])
        return bool(extension) and extension in self._patterns.extensions

    def matches_filename(self, path: str) -> bool:
        segments = path_segments(path)
        return bool(segments) and segments[-1] in self._patterns.filenames

    def is_excluded(self, path: str, *, is_file: bool) -> bool:
        return (
            self.matches_directory(path, is_file=is_file)
            or self.matches_extension(path)
            or self.matches_filename(path)
        )

    def is_excluded_entry(self, entry: CandidateEntry) -> bool:
        return self.is_excluded(entry.relative_path, is_file=entry.is_file)


__all__ = ["Matcher", "extension_of", "path_segments"]
