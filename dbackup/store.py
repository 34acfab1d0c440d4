"""Filesystem access used by the backup pipeline."""
from __future__ import annotations

import os
import shutil
import tempfile
from collections import deque
from datetime import datetime
from pathlib import Path
from typing import Iterator, Protocol, Union

from .types import CandidateEntry, EntryKind

PathLike = Union[str, "os.PathLike[str]"]


def normalize_path(path: PathLike) -> str:
    """Return ``path`` as an absolute, normalized string."""
    return os.path.normpath(os.path.abspath(os.fspath(path)))


class FileStore(Protocol):
    def exists(self, path: PathLike) -> bool: ...

    def is_file(self, path: PathLike) -> bool: ...

    def is_dir(self, path: PathLike) -> bool: ...

    def size_of(self, path: PathLike) -> int: ...

    def last_modified_time(self, path: PathLike) -> datetime: ...

    def list_recursive(self, root: PathLike) -> Iterator[CandidateEntry]: ...

    def available_space(self, path: PathLike) -> int: ...

    def read_all(self, path: PathLike) -> bytes: ...

    def write_all(self, path: PathLike, data: bytes) -> None: ...


class LocalFileStore:
    """:class:`FileStore` backed by the local filesystem."""

    def exists(self, path: PathLike) -> bool:
        return os.path.exists(path)

    def is_file(self, path: PathLike) -> bool:
        return os.path.isfile(path)

    def is_dir(self, path: PathLike) -> bool:
        return os.path.isdir(path)

    def size_of(self, path: PathLike) -> int:
        return os.stat(path).st_size

    def last_modified_time(self, path: PathLike) -> datetime:
        return datetime.fromtimestamp(os.stat(path).st_mtime)

    def list_recursive(self, root: PathLike) -> Iterator[CandidateEntry]:
        """Yield every entry below ``root`` level by level.

        Symlinked directories are reported as directories but not descended
        into. Entries inside one directory are yielded in name order.
        """
        base = normalize_path(root)
        pending = deque([base])
        while pending:
            current = pending.popleft()
            with os.scandir(current) as scanner:
                children = sorted(scanner, key=lambda item: item.name)
            for child in children:
                path = os.path.normpath(child.path)
                relative = Path(os.path.relpath(path, base)).as_posix()
                if child.is_dir():
                    if not child.is_symlink():
                        pending.append(path)
                    yield CandidateEntry(path=path, relative_path=relative, kind=EntryKind.DIRECTORY)
                elif child.is_file():
                    size = child.stat().st_size
                    yield CandidateEntry(path=path, relative_path=relative, kind=EntryKind.FILE, size_bytes=size)

    def available_space(self, path: PathLike) -> int:
        return shutil.disk_usage(path).free

    def read_all(self, path: PathLike) -> bytes:
        with open(path, "rb") as handle:
            return handle.read()

    def write_all(self, path: PathLike, data: bytes) -> None:
        """Replace ``path`` with ``data`` in one step.

        The bytes land in a temporary sibling first and are renamed over the
        target, so readers see either the old file or the complete new one.
        """
        target = normalize_path(path)
        fd, temp_path = tempfile.mkstemp(prefix=".dbackup-", suffix=".tmp", dir=os.path.dirname(target))
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_path, target)
        except BaseException:
            try:
                os.unlink(temp_path)
            except FileNotFoundError:
                pass
            raise


__all__ = ["FileStore", "LocalFileStore", "normalize_path"]
