"""Assemble archive plans into ZIP files."""
from __future__ import annotations

import io
import logging
import zipfile
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from .errors import ArchiveReadError, ArchiveWriteError
from .store import FileStore
from .types import ArchiveEntry, ArchivePlan, CandidateEntry

LOGGER = logging.getLogger("dbackup.writer")

_ZIP_EPOCH = datetime(1980, 1, 1)
_ZIP_LAST = datetime(2107, 12, 31, 23, 59, 58)


def _zip_timestamp(moment: datetime) -> Tuple[int, int, int, int, int, int]:
    moment = min(max(moment, _ZIP_EPOCH), _ZIP_LAST)
    return (moment.year, moment.month, moment.day, moment.hour, moment.minute, moment.second)


class ArchiveWriter:
    """Compress planned files with deflate and commit the archive in one write."""

    def __init__(self, store: FileStore, *, compresslevel: Optional[int] = None) -> None:
        self._store = store
        self._compresslevel = compresslevel

    def read_entry(self, entry: CandidateEntry) -> ArchiveEntry:
        try:
            data = self._store.read_all(entry.path)
            modified = self._store.last_modified_time(entry.path)
        except OSError as exc:
            raise ArchiveReadError(f"Unable to read {entry.path}: {exc}") from exc
        return ArchiveEntry(name=entry.relative_path, data=data, modified=_zip_timestamp(modified))

    def build(self, entries: Iterable[CandidateEntry]) -> Tuple[bytes, List[str]]:
        """Return the finished archive bytes and the member names, in order."""
        buffer = io.BytesIO()
        names: List[str] = []
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=self._compresslevel) as archive:
            for entry in entries:
                if not entry.is_file:
                    continue
                member = self.read_entry(entry)
                info = zipfile.ZipInfo(member.name, date_time=member.modified)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = 0o644 << 16
                archive.writestr(info, member.data, compresslevel=self._compresslevel)
                names.append(member.name)
        return buffer.getvalue(), names

    def write(self, plan: ArchivePlan) -> List[str]:
        payload, names = self.build(plan.entries)
        try:
            self._store.write_all(plan.output_path, payload)
        except OSError as exc:
            raise ArchiveWriteError(f"Unable to write {plan.output_path}: {exc}") from exc
        LOGGER.debug("Wrote %d members (%d bytes) to %s", len(names), len(payload), plan.output_path)
        return names


__all__ = ["ArchiveWriter"]
