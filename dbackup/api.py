"""Public API for the init and backup commands."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from core.settings import merge_defaults, validate_values

from .checks import size_budget
from .errors import (
    ArchiveReadError,
    BackupError,
    IgnoreFileExistsError,
    IgnoreFileWriteError,
    InsufficientDiskSpaceError,
)
from .logs import BackupLogger
from .matcher import Matcher
from .models import CommandOptions, destination_directory, source_directory
from .patterns import DEFAULT_IGNORE_PATTERNS, IGNORE_FILENAME, PatternSet, load_pattern_set
from .planner import ArchivePlanner
from .store import FileStore, LocalFileStore, PathLike
from .types import ArchivePlan, BackupResult, InitResult
from .units import mb
from .writer import ArchiveWriter

NEW_ARCHIVE = "Creating a new zip archive"
ADD_FILE = "Adding file %s"
OVERWRITING_ARCHIVE = "Overwriting %s with a new zip archive"
WRITING_ARCHIVE = "Writing new zip archive to %s"
NEW_IGNORE_FILE = "Creating a new ignore file"
ADD_IGNORE_PATTERN = "Adding pattern: %s"
WRITING_IGNORE_FILE = "Writing new ignore file to %s"
BACKUP_STARTED = "Backup has started. This can take a long time!"
BACKUP_FINISHED = "Backup is finished"
FILE_EXISTS = "File %s already exists"
NO_DISK_SPACE = "Not enough disk space!"


class BackupService:
    """Coordinate ignore-file initialisation and backups.

    One backup walks ``Init -> CheckDiskSpace -> Plan -> Report | Write``
    and stops at the first failure.
    """

    def __init__(
        self,
        *,
        options: Optional[CommandOptions] = None,
        settings: Optional[Dict[str, Any]] = None,
        store: Optional[FileStore] = None,
        logger: Optional[BackupLogger] = None,
    ) -> None:
        self._options = options or CommandOptions()
        self._settings = validate_values(merge_defaults(dict(settings or {})))
        self._store = store or LocalFileStore()
        self._logger = logger or BackupLogger(verbose=self._options.diagnostics)

    # ------------------------------------------------------------------
    @property
    def options(self) -> CommandOptions:
        return self._options

    @property
    def logger(self) -> BackupLogger:
        return self._logger

    def _section(self, name: str) -> Dict[str, Any]:
        raw = self._settings.get(name)
        return raw if isinstance(raw, dict) else {}

    @property
    def ignore_filename(self) -> str:
        return str(self._section("ignore").get("filename") or IGNORE_FILENAME)

    @property
    def default_patterns(self) -> Sequence[str]:
        configured = self._section("ignore").get("defaults")
        if configured is None:
            return list(DEFAULT_IGNORE_PATTERNS)
        return [str(line) for line in configured]

    @property
    def buffer_bytes(self) -> int:
        return mb(self._section("disk_space").get("buffer_mb"))

    @property
    def extension(self) -> str:
        return str(self._section("archive").get("extension") or "zip")

    @property
    def compresslevel(self) -> Optional[int]:
        level = self._section("archive").get("compresslevel")
        return None if level is None else int(level)

    # ------------------------------------------------------------------
    def init_ignore_file(self, directory: PathLike, *, patterns: Optional[Sequence[str]] = None) -> InitResult:
        """Create an ignore file holding ``patterns`` (default table when omitted)."""
        root = source_directory(Path(directory))
        path = root / self.ignore_filename
        if self._store.exists(path):
            raise IgnoreFileExistsError(FILE_EXISTS % path)
        lines = list(self.default_patterns if patterns is None else patterns)
        self._logger.say(NEW_IGNORE_FILE)
        for line in lines:
            self._logger.say(ADD_IGNORE_PATTERN, line)
        if not self._options.annotate:
            try:
                self._store.write_all(path, "".join(f"{line}\n" for line in lines).encode("utf-8"))
            except OSError as exc:
                raise IgnoreFileWriteError(f"Unable to write {path}: {exc}") from exc
        self._logger.say(WRITING_IGNORE_FILE, path)
        self._logger.event(
            event="ignore_init", phase="init", ok=True, path=str(path), patterns=len(lines), annotate=self._options.annotate
        )
        return InitResult(path=path, patterns=lines, annotate=self._options.annotate)

    # ------------------------------------------------------------------
    def set_source(self, directory: PathLike) -> Path:
        self._options.source = Path(directory)
        return self._options.source

    def load_patterns(self, source: PathLike) -> PatternSet:
        try:
            return load_pattern_set(Path(source), store=self._store, filename=self.ignore_filename)
        except (OSError, UnicodeDecodeError) as exc:
            raise BackupError(f"Unable to read ignore file in {source}: {exc}") from exc

    def check_disk_space(self, source: PathLike, destination: PathLike) -> None:
        try:
            budget = size_budget(source, destination, self.buffer_bytes, store=self._store)
        except OSError as exc:
            raise ArchiveReadError(f"Unable to measure {source}: {exc}") from exc
        if not budget.sufficient:
            self._logger.warning(
                "disk_space", available=budget.available_bytes, required=budget.required_bytes
            )
            raise InsufficientDiskSpaceError(NO_DISK_SPACE)

    def plan(self, source: PathLike, destination: PathLike) -> ArchivePlan:
        matcher = Matcher(self.load_patterns(source))
        try:
            return ArchivePlanner(self._store, matcher).plan(source, destination, extension=self.extension)
        except OSError as exc:
            raise ArchiveReadError(f"Unable to list {source}: {exc}") from exc

    def backup(self, source: PathLike, destination: PathLike) -> BackupResult:
        """Archive ``source`` into a dated ZIP inside ``destination``."""
        source = source_directory(Path(source))
        destination = destination_directory(Path(destination))
        annotate = self._options.annotate

        self.check_disk_space(source, destination)
        self._logger.say(BACKUP_STARTED)
        self._logger.event(event="backup_start", phase="create", ok=True, source=str(source), annotate=annotate)

        self._logger.say(NEW_ARCHIVE)
        plan = self.plan(source, destination)
        members = [entry.relative_path for entry in plan.files]
        for name in members:
            self._logger.say(ADD_FILE, name)
        if not annotate:
            members = ArchiveWriter(self._store, compresslevel=self.compresslevel).write(plan)
        self._logger.say(OVERWRITING_ARCHIVE if plan.overwrite else WRITING_ARCHIVE, plan.output_path)

        self._logger.event(
            event="backup_complete",
            phase="create",
            ok=True,
            path=plan.output_path,
            members=len(members),
            size=plan.total_bytes,
            annotate=annotate,
        )
        self._logger.say(BACKUP_FINISHED)
        return BackupResult(
            archive_path=Path(plan.output_path),
            annotate=annotate,
            overwritten=plan.overwrite,
            members=members,
            total_bytes=plan.total_bytes,
        )

    def backup_to(self, destination: PathLike) -> BackupResult:
        """Back up the current source into ``destination``."""
        destination = destination_directory(Path(destination))
        return self.backup(self._options.require_source(), destination)


__all__ = ["BackupService"]
