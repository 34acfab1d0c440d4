"""Error hierarchy for dbackup."""
from __future__ import annotations


class PreconditionViolation(AssertionError):
    """Raised when a caller breaks an operation's contract.

    These are programming errors (negative sizes, malformed path arguments,
    arithmetic overflow). The command surface never catches them.
    """


class BackupError(RuntimeError):
    """Base exception for operational backup failures."""


class SourcePathError(BackupError):
    """Raised when the source directory is missing or not a directory."""


class DestinationPathError(BackupError):
    """Raised when the destination directory is missing or not a directory."""


class IgnoreFileExistsError(BackupError):
    """Raised when init finds an ignore file already in place."""


class IgnoreFileWriteError(BackupError):
    """Raised when init cannot write the ignore file."""


class InsufficientDiskSpaceError(BackupError):
    """Raised when the destination cannot hold the source plus the buffer."""


class ArchiveReadError(BackupError):
    """Raised when a source file cannot be read while building an archive."""


class ArchiveWriteError(BackupError):
    """Raised when the finished archive cannot be committed to disk."""


def require(condition: bool, message: str) -> None:
    if not condition:
        raise PreconditionViolation(message)


__all__ = [
    "ArchiveReadError",
    "ArchiveWriteError",
    "BackupError",
    "DestinationPathError",
    "IgnoreFileExistsError",
    "IgnoreFileWriteError",
    "InsufficientDiskSpaceError",
    "PreconditionViolation",
    "SourcePathError",
    "require",
]
