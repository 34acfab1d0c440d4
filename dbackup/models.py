"""Pydantic models for the dbackup command state."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import DestinationPathError, SourcePathError

NO_SOURCE_PATH = "The specified source path doesn't exist"
INVALID_SOURCE_PATH = "The specified source path is not a valid directory"
NO_DESTINATION_PATH = "The specified destination path doesn't exist"
INVALID_DESTINATION_PATH = "The specified destination path is not a valid directory"
MISSING_SOURCE = "No source path was given before the destination path"


def source_directory(value: Path) -> Path:
    """Return ``value`` if it is an existing directory, else raise :class:`SourcePathError`."""
    path = Path(value)
    if not path.exists():
        raise SourcePathError(NO_SOURCE_PATH)
    if not path.is_dir():
        raise SourcePathError(INVALID_SOURCE_PATH)
    return path


def destination_directory(value: Path) -> Path:
    """Return ``value`` if it is an existing directory, else raise :class:`DestinationPathError`."""
    path = Path(value)
    if not path.exists():
        raise DestinationPathError(NO_DESTINATION_PATH)
    if not path.is_dir():
        raise DestinationPathError(INVALID_DESTINATION_PATH)
    return path


class CommandOptions(BaseModel):
    """Options and the current source root for one command-line invocation.

    ``source`` is re-validated on every assignment, so it only ever holds
    ``None`` or an existing directory. Annotate mode implies verbose output.
    """

    model_config = ConfigDict(validate_assignment=True)

    source: Optional[Path] = Field(None, description="Source directory used by the next backup.")
    verbose: bool = Field(False, description="Explain what is being done.")
    annotate: bool = Field(False, description="Plan and report without writing anything.")

    @model_validator(mode="before")
    @classmethod
    def _annotate_implies_verbose(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("annotate"):
            return {**data, "verbose": True}
        return data

    @field_validator("source")
    @classmethod
    def _existing_source(cls, value: Optional[Path]) -> Optional[Path]:
        if value is None:
            return None
        return source_directory(value)

    @property
    def diagnostics(self) -> bool:
        """Annotate mode always reports what it would do."""
        return self.verbose or self.annotate

    def require_source(self) -> Path:
        if self.source is None:
            raise SourcePathError(MISSING_SOURCE)
        return self.source


__all__ = [
    "CommandOptions",
    "destination_directory",
    "source_directory",
]
