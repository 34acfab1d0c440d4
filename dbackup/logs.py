"""Structured logging helpers for backup operations."""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, TextIO

LOGGER = logging.getLogger("dbackup.backup")


class BackupLogger:
    """Emit structured events and, when verbose, console diagnostics.

    Events go to the ``dbackup.backup`` logger as sorted-key JSON lines.
    Console lines written through :meth:`say` are also kept in :attr:`lines`.
    """

    def __init__(self, *, verbose: bool = False, stream: Optional[TextIO] = None) -> None:
        self.verbose = verbose
        self._stream = stream
        self.lines: List[str] = []

    # ------------------------------------------------------------------
    def _write(self, payload: Dict[str, Any], *, level: int) -> None:
        payload.setdefault("ts", datetime.now(timezone.utc).isoformat())
        LOGGER.log(level, "%s", json.dumps(payload, sort_keys=True, default=str))

    def event(self, *, event: str, phase: str, ok: bool, **extra: Any) -> None:
        payload = {
            "event": event,
            "phase": phase,
            "ok": bool(ok),
        }
        if extra:
            payload.update(extra)
        level = logging.INFO if ok else logging.ERROR
        self._write(payload, level=level)

    def warning(self, event: str, **extra: Any) -> None:
        self._write({"event": event, **extra, "ok": False}, level=logging.WARNING)

    # ------------------------------------------------------------------
    def say(self, message: str, *args: Any) -> None:
        """Print a diagnostic line when verbose output is enabled."""
        if not self.verbose:
            return
        text = message % args if args else message
        self.lines.append(text)
        print(text, file=self._stream or sys.stdout)


__all__ = ["BackupLogger"]
