from __future__ import annotations

import json
import logging
import os
import sys
import time
from pathlib import Path
from typing import Any, Dict, Optional, Union

_RESERVED = set(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


class JsonLogFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "ts": time.time(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        for key, value in getattr(record, "__dict__", {}).items():
            if key.startswith("_") or key in _RESERVED or key in payload:
                continue
            try:
                json.dumps(value)
            except TypeError:
                continue
            payload[key] = value
        return json.dumps(payload, ensure_ascii=False)


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    name: str = "dbackup",
    *,
    level: Union[int, str] = logging.INFO,
    json_path: Optional[Path] = None,
) -> logging.Logger:
    """Attach a stderr handler for warnings and an optional JSON file handler."""
    logger = logging.getLogger(name)
    logger.setLevel(_coerce_level(level))
    if not any(getattr(handler, "_dbackup_console", False) for handler in logger.handlers):
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(logging.WARNING)
        console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        console._dbackup_console = True  # type: ignore[attr-defined]
        logger.addHandler(console)
    if json_path is not None:
        log_path = Path(json_path)
        for handler in list(logger.handlers):
            if isinstance(handler, logging.FileHandler) and getattr(handler, "baseFilename", None) == os.path.abspath(log_path):
                break
        else:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_path, encoding="utf-8")
            handler.setFormatter(JsonLogFormatter())
            logger.addHandler(handler)
    return logger


__all__ = ["JsonLogFormatter", "configure_logging"]
