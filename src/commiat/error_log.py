"""
Persistent error log.

Fatal errors, and provider failures that triggered a fallback, are
appended to ``~/.commiat/error.log`` so the full details survive the
short message printed on the terminal. Entries are written through a
dedicated :mod:`logging` logger with a file handler that is only opened
on first use.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from commiat.config import loader


ERROR_LOG_FILENAME = "error.log"


def default_error_log_path() -> Path:
    return loader._get_config_directory() / ERROR_LOG_FILENAME


def format_error_entry(error: BaseException) -> str:
    """Render ``error`` with its provider details, one field per line."""
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    lines: List[str] = [f"[{timestamp}] {error}"]
    provider = getattr(error, "provider", None)
    if provider:
        lines.append(f"Provider: {provider}")
    request_url = getattr(error, "request_url", None)
    if request_url:
        lines.append(f"Request URL: {request_url}")
    status = getattr(error, "status", None)
    if status:
        lines.append(f"Response Status: {status}")
    response_data = getattr(error, "response_data", None)
    if response_data is not None:
        lines.append(f"Response Data: {json.dumps(response_data, default=str)}")
    return "\n".join(lines)


class ErrorLog:
    """Append-only error log file.

    Parameters
    ----------
    path : Path, optional
        Location of the log file. Defaults to ``~/.commiat/error.log``.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = path or default_error_log_path()
        self._logger = logging.getLogger(f"commiat.error_log.{id(self)}")
        self._logger.propagate = False
        self._logger.setLevel(logging.ERROR)
        self._handler: Optional[logging.FileHandler] = None

    def _ensure_handler(self) -> None:
        if self._handler is not None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(self.path, mode="a", encoding="utf-8", delay=True)
        # Blank line between entries.
        handler.terminator = "\n\n"
        handler.setFormatter(logging.Formatter("%(message)s"))
        self._logger.addHandler(handler)
        self._handler = handler

    def record(self, error: BaseException) -> None:
        """Append ``error`` (with its traceback, if any) to the log file."""
        self._ensure_handler()
        exc_info = (type(error), error, error.__traceback__) if error.__traceback__ else None
        self._logger.error(format_error_entry(error), exc_info=exc_info)

    def close(self) -> None:
        if self._handler is None:
            return
        self._logger.removeHandler(self._handler)
        self._handler.close()
        self._handler = None
