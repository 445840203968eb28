# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Logging for the server: rich console on stderr, optional JSONL file.

stdout carries the protocol stream, so no handler here may write to it.
Dispatch events carry structured fields (`operation`, `event`, `details`,
`error`) that only the JSONL file records.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "yt_media"

_EVENT_FIELDS = ("operation", "event", "details", "error")

_console = Console(stderr=True)


class JsonlFormatter(logging.Formatter):
    """One JSON object per record; structured fields only when present."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in _EVENT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class JsonlFileHandler(logging.FileHandler):
    """Append-mode file handler writing JsonlFormatter lines."""

    def __init__(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(str(path), mode="a", encoding="utf-8")
        self.setFormatter(JsonlFormatter())


def setup_logging(*, verbose: bool = False, jsonl_path: Path | None = None) -> logging.Logger:
    """Configure the yt_media logger and return it.

    Replaces any handlers from a previous call, so it is safe to call once
    per CLI command. Verbose mode logs at DEBUG and shows times and call
    sites on the console; the JSONL file always records DEBUG and up.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    console = RichHandler(
        console=_console,
        show_time=verbose,
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    console.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.addHandler(console)

    if jsonl_path is not None:
        jsonl = JsonlFileHandler(jsonl_path)
        jsonl.setLevel(logging.DEBUG)
        logger.addHandler(jsonl)
        logger.setLevel(logging.DEBUG)

    return logger


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def log_event(
    level: int,
    message: str,
    *,
    operation: str | None = None,
    event: str | None = None,
    details: Mapping[str, Any] | None = None,
    error: str | None = None,
) -> None:
    """Log one dispatch event.

    `details` is a small mapping (parameter names, elapsed seconds, output
    path) kept as a JSON object in the JSONL file.
    """
    get_logger().log(
        level,
        message,
        extra={
            "operation": operation,
            "event": event,
            "details": dict(details) if details else None,
            "error": error,
        },
    )
