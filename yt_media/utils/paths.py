# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Output directory validation and filename construction."""

from __future__ import annotations

import re
from pathlib import Path

from yt_media.core.errors import OutputPathError
from yt_media.utils.time_fmt import format_offset

_INVALID_PATH_CHARS_RE = re.compile(r'[<>:"|?*]')
_UNSAFE_FILENAME_RE = re.compile(r"[^\w\s-]")
_WHITESPACE_RE = re.compile(r"\s+")


def validate_output_path(output_path: str) -> Path:
    """Check a requested output directory and return it as a Path.

    Raises:
        OutputPathError: If the path is blank or contains a reserved character.
    """
    if not output_path or not output_path.strip():
        raise OutputPathError("Output path cannot be empty")
    if _INVALID_PATH_CHARS_RE.search(output_path):
        raise OutputPathError('Output path contains invalid characters: < > : " | ? *')
    return Path(output_path)


def sanitize_filename(name: str) -> str:
    """Turn a video title into a filesystem-safe stem.

    Drops everything but word characters, whitespace and hyphens, trims, and
    joins whitespace runs with underscores. Idempotent.
    """
    cleaned = _UNSAFE_FILENAME_RE.sub("", name).strip()
    return _WHITESPACE_RE.sub("_", cleaned)


def video_filename(stem: str) -> str:
    return f"{stem}.mp4"


def video_slice_filename(stem: str, start: float, end: float) -> str:
    return f"{stem}_slice_{format_offset(start)}-{format_offset(end)}.mp4"


def audio_filename(stem: str, fmt: str) -> str:
    return f"{stem}.{fmt}"


def audio_slice_filename(stem: str, start: float, end: float, fmt: str) -> str:
    return f"{stem}_audio_slice_{format_offset(start)}-{format_offset(end)}.{fmt}"
