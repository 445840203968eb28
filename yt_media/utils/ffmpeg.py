# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""ffmpeg detection and argument building."""

from __future__ import annotations

import shutil

from yt_media.utils.time_fmt import format_offset


def check_ffmpeg(executable: str = "ffmpeg") -> bool:
    """Return True if ffmpeg is found on PATH."""
    return shutil.which(executable) is not None


def build_ffmpeg_args(
    executable: str,
    output: str,
    *,
    seek: float | None = None,
    duration: float | None = None,
    audio_bitrate: int | None = None,
    audio_only: bool = False,
) -> list[str]:
    """Build an ffmpeg command line that reads the source from stdin.

    The seek is applied on the input side, so decoding starts at `seek`
    and `duration` limits how much of the input is written.
    """
    args = [executable, "-hide_banner", "-loglevel", "error", "-y"]
    if seek is not None:
        args += ["-ss", format_offset(seek)]
    args += ["-i", "pipe:0"]
    if duration is not None:
        args += ["-t", format_offset(duration)]
    if audio_only:
        args.append("-vn")
    if audio_bitrate is not None:
        args += ["-b:a", f"{audio_bitrate}k"]
    args.append(output)
    return args
