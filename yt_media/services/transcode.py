"""Transcoding by piping a byte stream through ffmpeg."""

from __future__ import annotations

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Iterable

from yt_media.core.errors import TranscodeError
from yt_media.core.writer import atomic_destination
from yt_media.utils.ffmpeg import build_ffmpeg_args, check_ffmpeg

logger = logging.getLogger("yt_media")

_STDERR_TAIL = 500


class FfmpegTranscoder:
    """Transcoder backed by an ffmpeg subprocess.

    Chunks are written to ffmpeg's stdin as they arrive, so memory use does
    not depend on the length of the source. ffmpeg writes into a temporary
    file that is renamed to the destination only once it exits cleanly.
    """

    def __init__(self, executable: str = "ffmpeg") -> None:
        self._executable = executable

    def transcode(
        self,
        chunks: Iterable[bytes],
        dest: Path,
        *,
        output_format: str,
        seek: float | None = None,
        duration: float | None = None,
        audio_bitrate: int | None = None,
        audio_only: bool = False,
    ) -> None:
        if not check_ffmpeg(self._executable):
            raise TranscodeError(
                f"ffmpeg is required for transcoding but {self._executable!r} was not found. "
                f"Install ffmpeg or set YT_MEDIA_FFMPEG_PATH."
            )

        with atomic_destination(dest) as tmp:
            args = build_ffmpeg_args(
                self._executable,
                str(tmp),
                seek=seek,
                duration=duration,
                audio_bitrate=audio_bitrate,
                audio_only=audio_only,
            )
            logger.debug("Running %s", " ".join(args))
            self._run(args, chunks, output_format)

    def _run(self, args: list[str], chunks: Iterable[bytes], output_format: str) -> None:
        # stderr goes to a file so a chatty ffmpeg cannot block on a full pipe
        with tempfile.TemporaryFile() as stderr_file:
            proc = subprocess.Popen(
                args,
                stdin=subprocess.PIPE,
                stdout=subprocess.DEVNULL,
                stderr=stderr_file,
            )
            try:
                self._feed(proc, chunks)
            except BaseException:
                proc.kill()
                proc.wait()
                raise
            returncode = proc.wait()

            stderr_file.seek(0)
            stderr = stderr_file.read().decode("utf-8", errors="replace").strip()

        for line in stderr.splitlines():
            logger.debug("ffmpeg: %s", line)

        if returncode != 0:
            tail = stderr[-_STDERR_TAIL:] or f"exit status {returncode}"
            raise TranscodeError(f"FFmpeg error ({output_format}): {tail}")

    @staticmethod
    def _feed(proc: subprocess.Popen, chunks: Iterable[bytes]) -> None:
        assert proc.stdin is not None
        try:
            for chunk in chunks:
                proc.stdin.write(chunk)
        except BrokenPipeError:
            # ffmpeg stopped reading: either it has all it needs (-t reached)
            # or it failed, which the exit status reports.
            logger.debug("ffmpeg closed its input early")
        finally:
            try:
                proc.stdin.close()
            except BrokenPipeError:
                pass
