"""Backend contracts consumed by the media operations.

The operations depend only on these protocols; the yt-dlp, ffmpeg and
youtube-transcript-api adapters in ``yt_media.services`` satisfy them
structurally, and tests substitute in-memory stubs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Protocol

from yt_media.core.models import CaptionSegment, ResolvedVideo, StreamSource


class MediaBackend(Protocol):
    def resolve(self, video_id: str) -> ResolvedVideo:
        """Fetch title, duration and encodings for a video.

        Raises:
            MetadataError: If the video cannot be resolved.
        """
        ...  # pragma: no cover

    def open_stream(self, source: StreamSource) -> Iterator[bytes]:
        """Yield the bytes of one encoding, chunk by chunk.

        Raises:
            MediaError: If the stream cannot be opened or breaks mid-way.
        """
        ...  # pragma: no cover


class Transcoder(Protocol):
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
        """Consume `chunks` and produce `dest`, or raise TranscodeError."""
        ...  # pragma: no cover


class CaptionBackend(Protocol):
    def fetch(
        self,
        video_id: str,
        language: str,
        *,
        allow_generated: bool = True,
    ) -> list[CaptionSegment]:
        """Return caption segments in order, manual captions first.

        Raises:
            TranscriptNotFound: If no captions exist for `language`.
            TranscriptError: For any other failure.
        """
        ...  # pragma: no cover
