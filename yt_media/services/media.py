"""Stream selection and download via yt-dlp metadata and httpx."""

from __future__ import annotations

import logging
from typing import Iterator

import httpx

from yt_media.core.errors import MediaError
from yt_media.core.models import ResolvedVideo, StreamSource
from yt_media.services.metadata import resolve_video

logger = logging.getLogger("yt_media")


def _rank(source: StreamSource) -> tuple[int, float]:
    return (source.height or 0, source.bitrate or 0.0)


def select_source(
    resolved: ResolvedVideo,
    quality: str = "highest",
    *,
    audio_only: bool = False,
) -> StreamSource:
    """Pick the encoding to stream.

    Audio-only requests take the highest-bitrate source without video.
    Otherwise only sources carrying both video and audio qualify:
    "highest" and "lowest" pick by height then bitrate, any other value
    picks the best source whose quality label contains it (e.g. "720p").

    Raises:
        MediaError: If no source matches.
    """
    if audio_only:
        candidates = [s for s in resolved.sources if s.has_audio and not s.has_video]
        if not candidates:
            raise MediaError(f"No audio-only stream available for {resolved.video_id}")
        return max(candidates, key=lambda s: s.bitrate or 0.0)

    combined = [s for s in resolved.sources if s.has_video and s.has_audio]
    if quality == "lowest":
        if combined:
            return min(combined, key=_rank)
    elif quality == "highest":
        if combined:
            return max(combined, key=_rank)
    else:
        matching = [s for s in combined if quality in s.quality]
        if matching:
            return max(matching, key=_rank)
        raise MediaError(
            f"No combined video and audio stream with quality {quality!r} "
            f"for {resolved.video_id}"
        )

    raise MediaError(f"No combined video and audio stream available for {resolved.video_id}")


class YtDlpMediaBackend:
    """MediaBackend that resolves with yt-dlp and streams with httpx.

    Args:
        chunk_size: Bytes per chunk handed to the consumer.
        timeout: httpx timeout in seconds for connect and each read.
    """

    def __init__(self, chunk_size: int = 64 * 1024, timeout: float = 30.0) -> None:
        self._chunk_size = chunk_size
        self._timeout = timeout

    def resolve(self, video_id: str) -> ResolvedVideo:
        return resolve_video(video_id)

    def open_stream(self, source: StreamSource) -> Iterator[bytes]:
        logger.debug("Opening stream itag=%s (%s)", source.itag, source.quality)
        try:
            with httpx.Client(follow_redirects=True, timeout=self._timeout) as client:
                with client.stream("GET", source.url, headers=source.headers) as response:
                    response.raise_for_status()
                    yield from response.iter_bytes(self._chunk_size)
        except httpx.HTTPStatusError as exc:
            raise MediaError(
                f"Stream error: HTTP {exc.response.status_code} for itag {source.itag}"
            ) from exc
        except httpx.HTTPError as exc:
            raise MediaError(f"Stream error: {exc}") from exc
