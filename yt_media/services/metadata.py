"""Metadata retrieval via yt-dlp."""

from __future__ import annotations

import logging

import yt_dlp

from yt_media.core.errors import MetadataError
from yt_media.core.models import Encoding, ResolvedVideo, StreamSource, VideoInfo

logger = logging.getLogger("yt_media")

# Only formats reachable with a single plain HTTP GET can be piped.
_STREAMABLE_PROTOCOLS = {"http", "https"}


def extract_info(video_id: str) -> dict:
    """Extract the raw yt-dlp info dict for a video. No download happens."""
    url = f"https://www.youtube.com/watch?v={video_id}"
    ydl_opts = {
        "quiet": True,
        "no_warnings": True,
        "skip_download": True,
        "no_color": True,
    }

    try:
        with yt_dlp.YoutubeDL(ydl_opts) as ydl:
            info = ydl.extract_info(url, download=False)
    except yt_dlp.utils.DownloadError as exc:
        raise MetadataError(f"Failed to get video info: {exc}") from exc

    if info is None:
        raise MetadataError(f"Failed to get video info: no metadata returned for {video_id}")

    return info


def resolve_video(video_id: str) -> ResolvedVideo:
    """Fetch and map metadata and stream sources for a video."""
    info = extract_info(video_id)
    return map_yt_dlp_info(video_id, info)


def map_yt_dlp_info(video_id: str, info: dict) -> ResolvedVideo:
    """Map a yt-dlp info dict to a ResolvedVideo."""
    formats = info.get("formats") or []

    video_info = VideoInfo(
        url=info.get("webpage_url") or f"https://www.youtube.com/watch?v={video_id}",
        title=info.get("title") or info.get("fulltitle") or video_id,
        duration=int(info.get("duration") or 0),
        formats=[_map_encoding(fmt) for fmt in formats],
    )

    sources = [
        _map_source(fmt)
        for fmt in formats
        if fmt.get("url") and fmt.get("protocol", "https") in _STREAMABLE_PROTOCOLS
    ]
    logger.debug("Resolved %s: %d formats, %d streamable", video_id, len(formats), len(sources))

    return ResolvedVideo(video_id=video_id, info=video_info, sources=sources)


def _has_codec(value: str | None) -> bool:
    return value not in (None, "none")


def _quality_label(fmt: dict) -> str:
    if fmt.get("format_note"):
        return fmt["format_note"]
    if fmt.get("height"):
        return f"{fmt['height']}p"
    return "unknown"


def _map_encoding(fmt: dict) -> Encoding:
    return Encoding(
        itag=str(fmt.get("format_id", "unknown")),
        quality=_quality_label(fmt),
        container=fmt.get("ext") or "unknown",
        has_video=_has_codec(fmt.get("vcodec")),
        has_audio=_has_codec(fmt.get("acodec")),
    )


def _map_source(fmt: dict) -> StreamSource:
    bitrate = fmt.get("tbr") or fmt.get("abr")
    return StreamSource(
        itag=str(fmt.get("format_id", "unknown")),
        url=fmt["url"],
        headers={str(k): str(v) for k, v in (fmt.get("http_headers") or {}).items()},
        container=fmt.get("ext") or "unknown",
        quality=_quality_label(fmt),
        height=fmt.get("height"),
        bitrate=float(bitrate) if bitrate else None,
        has_video=_has_codec(fmt.get("vcodec")),
        has_audio=_has_codec(fmt.get("acodec")),
    )
