"""URL/ID parsing and validation."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import parse_qs, urlparse

from yt_media.core.errors import InvalidVideoReference

_VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")

_PATH_PREFIXES = ("/embed/", "/shorts/", "/v/")


@dataclass(frozen=True)
class MediaReference:
    """A video resolved from a URL or bare ID."""

    video_id: str

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"


def _is_valid_video_id(candidate: str) -> bool:
    """Check if a string looks like a valid YouTube video ID."""
    return bool(_VIDEO_ID_RE.match(candidate))


def parse_video_id(input_str: str) -> str | None:
    """Extract a YouTube video ID from a URL or raw ID string.

    Returns None if input cannot be parsed.
    """
    text = input_str.strip()
    if not text:
        return None

    if _is_valid_video_id(text):
        return text

    # "youtu.be/ID" and "www.youtube.com/watch?v=ID" carry no scheme
    if "://" not in text:
        text = f"https://{text}"

    try:
        parsed = urlparse(text)
    except ValueError:
        return None

    host = (parsed.hostname or "").lower().removeprefix("www.")

    if host in ("youtube.com", "m.youtube.com", "music.youtube.com"):
        if parsed.path == "/watch":
            qs = parse_qs(parsed.query)
            candidates = qs.get("v", [])
            if candidates and _is_valid_video_id(candidates[0]):
                return candidates[0]
        for prefix in _PATH_PREFIXES:
            if parsed.path.startswith(prefix):
                candidate = parsed.path.removeprefix(prefix).split("/")[0]
                if _is_valid_video_id(candidate):
                    return candidate

    elif host == "youtu.be":
        candidate = parsed.path.lstrip("/").split("/")[0]
        if _is_valid_video_id(candidate):
            return candidate

    return None


def extract_video_id(input_str: str) -> str:
    """Like parse_video_id, but raise when nothing can be extracted.

    Raises:
        InvalidVideoReference: If the input is neither a video URL nor an ID.
    """
    video_id = parse_video_id(input_str)
    if video_id is None:
        raise InvalidVideoReference("Invalid video URL or identifier")
    return video_id


def resolve_reference(input_str: str) -> MediaReference:
    """Resolve a URL or bare ID into a MediaReference."""
    return MediaReference(video_id=extract_video_id(input_str))
