"""Shared in-memory backends for operation and dispatcher tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from yt_media.core.errors import MetadataError, TranscriptNotFound
from yt_media.core.models import CaptionSegment, ResolvedVideo, StreamSource, VideoInfo
from yt_media.core.options import ServerOptions

VIDEO_ID = "dQw4w9WgXcQ"
VIDEO_URL = f"https://www.youtube.com/watch?v={VIDEO_ID}"


def make_resolved(title: str = "Never Gonna Give You Up", duration: int = 212) -> ResolvedVideo:
    sources = [
        StreamSource(itag="18", url="https://media.test/18", container="mp4", quality="360p",
                     height=360, bitrate=500.0, has_video=True, has_audio=True),
        StreamSource(itag="22", url="https://media.test/22", container="mp4", quality="720p",
                     height=720, bitrate=1500.0, has_video=True, has_audio=True),
        StreamSource(itag="137", url="https://media.test/137", container="mp4", quality="1080p",
                     height=1080, bitrate=4000.0, has_video=True, has_audio=False),
        StreamSource(itag="140", url="https://media.test/140", container="m4a", quality="medium",
                     bitrate=129.0, has_video=False, has_audio=True),
        StreamSource(itag="251", url="https://media.test/251", container="webm", quality="medium",
                     bitrate=160.0, has_video=False, has_audio=True),
    ]
    info = VideoInfo(
        url=f"https://www.youtube.com/watch?v={VIDEO_ID}",
        title=title,
        duration=duration,
        formats=[
            {"itag": s.itag, "quality": s.quality, "container": s.container,
             "hasVideo": s.has_video, "hasAudio": s.has_audio}
            for s in sources
        ],
    )
    return ResolvedVideo(video_id=VIDEO_ID, info=info, sources=sources)


class StubMediaBackend:
    """Records calls; streams `payload` in fixed-size chunks."""

    def __init__(self, resolved: ResolvedVideo | None = None, payload: bytes = b"x" * 100_000,
                 chunk: int = 4096, fail_resolve: bool = False) -> None:
        self.resolved = resolved or make_resolved()
        self.payload = payload
        self.chunk = chunk
        self.fail_resolve = fail_resolve
        self.resolve_calls: list[str] = []
        self.opened: list[StreamSource] = []

    def resolve(self, video_id):
        self.resolve_calls.append(video_id)
        if self.fail_resolve:
            raise MetadataError(f"Failed to get video info: Video unavailable ({video_id})")
        return self.resolved

    def open_stream(self, source):
        self.opened.append(source)
        for i in range(0, len(self.payload), self.chunk):
            yield self.payload[i:i + self.chunk]

    @property
    def called(self) -> bool:
        return bool(self.resolve_calls or self.opened)


class StubTranscoder:
    """Drains the stream into `dest` and records the arguments."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[dict] = []
        self.error = error

    def transcode(self, chunks, dest: Path, **kwargs):
        data = b"".join(chunks)
        self.calls.append({"dest": dest, "bytes": len(data), **kwargs})
        if self.error is not None:
            raise self.error
        dest.write_bytes(data[:1000])


class StubCaptionBackend:
    """Serves captions for the languages in `tracks`, rejects the rest."""

    def __init__(self, tracks: dict[str, list[str]] | None = None) -> None:
        self.tracks = tracks if tracks is not None else {"en": ["Hello", "world"]}
        self.calls: list[tuple[str, str, bool]] = []

    def fetch(self, video_id, language, *, allow_generated=True):
        self.calls.append((video_id, language, allow_generated))
        if language not in self.tracks:
            raise TranscriptNotFound(f"No transcript found for {video_id} in language {language!r}")
        return [CaptionSegment(text=t, start=float(i), duration=1.0)
                for i, t in enumerate(self.tracks[language])]


@pytest.fixture
def options(tmp_path) -> ServerOptions:
    return ServerOptions(output_dir=tmp_path / "downloads")


@pytest.fixture
def media() -> StubMediaBackend:
    return StubMediaBackend()


@pytest.fixture
def transcoder() -> StubTranscoder:
    return StubTranscoder()


@pytest.fixture
def captions() -> StubCaptionBackend:
    return StubCaptionBackend()
