"""Transcript fetching via youtube-transcript-api."""

from __future__ import annotations

import logging

from youtube_transcript_api import NoTranscriptFound, TranscriptsDisabled, YouTubeTranscriptApi

from yt_media.core.errors import TranscriptError, TranscriptNotFound
from yt_media.core.models import CaptionSegment

logger = logging.getLogger("yt_media")


class TranscriptApiCaptionBackend:
    """CaptionBackend backed by youtube-transcript-api.

    Manual captions are preferred over generated ones for the requested
    language; no other language is substituted.
    """

    def __init__(self, api: YouTubeTranscriptApi | None = None) -> None:
        self._api = api if api is not None else YouTubeTranscriptApi()

    def fetch(
        self,
        video_id: str,
        language: str,
        *,
        allow_generated: bool = True,
    ) -> list[CaptionSegment]:
        try:
            if allow_generated:
                fetched = self._api.fetch(video_id, languages=[language])
            else:
                transcript_list = self._api.list(video_id)
                fetched = transcript_list.find_manually_created_transcript([language]).fetch()
        except NoTranscriptFound as exc:
            raise TranscriptNotFound(
                f"No transcript found for {video_id} in language {language!r}"
            ) from exc
        except TranscriptsDisabled as exc:
            raise TranscriptNotFound(f"Transcripts are disabled for {video_id}") from exc
        except Exception as exc:
            raise TranscriptError(
                f"Failed to fetch transcript for {video_id}: {exc}"
            ) from exc

        segments = [
            CaptionSegment(text=snippet.text, start=snippet.start, duration=snippet.duration)
            for snippet in fetched
        ]
        if not segments:
            raise TranscriptNotFound(
                f"No transcript found for {video_id} in language {language!r}"
            )
        logger.debug("Fetched %d caption segments for %s (%s)", len(segments), video_id, language)
        return segments
