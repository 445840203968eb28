# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""The media operations exposed as tools.

Each public method takes a validated parameter model and returns an
OperationResult, or raises an OperationError (or InvalidParametersError)
for the dispatcher to categorize. Method names match operation names.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from yt_media.core.errors import InvalidParametersError, OperationError, OutputPathError
from yt_media.core.interfaces import CaptionBackend, MediaBackend, Transcoder
from yt_media.core.models import OperationResult, ResolvedVideo
from yt_media.core.options import ServerOptions
from yt_media.core.params import (
    DownloadAudioParams,
    DownloadAudioSliceParams,
    DownloadVideoParams,
    DownloadVideoSliceParams,
    SliceParams,
    TranscriptLanguagesParams,
    TranscriptParams,
    VideoInfoParams,
)
from yt_media.core.writer import write_stream
from yt_media.services.id_parser import extract_video_id, resolve_reference
from yt_media.services.media import YtDlpMediaBackend, select_source
from yt_media.services.transcode import FfmpegTranscoder
from yt_media.services.transcript import TranscriptApiCaptionBackend
from yt_media.utils.paths import (
    audio_filename,
    audio_slice_filename,
    sanitize_filename,
    validate_output_path,
    video_filename,
    video_slice_filename,
)

logger = logging.getLogger("yt_media")


@dataclass
class _Target:
    resolved: ResolvedVideo
    out_dir: Path
    stem: str


class MediaOperations:
    """Facade over the media, transcoding, and caption backends.

    Backends default to the yt-dlp/httpx, ffmpeg and youtube-transcript-api
    adapters built from `options`.
    """

    def __init__(
        self,
        options: ServerOptions,
        *,
        media: MediaBackend | None = None,
        captions: CaptionBackend | None = None,
        transcoder: Transcoder | None = None,
    ) -> None:
        self._options = options
        self._media = media or YtDlpMediaBackend(
            chunk_size=options.chunk_size, timeout=options.http_timeout
        )
        self._captions = captions or TranscriptApiCaptionBackend()
        self._transcoder = transcoder or FfmpegTranscoder(options.ffmpeg_path)

    # --- Metadata ---

    def get_video_info(self, params: VideoInfoParams) -> OperationResult:
        ref = resolve_reference(params.url)
        resolved = self._media.resolve(ref.video_id)
        payload = json.dumps(resolved.info.model_dump(mode="json", by_alias=True), indent=2)
        return OperationResult(payload=payload)

    # --- Video ---

    def download_video(self, params: DownloadVideoParams) -> OperationResult:
        target = self._prepare(params.url, params.output_path)
        source = select_source(target.resolved, params.quality)
        dest = target.out_dir / video_filename(target.stem)

        logger.info("Downloading %s (itag %s) to %s", target.resolved.video_id, source.itag, dest)
        try:
            written = write_stream(self._media.open_stream(source), dest)
        except OSError as exc:
            raise OperationError(f"Failed to download video: Write error: {exc}") from exc

        return OperationResult(
            payload=f"Video downloaded successfully to: {dest}",
            metadata={"filepath": str(dest), "quality": params.quality, "bytes": written},
        )

    def download_video_slice(self, params: DownloadVideoSliceParams) -> OperationResult:
        target = self._prepare(params.url, params.output_path, params)
        source = select_source(target.resolved, "highest")
        dest = target.out_dir / video_slice_filename(target.stem, params.start_time, params.end_time)

        logger.info(
            "Cutting %s [%s, %s) to %s",
            target.resolved.video_id, params.start_time, params.end_time, dest,
        )
        self._transcode(
            source,
            dest,
            output_format="mp4",
            seek=params.start_time,
            duration=params.duration,
        )
        return OperationResult(
            payload=f"Video slice downloaded successfully to: {dest}",
            metadata={
                "filepath": str(dest),
                "startTime": params.start_time,
                "endTime": params.end_time,
            },
        )

    # --- Audio ---

    def download_audio(self, params: DownloadAudioParams) -> OperationResult:
        target = self._prepare(params.url, params.output_path)
        source = select_source(target.resolved, audio_only=True)
        dest = target.out_dir / audio_filename(target.stem, params.format)

        logger.info("Extracting audio of %s to %s", target.resolved.video_id, dest)
        self._transcode(
            source,
            dest,
            output_format=params.format,
            audio_bitrate=self._options.audio_bitrate,
            audio_only=True,
        )
        return OperationResult(
            payload=f"Audio downloaded successfully to: {dest}",
            metadata={"filepath": str(dest), "format": params.format},
        )

    def download_audio_slice(self, params: DownloadAudioSliceParams) -> OperationResult:
        target = self._prepare(params.url, params.output_path, params)
        source = select_source(target.resolved, audio_only=True)
        dest = target.out_dir / audio_slice_filename(
            target.stem, params.start_time, params.end_time, params.format
        )

        logger.info(
            "Extracting audio of %s [%s, %s) to %s",
            target.resolved.video_id, params.start_time, params.end_time, dest,
        )
        self._transcode(
            source,
            dest,
            output_format=params.format,
            seek=params.start_time,
            duration=params.duration,
            audio_bitrate=self._options.audio_bitrate,
            audio_only=True,
        )
        return OperationResult(
            payload=f"Audio slice downloaded successfully to: {dest}",
            metadata={
                "filepath": str(dest),
                "format": params.format,
                "startTime": params.start_time,
                "endTime": params.end_time,
            },
        )

    # --- Transcripts ---

    def get_transcript(self, params: TranscriptParams) -> OperationResult:
        video_id = extract_video_id(params.url)
        segments = self._captions.fetch(
            video_id, params.language, allow_generated=params.auto_generated
        )
        if not segments:
            raise OperationError(
                "Failed to get transcript: No transcript found for this video "
                "in the specified language"
            )

        text = " ".join(segment.text for segment in segments)
        return OperationResult(
            payload=text,
            metadata={"language": params.language, "charCount": len(text)},
        )

    def get_available_transcript_languages(
        self, params: TranscriptLanguagesParams
    ) -> OperationResult:
        """Probe the configured languages one by one.

        Never raises: an unparseable URL or a video without any captions
        reports ["en"].
        """
        languages = self._probe_languages(params.url) or ["en"]
        return OperationResult(
            payload=json.dumps(languages, indent=2),
            metadata={"availableLanguages": len(languages)},
        )

    def _probe_languages(self, url: str) -> list[str]:
        try:
            video_id = extract_video_id(url)
        except OperationError as exc:
            logger.warning("Cannot probe transcript languages for %r: %s", url, exc)
            return []

        available: list[str] = []
        for lang in self._options.probe_languages:
            try:
                self._captions.fetch(video_id, lang)
            except Exception as exc:
                logger.debug("No %s transcript for %s: %s", lang, video_id, exc)
                continue
            available.append(lang)
        return available

    # --- Helpers ---

    def _prepare(
        self,
        url: str,
        output_path: str | None,
        slice_params: SliceParams | None = None,
    ) -> _Target:
        """Validate the output directory, resolve the video, create the directory."""
        if output_path is None:
            output_path = str(self._options.output_dir)
        out_dir = validate_output_path(output_path)

        ref = resolve_reference(url)
        resolved = self._media.resolve(ref.video_id)

        if slice_params is not None:
            length = resolved.info.duration
            if length > 0 and slice_params.start_time >= length:
                raise InvalidParametersError(
                    f"startTime {slice_params.start_time} is beyond the end "
                    f"of the video ({length}s)"
                )

        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputPathError(f"Cannot create output directory {out_dir}: {exc}") from exc

        stem = sanitize_filename(resolved.info.title) or ref.video_id
        return _Target(resolved=resolved, out_dir=out_dir, stem=stem)

    def _transcode(self, source, dest: Path, **kwargs) -> None:
        try:
            self._transcoder.transcode(self._media.open_stream(source), dest, **kwargs)
        except OSError as exc:
            raise OperationError(f"Failed to write {dest}: {exc}") from exc
