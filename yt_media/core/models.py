# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Pydantic data models for yt-media."""

from __future__ import annotations

from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from yt_media.core.errors import ErrorKind


class Encoding(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    itag: str
    quality: str = "unknown"
    container: str = "unknown"
    has_video: bool = Field(False, alias="hasVideo")
    has_audio: bool = Field(False, alias="hasAudio")


class VideoInfo(BaseModel):
    url: str
    title: str
    duration: int
    formats: list[Encoding] = []


class CaptionSegment(BaseModel):
    text: str
    start: float = 0.0
    duration: float = 0.0


class OperationResult(BaseModel):
    """What an operation hands back to the dispatcher on success."""

    payload: str
    metadata: dict[str, Any] = {}


class Success(BaseModel):
    ok: Literal[True] = True
    payload: str
    metadata: dict[str, Any] = {}


class Failure(BaseModel):
    ok: Literal[False] = False
    kind: ErrorKind
    message: str


Outcome = Union[Success, Failure]


class StreamSource(BaseModel):
    """A directly fetchable encoding of a video."""

    itag: str
    url: str
    headers: dict[str, str] = {}
    container: str = "unknown"
    quality: str = "unknown"
    height: int | None = None
    bitrate: float | None = None
    has_video: bool = False
    has_audio: bool = False


class ResolvedVideo(BaseModel):
    video_id: str
    info: VideoInfo
    sources: list[StreamSource] = []
