# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Parameter models, one per operation.

Field types are strict: a number field takes ints and floats but not
strings or booleans, a string field takes only strings. Field aliases are
the names callers use on the wire.
"""

from __future__ import annotations

import math
from typing import Annotated, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    WithJsonSchema,
    model_validator,
)

Number = Annotated[Union[StrictInt, StrictFloat], WithJsonSchema({"type": "number"})]
NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]
OptionalStr = Annotated[Optional[StrictStr], WithJsonSchema({"type": "string"})]

_URL_DESCRIPTION = "YouTube video URL or ID"
_OUTPUT_PATH_DESCRIPTION = "Output directory path (default: configured download directory)"


class OperationParams(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    url: NonEmptyStr = Field(description=_URL_DESCRIPTION)


class VideoInfoParams(OperationParams):
    pass


class DownloadVideoParams(OperationParams):
    quality: StrictStr = Field(
        "highest",
        description="Video quality: highest, lowest, or a label such as 720p (default: highest)",
    )
    output_path: OptionalStr = Field(None, alias="outputPath", description=_OUTPUT_PATH_DESCRIPTION)


class SliceParams(OperationParams):
    start_time: Number = Field(alias="startTime", description="Start time in seconds")
    end_time: Number = Field(alias="endTime", description="End time in seconds")
    output_path: OptionalStr = Field(None, alias="outputPath", description=_OUTPUT_PATH_DESCRIPTION)

    @model_validator(mode="after")
    def _check_bounds(self) -> SliceParams:
        for name, value in (("startTime", self.start_time), ("endTime", self.end_time)):
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number")
        if self.start_time < 0:
            raise ValueError("startTime must not be negative")
        if self.end_time <= self.start_time:
            raise ValueError("endTime must be greater than startTime")
        return self

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time


class DownloadVideoSliceParams(SliceParams):
    pass


class DownloadAudioParams(OperationParams):
    format: StrictStr = Field(
        "mp3",
        pattern=r"^[A-Za-z0-9]+$",
        description="Audio format (default: mp3)",
    )
    output_path: OptionalStr = Field(None, alias="outputPath", description=_OUTPUT_PATH_DESCRIPTION)


class DownloadAudioSliceParams(SliceParams):
    format: StrictStr = Field(
        "mp3",
        pattern=r"^[A-Za-z0-9]+$",
        description="Audio format (default: mp3)",
    )


class TranscriptParams(OperationParams):
    language: StrictStr = Field("en", description="Language code (default: en)")
    auto_generated: StrictBool = Field(
        True,
        alias="autoGenerated",
        description="Accept auto-generated captions when no manual ones exist (default: true)",
    )


class TranscriptLanguagesParams(OperationParams):
    pass
