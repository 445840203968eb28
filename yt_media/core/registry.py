# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Catalogue of the operations callers can discover and invoke."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from pydantic import BaseModel

from yt_media.core.options import ServerOptions
from yt_media.core.params import (
    DownloadAudioParams,
    DownloadAudioSliceParams,
    DownloadVideoParams,
    DownloadVideoSliceParams,
    TranscriptLanguagesParams,
    TranscriptParams,
    VideoInfoParams,
)


@dataclass(frozen=True)
class OperationDescriptor:
    """Name, purpose, and parameter model of one operation."""

    name: str
    description: str
    parameters: type[BaseModel]
    defaults: Mapping[str, Any] = field(default_factory=dict)

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema of the parameters, keyed by wire names.

        `defaults` overrides the advertised default of a property, which is
        how configured values such as the output directory are published.
        """
        schema = self.parameters.model_json_schema(by_alias=True)
        properties = schema.get("properties", {})
        for key, value in self.defaults.items():
            if key in properties:
                properties[key]["default"] = value
        return schema


class OperationRegistry:
    """Read-only, ordered mapping of operation name to descriptor."""

    def __init__(self, descriptors: Iterable[OperationDescriptor]) -> None:
        by_name: dict[str, OperationDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in by_name:
                raise ValueError(f"Duplicate operation name: {descriptor.name}")
            by_name[descriptor.name] = descriptor
        self._by_name = MappingProxyType(by_name)
        self._ordered = tuple(by_name.values())

    def list(self) -> tuple[OperationDescriptor, ...]:
        """All descriptors in declaration order."""
        return self._ordered

    def get(self, name: str) -> OperationDescriptor | None:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._ordered)


def build_registry(options: ServerOptions) -> OperationRegistry:
    """Declare the operations, publishing configured defaults in their schemas."""
    output_default = {"outputPath": str(options.output_dir)}

    return OperationRegistry(
        [
            OperationDescriptor(
                name="get_video_info",
                description=(
                    "Get information about a YouTube video including title, "
                    "duration, and available formats"
                ),
                parameters=VideoInfoParams,
            ),
            OperationDescriptor(
                name="download_video",
                description="Download a YouTube video in specified quality",
                parameters=DownloadVideoParams,
                defaults=output_default,
            ),
            OperationDescriptor(
                name="download_video_slice",
                description="Download a specific time slice of a YouTube video",
                parameters=DownloadVideoSliceParams,
                defaults=output_default,
            ),
            OperationDescriptor(
                name="download_audio",
                description="Download audio from a YouTube video",
                parameters=DownloadAudioParams,
                defaults=output_default,
            ),
            OperationDescriptor(
                name="download_audio_slice",
                description="Download a specific time slice of audio from a YouTube video",
                parameters=DownloadAudioSliceParams,
                defaults=output_default,
            ),
            OperationDescriptor(
                name="get_transcript",
                description="Get transcript of a YouTube video in specified language",
                parameters=TranscriptParams,
            ),
            OperationDescriptor(
                name="get_available_transcript_languages",
                description="Get list of available transcript languages for a YouTube video",
                parameters=TranscriptLanguagesParams,
            ),
        ]
    )
