"""Tests for yt_media.core.registry and yt_media.core.params."""

import math
from pathlib import Path

import pytest
from pydantic import ValidationError

from yt_media.core.options import ServerOptions
from yt_media.core.params import (
    DownloadAudioParams,
    DownloadAudioSliceParams,
    DownloadVideoParams,
    TranscriptParams,
    VideoInfoParams,
)
from yt_media.core.registry import OperationDescriptor, OperationRegistry, build_registry

EXPECTED_ORDER = [
    "get_video_info",
    "download_video",
    "download_video_slice",
    "download_audio",
    "download_audio_slice",
    "get_transcript",
    "get_available_transcript_languages",
]


@pytest.fixture
def registry(tmp_path):
    return build_registry(ServerOptions(output_dir=tmp_path / "dl"))


class TestRegistry:
    def test_declaration_order(self, registry):
        assert [d.name for d in registry.list()] == EXPECTED_ORDER

    def test_order_is_stable(self, registry):
        assert registry.list() == registry.list()

    def test_get(self, registry):
        assert registry.get("download_video").parameters is DownloadVideoParams

    def test_get_is_case_sensitive(self, registry):
        assert registry.get("Download_Video") is None
        assert "DOWNLOAD_VIDEO" not in registry

    def test_get_unknown(self, registry):
        assert registry.get("delete_video") is None

    def test_len(self, registry):
        assert len(registry) == 7

    def test_duplicate_names_rejected(self):
        d = OperationDescriptor(name="x", description="", parameters=VideoInfoParams)
        with pytest.raises(ValueError, match="Duplicate"):
            OperationRegistry([d, d])

    def test_descriptors_are_frozen(self, registry):
        with pytest.raises(AttributeError):
            registry.get("get_video_info").name = "other"

    def test_list_is_immutable(self, registry):
        assert isinstance(registry.list(), tuple)


class TestInputSchema:
    def test_required_fields(self, registry):
        schema = registry.get("download_audio_slice").input_schema
        assert schema["type"] == "object"
        assert schema["required"] == ["url", "startTime", "endTime"]

    def test_wire_names_and_types(self, registry):
        props = registry.get("download_video_slice").input_schema["properties"]
        assert props["url"]["type"] == "string"
        assert props["startTime"]["type"] == "number"
        assert props["endTime"]["type"] == "number"
        assert props["outputPath"]["type"] == "string"

    def test_defaults(self, registry):
        props = registry.get("download_video").input_schema["properties"]
        assert props["quality"]["default"] == "highest"

    def test_configured_output_default(self, registry, tmp_path):
        props = registry.get("download_audio").input_schema["properties"]
        assert props["outputPath"]["default"] == str(tmp_path / "dl")
        assert props["format"]["default"] == "mp3"

    def test_boolean_field(self, registry):
        props = registry.get("get_transcript").input_schema["properties"]
        assert props["autoGenerated"]["type"] == "boolean"
        assert props["autoGenerated"]["default"] is True
        assert props["language"]["default"] == "en"

    def test_schema_is_fresh_copy(self, registry):
        schema = registry.get("download_video").input_schema
        schema["properties"]["quality"]["default"] = "mutated"
        assert registry.get("download_video").input_schema["properties"]["quality"]["default"] == "highest"


class TestParams:
    def test_url_required(self):
        with pytest.raises(ValidationError):
            VideoInfoParams.model_validate({})

    def test_url_must_be_string(self):
        with pytest.raises(ValidationError):
            VideoInfoParams.model_validate({"url": 42})

    def test_url_not_empty(self):
        with pytest.raises(ValidationError):
            VideoInfoParams.model_validate({"url": ""})

    def test_defaults_applied(self):
        params = DownloadVideoParams.model_validate({"url": "dQw4w9WgXcQ"})
        assert params.quality == "highest"
        assert params.output_path is None

    def test_numbers_accept_int_and_float(self):
        params = DownloadAudioSliceParams.model_validate({"url": "x", "startTime": 1, "endTime": 2.5})
        assert params.start_time == 1
        assert params.end_time == 2.5
        assert params.duration == 1.5

    @pytest.mark.parametrize("bad", ["10", True, None, [10]])
    def test_numbers_are_strict(self, bad):
        with pytest.raises(ValidationError):
            DownloadAudioSliceParams.model_validate({"url": "x", "startTime": bad, "endTime": 20})

    def test_end_must_follow_start(self):
        with pytest.raises(ValidationError, match="endTime must be greater than startTime"):
            DownloadAudioSliceParams.model_validate({"url": "x", "startTime": 20, "endTime": 20})

    @pytest.mark.parametrize(
        "start, end, field",
        [(10, math.inf, "endTime"), (math.nan, 20, "startTime"), (10, math.nan, "endTime"), (-math.inf, 5, "startTime")],
    )
    def test_offsets_must_be_finite(self, start, end, field):
        with pytest.raises(ValidationError, match=f"{field} must be a finite number"):
            DownloadAudioSliceParams.model_validate({"url": "x", "startTime": start, "endTime": end})

    def test_negative_start(self):
        with pytest.raises(ValidationError, match="startTime must not be negative"):
            DownloadAudioSliceParams.model_validate({"url": "x", "startTime": -1, "endTime": 20})

    def test_format_must_be_alphanumeric(self):
        with pytest.raises(ValidationError):
            DownloadAudioParams.model_validate({"url": "x", "format": "../mp3"})

    def test_boolean_is_strict(self):
        with pytest.raises(ValidationError):
            TranscriptParams.model_validate({"url": "x", "autoGenerated": "yes"})

    def test_unknown_fields_ignored(self):
        params = VideoInfoParams.model_validate({"url": "x", "extra": 1})
        assert params.url == "x"
