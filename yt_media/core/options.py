"""ServerOptions settings model for yt-media."""

from __future__ import annotations

from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource
from pydantic_settings import YamlConfigSettingsSource

PROBE_LANGUAGES = ["en", "es", "fr", "de", "it", "pt", "ru", "ja", "ko", "zh", "ar", "hi"]


class ServerOptions(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="YT_MEDIA_",
        yaml_file="yt_media.yaml",
        yaml_file_encoding="utf-8",
        populate_by_name=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    output_dir: Path = Field(
        Path("./downloads"),
        validation_alias=AliasChoices("output_dir", "YT_MEDIA_OUTPUT_DIR", "YOUTUBE_DOWNLOAD_PATH"),
    )
    audio_bitrate: int = 128
    probe_languages: list[str] = PROBE_LANGUAGES
    ffmpeg_path: str = "ffmpeg"
    chunk_size: int = 64 * 1024
    http_timeout: float = 30.0
    verbose: bool = False
    log_file: Path | None = None
