"""Settings for DubSync, assembled from several sources.

Later sources win:
  config/default.toml < ~/.config/dubsync/config.toml < ./dubsync.toml
  < DUBSYNC_* environment variables < command-line flags

Environment variables use ``__`` between section and key, for example
``DUBSYNC_LLM__TARGET_LANGUAGE=te``.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel
from pydantic_settings import (
    BaseSettings,
    InitSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

_REPO_ROOT = Path(__file__).resolve().parents[3]
CONFIG_FILES = (
    _REPO_ROOT / "config" / "default.toml",
    Path.home() / ".config" / "dubsync" / "config.toml",
    Path("dubsync.toml"),
)


class TranscriptConfig(BaseModel):
    base_url: str = "https://youtubetranscript.com"
    proxy_url: str | None = None  # e.g. "https://corsproxy.io/?"
    source_language: str = "hi"
    timeout: float = 30.0


class LLMConfig(BaseModel):
    model: str = "gemini/gemini-2.5-flash"
    api_base: str | None = None
    temperature: float = 0.3
    target_language: str = "ta"


class SpeechConfig(BaseModel):
    model: str = "gemini/gemini-2.5-flash-preview-tts"
    voice: str = "Kore"
    audio_format: str = "mp3"


class PlaybackConfig(BaseModel):
    drift_threshold: float = 0.5  # seconds
    mute_video: bool = True


class DubSyncConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="DUBSYNC_", env_nested_delimiter="__")

    transcript: TranscriptConfig = TranscriptConfig()
    llm: LLMConfig = LLMConfig()
    speech: SpeechConfig = SpeechConfig()
    playback: PlaybackConfig = PlaybackConfig()
    workspace_dir: Path = Path("./dubsync_workspace")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Init kwargs carry CLI flags only; the TOML layers rank below env
        files = InitSettingsSource(settings_cls, init_kwargs=read_config_files())
        return init_settings, env_settings, dotenv_settings, files, file_secret_settings


def _read_toml(path: Path) -> dict:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}


def _merge(base: dict, overlay: dict) -> dict:
    """Return a copy of base with overlay applied; nested tables merge per key."""
    result = dict(base)
    for key, value in overlay.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = _merge(current, value)
        result[key] = value
    return result


def _set_dotted(data: dict, dotted_key: str, value: object) -> None:
    *sections, leaf = dotted_key.split(".")
    for section in sections:
        data = data.setdefault(section, {})
    data[leaf] = value


def read_config_files() -> dict:
    """Merge the TOML layers in CONFIG_FILES, later files winning."""
    data: dict = {}
    for path in CONFIG_FILES:
        data = _merge(data, _read_toml(path))

    # [general] keys are top-level fields
    general = data.pop("general", {})
    return _merge(data, general)


def load_config(**cli_overrides: object) -> DubSyncConfig:
    """Build the effective configuration.

    Args:
        **cli_overrides: Values from command-line flags, keyed by dotted path
            (``"llm.target_language"``). ``None`` means the flag was not given.
    """
    flags: dict = {}
    for dotted_key, value in cli_overrides.items():
        if value is not None:
            _set_dotted(flags, dotted_key, value)

    # TOML files and DUBSYNC_* variables are read by the settings sources
    return DubSyncConfig(**flags)
