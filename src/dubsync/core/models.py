"""Shared data models for DubSync."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from dubsync.core.errors import DubSyncError

if TYPE_CHECKING:
    from dubsync.player.handles import AudioPlayerHandle, VideoPlayerHandle


class Stage(StrEnum):
    """Position of a pipeline run in its forward-only sequence."""

    IDLE = "idle"
    FETCHING_TRANSCRIPT = "fetching_transcript"
    TRANSCRIPT_READY = "transcript_ready"
    TRANSCRIPT_FAILED = "transcript_failed"
    TRANSLATING = "translating"
    TRANSLATED = "translated"
    TRANSLATION_FAILED = "translation_failed"
    SYNTHESIZING = "synthesizing"
    READY = "ready"
    SYNTHESIS_FAILED = "synthesis_failed"

    @property
    def is_failed(self) -> bool:
        return self in _FAILED_STAGES

    @property
    def is_busy(self) -> bool:
        """True while a provider call is in flight for this stage."""
        return self in _BUSY_STAGES


_FAILED_STAGES = frozenset(
    {Stage.TRANSCRIPT_FAILED, Stage.TRANSLATION_FAILED, Stage.SYNTHESIS_FAILED}
)
_BUSY_STAGES = frozenset(
    {Stage.FETCHING_TRANSCRIPT, Stage.TRANSLATING, Stage.TRANSLATED, Stage.SYNTHESIZING}
)


@dataclass(frozen=True)
class VideoReference:
    """Result of parsing a raw URL input. Rebuilt on every input change."""

    raw: str
    video_id: str | None = None

    @property
    def is_valid(self) -> bool:
        return self.video_id is not None


@dataclass
class TranscriptSegment:
    """One caption line as returned by a transcript provider."""

    text: str
    start: float | None = None  # seconds
    duration: float | None = None  # seconds


@dataclass
class PipelineRun:
    """One attempt to go from a video identifier to synthesized audio.

    Owned by the orchestrator; never reused once superseded.
    """

    token: int
    video_id: str
    stage: Stage = Stage.FETCHING_TRANSCRIPT
    transcript: str | None = None
    translation: str | None = None
    audio: bytes | None = None
    error: DubSyncError | None = None


@dataclass(frozen=True)
class RunSnapshot:
    """Immutable view of the active run, handed to observers."""

    token: int | None
    video_id: str | None
    stage: Stage
    transcript: str | None = None
    translation: str | None = None
    audio: bytes | None = None
    error: DubSyncError | None = None
    status_message: str = ""

    @property
    def can_submit(self) -> bool:
        """Whether the submit action should be enabled."""
        return self.stage is Stage.TRANSCRIPT_READY and bool((self.transcript or "").strip())


@dataclass
class PlaybackSession:
    """A video handle and an audio handle played as one transport."""

    video: VideoPlayerHandle | None
    audio: AudioPlayerHandle | None
    video_id: str
    audio_ready: bool = True
    is_playing: bool = False
    last_video_time: float | None = None
    last_audio_time: float | None = None
    drift_threshold: float = 0.5
