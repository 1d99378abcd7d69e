"""Capability interfaces the pipeline orchestrator depends on.

Implementations report failures by raising the typed errors from
``dubsync.core.errors``; anything else is classified at the stage boundary.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from dubsync.core.models import TranscriptSegment


@runtime_checkable
class TranscriptProvider(Protocol):
    async def fetch(self, video_id: str) -> list[TranscriptSegment]:
        """Fetch source-language transcript segments for a video.

        Raises:
            TranscriptUnavailable: No matching-language transcript is listed.
            TranscriptServiceError: The response was malformed or the call failed.
        """
        ...


@runtime_checkable
class Translator(Protocol):
    async def translate(self, text: str) -> str:
        """Translate text. Raises TranslationError."""
        ...


@runtime_checkable
class SpeechSynthesizer(Protocol):
    async def synthesize(self, text: str) -> bytes:
        """Render text to an audio payload. Raises SynthesisError."""
        ...
