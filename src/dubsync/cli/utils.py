"""Shared CLI helpers — wiring config into the pipeline and players."""

from __future__ import annotations

import typer

from dubsync.core.config import DubSyncConfig
from dubsync.core.models import RunSnapshot
from dubsync.core.pipeline import PipelineOrchestrator
from dubsync.core.session import AudioFactory, VideoFactory
from dubsync.core.video_id import parse_reference
from dubsync.providers.speech import LLMSpeechSynthesizer
from dubsync.providers.transcript import YouTubeTranscriptService
from dubsync.providers.translator import LLMTranslator
from dubsync.utils.console import console


def build_orchestrator(config: DubSyncConfig) -> PipelineOrchestrator:
    """Create an orchestrator backed by the default provider adapters."""
    source = config.transcript.source_language
    return PipelineOrchestrator(
        transcripts=YouTubeTranscriptService(config.transcript),
        translator=LLMTranslator(config.llm, source_language=source),
        synthesizer=LLMSpeechSynthesizer(config.speech),
        source_language=source,
        target_language=config.llm.target_language,
    )


def mpv_factories(config: DubSyncConfig) -> tuple[VideoFactory, AudioFactory]:
    """Player factories that open mpv windows for the video and the dub track."""
    from dubsync.player.mpv_player import MpvAudioHandle, MpvVideoHandle

    def video_factory(video_id: str) -> MpvVideoHandle:
        handle = MpvVideoHandle(config.playback)
        handle.load(video_id)
        return handle

    def audio_factory(audio: bytes) -> MpvAudioHandle:
        return MpvAudioHandle(audio, audio_format=config.speech.audio_format)

    return video_factory, audio_factory


def require_video_id(url: str) -> str:
    """Extract the video id from a URL or exit with an error."""
    reference = parse_reference(url)
    if reference.video_id is None:
        console.print(f"[red]Not a recognizable YouTube video URL:[/red] {url}")
        raise typer.Exit(1)
    return reference.video_id


def exit_on_failure(snapshot: RunSnapshot) -> None:
    """Print the run's error and exit if it ended in a failed stage."""
    if snapshot.error is None:
        return
    console.print(f"[red]{snapshot.stage.replace('_', ' ').capitalize()}:[/red] {snapshot.error}")
    console.print(f"[dim]Error kind: {snapshot.error.kind}[/dim]")
    raise typer.Exit(1)
