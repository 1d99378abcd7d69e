"""Pipeline orchestrator — transcript, translation, speech synthesis.

Each video identifier gets its own ``PipelineRun`` with a fresh token. Starting
a run supersedes the previous one by moving the active token; provider calls
already in flight are never cancelled, their results are dropped on arrival
because every resumption point compares the run's token with the active one.

All methods must be called from inside a running event loop.
"""

from __future__ import annotations

import asyncio
import itertools
from dataclasses import dataclass
from typing import Callable

from dubsync.core.errors import (
    DubSyncError,
    InvalidState,
    SynthesisError,
    TranscriptServiceError,
    classify_error,
)
from dubsync.core.events import EventCallback, PipelineEvent
from dubsync.core.languages import language_name
from dubsync.core.models import PipelineRun, RunSnapshot, Stage
from dubsync.providers.base import SpeechSynthesizer, TranscriptProvider, Translator
from dubsync.utils.console import console


@dataclass
class RunHandle:
    """Reference to the work scheduled by ``start_run`` or ``submit``."""

    token: int
    video_id: str
    task: asyncio.Task[None]

    async def wait(self) -> None:
        """Wait until the scheduled stages have settled (or been dropped)."""
        await self.task


class PipelineOrchestrator:
    """Drive transcript → translation → synthesis for the most recent video."""

    def __init__(
        self,
        transcripts: TranscriptProvider,
        translator: Translator,
        synthesizer: SpeechSynthesizer,
        source_language: str = "hi",
        target_language: str = "ta",
        on_event: EventCallback | None = None,
    ) -> None:
        self._transcripts = transcripts
        self._translator = translator
        self._synthesizer = synthesizer
        self.source_language = source_language
        self.target_language = target_language

        self._tokens = itertools.count(1)
        self._active_token = 0
        self._run: PipelineRun | None = None
        self._listeners: list[EventCallback] = []
        if on_event is not None:
            self._listeners.append(on_event)

    # -- observation ---------------------------------------------------------

    @property
    def active_token(self) -> int:
        return self._active_token

    @property
    def stage(self) -> Stage:
        return self._run.stage if self._run is not None else Stage.IDLE

    def snapshot(self) -> RunSnapshot:
        """Return the observable state of the active run."""
        run = self._run
        if run is None:
            return RunSnapshot(token=None, video_id=None, stage=Stage.IDLE)
        return RunSnapshot(
            token=run.token,
            video_id=run.video_id,
            stage=run.stage,
            transcript=run.transcript,
            translation=run.translation,
            audio=run.audio if run.stage is Stage.READY else None,
            error=run.error,
            status_message=self._status_message(run),
        )

    def subscribe(self, callback: EventCallback) -> Callable[[], None]:
        """Register a listener for state changes. Returns an unsubscribe function."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    # -- commands ------------------------------------------------------------

    def start_run(self, video_id: str) -> RunHandle:
        """Supersede any active run and begin fetching the transcript for video_id."""
        run = PipelineRun(token=next(self._tokens), video_id=video_id)
        self._active_token = run.token
        self._run = run
        self._emit(run)

        task = asyncio.create_task(self._fetch_transcript(run))
        return RunHandle(token=run.token, video_id=video_id, task=task)

    def clear(self) -> None:
        """Return to Idle. Results of any in-flight run will be dropped."""
        self._active_token = next(self._tokens)
        self._run = None
        snapshot = self.snapshot()
        self._notify(PipelineEvent(stage=Stage.IDLE, message="", snapshot=snapshot))

    def submit(self, token: int) -> RunHandle:
        """Advance a TranscriptReady run to translation and speech synthesis.

        Raises:
            InvalidState: The token is not the active run, the run is not in
                TranscriptReady, or the held transcript is blank. No provider
                call is made in that case.
        """
        run = self._run
        if run is None or run.token != token:
            raise InvalidState(f"Run {token} is not the active run.")
        if run.stage is not Stage.TRANSCRIPT_READY:
            raise InvalidState(f"Cannot submit a run in stage '{run.stage}'.")
        if not (run.transcript or "").strip():
            raise InvalidState()

        self._advance(run, Stage.TRANSLATING)
        task = asyncio.create_task(self._translate_and_synthesize(run))
        return RunHandle(token=run.token, video_id=run.video_id, task=task)

    # -- stages --------------------------------------------------------------

    async def _fetch_transcript(self, run: PipelineRun) -> None:
        try:
            segments = await self._transcripts.fetch(run.video_id)
            if not segments:
                raise TranscriptServiceError("The fetched transcript is empty or invalid.")
            text = " ".join(seg.text for seg in segments)
        except Exception as exc:
            self._fail(run, Stage.TRANSCRIPT_FAILED, classify_error(exc, "transcript"))
            return

        self._advance(run, Stage.TRANSCRIPT_READY, transcript=text)

    async def _translate_and_synthesize(self, run: PipelineRun) -> None:
        try:
            translation = await self._translator.translate(run.transcript or "")
        except Exception as exc:
            self._fail(run, Stage.TRANSLATION_FAILED, classify_error(exc, "translate"))
            return

        if not self._advance(run, Stage.TRANSLATED, translation=translation):
            return
        if not self._advance(run, Stage.SYNTHESIZING):
            return

        try:
            audio = await self._synthesizer.synthesize(translation)
            if not audio:
                raise SynthesisError("No audio data received from the API.")
        except Exception as exc:
            self._fail(run, Stage.SYNTHESIS_FAILED, classify_error(exc, "synthesize"))
            return

        self._advance(run, Stage.READY, audio=audio)

    # -- transitions ---------------------------------------------------------

    def _advance(self, run: PipelineRun, stage: Stage, **fields: object) -> bool:
        """Apply a transition if run is still the active one.

        Returns False (and changes nothing) for a superseded run.
        """
        if run.token != self._active_token:
            return False
        for name, value in fields.items():
            setattr(run, name, value)
        run.stage = stage
        self._emit(run)
        return True

    def _fail(self, run: PipelineRun, stage: Stage, error: DubSyncError) -> None:
        self._advance(run, stage, error=error)

    def _emit(self, run: PipelineRun) -> None:
        snapshot = self.snapshot()
        self._notify(
            PipelineEvent(stage=run.stage, message=snapshot.status_message, snapshot=snapshot)
        )

    def _notify(self, event: PipelineEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                console.print(f"[yellow]Pipeline listener failed:[/yellow] {e}")

    def _status_message(self, run: PipelineRun) -> str:
        source = language_name(self.source_language)
        target = language_name(self.target_language)
        if run.error is not None:
            return run.error.message
        return {
            Stage.FETCHING_TRANSCRIPT: "Fetching transcript...",
            Stage.TRANSCRIPT_READY: "Transcript fetched successfully.",
            Stage.TRANSLATING: f"Translating {source} transcript to {target}...",
            Stage.TRANSLATED: f"Translating {source} transcript to {target}...",
            Stage.SYNTHESIZING: f"Generating {target} audio from translated text...",
            Stage.READY: "Translation complete. Ready to play.",
        }.get(run.stage, "")
