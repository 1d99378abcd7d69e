"""Application session — wires URL input, the pipeline, and synced playback.

This is the single mutation path a front end talks to: URL edits, the submit
action, and the play/pause toggle. A change of video identifier invalidates
both the in-flight run and the playback session; re-entering the same
identifier is a no-op.
"""

from __future__ import annotations

import asyncio
from typing import Callable

from dubsync.core.errors import InvalidState
from dubsync.core.events import PipelineEvent
from dubsync.core.models import PlaybackSession, RunSnapshot, Stage, VideoReference
from dubsync.core.pipeline import PipelineOrchestrator, RunHandle
from dubsync.core.video_id import parse_reference
from dubsync.player.handles import AudioPlayerHandle, VideoPlayerHandle
from dubsync.player.sync import SyncPlaybackController
from dubsync.utils.console import console

VideoFactory = Callable[[str], VideoPlayerHandle | None]
AudioFactory = Callable[[bytes], AudioPlayerHandle | None]


class DubbingSession:
    def __init__(
        self,
        orchestrator: PipelineOrchestrator,
        controller: SyncPlaybackController,
        video_factory: VideoFactory,
        audio_factory: AudioFactory,
    ) -> None:
        self.orchestrator = orchestrator
        self.controller = controller
        self._video_factory = video_factory
        self._audio_factory = audio_factory
        self.reference = VideoReference(raw="")
        self.run: RunHandle | None = None
        self._releases: set[asyncio.Task[None]] = set()
        orchestrator.subscribe(self._on_event)

    @property
    def video_id(self) -> str | None:
        return self.reference.video_id

    @property
    def can_submit(self) -> bool:
        return self.orchestrator.snapshot().can_submit

    def snapshot(self) -> RunSnapshot:
        return self.orchestrator.snapshot()

    async def update_url(self, raw_url: str) -> VideoReference:
        """Handle a change of the URL input.

        Starts a new run for a new identifier, returns to Idle for an
        unrecognized URL, and does nothing if the identifier is unchanged.
        Tracks of the previous video are paused and closed first.
        """
        reference = parse_reference(raw_url)
        previous = self.reference.video_id
        self.reference = reference
        if reference.video_id == previous:
            return reference

        await self.controller.close_session()
        if reference.video_id is None:
            self.run = None
            self.orchestrator.clear()
        else:
            self.run = self.orchestrator.start_run(reference.video_id)
        return reference

    def submit(self) -> RunHandle:
        """Start translation and synthesis for the active run's transcript."""
        token = self.orchestrator.snapshot().token
        if token is None:
            raise InvalidState()
        self.run = self.orchestrator.submit(token)
        return self.run

    async def toggle_playback(self) -> bool:
        """Toggle synced playback of the active session."""
        return await self.controller.toggle_playback(self.controller.session)

    def _on_event(self, event: PipelineEvent) -> None:
        snapshot = event.snapshot
        if event.stage != Stage.READY or snapshot.video_id is None or snapshot.audio is None:
            return
        video = self._build(self._video_factory, snapshot.video_id, "video")
        audio = self._build(self._audio_factory, snapshot.audio, "audio")
        previous = self.controller.session
        self.controller.open_session(video, audio, snapshot.video_id)
        if previous is not None:
            self._release_later(previous)

    def _release_later(self, session: PlaybackSession) -> None:
        # Listener callbacks are sync; _releases holds the task until it finishes
        task = asyncio.get_running_loop().create_task(self.controller.release(session))
        self._releases.add(task)
        task.add_done_callback(self._releases.discard)

    @staticmethod
    def _build(factory: Callable, arg: object, name: str) -> object | None:
        try:
            return factory(arg)
        except Exception as e:
            console.print(f"[yellow]Could not load {name} player:[/yellow] {e}")
            return None
