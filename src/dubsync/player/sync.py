"""Synchronized dual-track playback — video with a separately loaded dub track.

The video and the synthesized audio run on independent clocks. Drift is
corrected only when playback resumes: video is the reference clock and the
audio track is seeked to it when the two disagree by more than the threshold.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable

from dubsync.core.errors import PlaybackSyncError
from dubsync.core.models import PlaybackSession
from dubsync.player.handles import AudioPlayerHandle, VideoPlayerHandle
from dubsync.utils.console import console

DEFAULT_DRIFT_THRESHOLD = 0.5  # seconds


async def _call(method: Callable[..., Any], *args: Any) -> Any:
    """Call a handle method, awaiting the result if it is awaitable."""
    result = method(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


class SyncPlaybackController:
    """Present play/pause as one operation over a video and an audio handle."""

    def __init__(self, drift_threshold: float = DEFAULT_DRIFT_THRESHOLD) -> None:
        self.drift_threshold = drift_threshold
        self._session: PlaybackSession | None = None

    @property
    def session(self) -> PlaybackSession | None:
        return self._session

    def open_session(
        self,
        video: VideoPlayerHandle | None,
        audio: AudioPlayerHandle | None,
        video_id: str,
    ) -> PlaybackSession:
        """Make a new, paused session current.

        A session this replaces is only detached; pass it to ``release`` to
        stop its tracks.
        """
        self._session = PlaybackSession(
            video=video,
            audio=audio,
            video_id=video_id,
            drift_threshold=self.drift_threshold,
        )
        return self._session

    async def close_session(self) -> None:
        """Detach the current session, then stop and close its tracks."""
        session, self._session = self._session, None
        if session is not None:
            await self.release(session)

    async def release(self, session: PlaybackSession) -> None:
        """Pause both tracks and close their handles, best-effort."""
        session.audio_ready = False
        await self._pause_all(session)
        for name, handle in (("video", session.video), ("audio", session.audio)):
            close = getattr(handle, "close", None)
            if close is None:
                continue
            try:
                await _call(close)
            except Exception as exc:
                console.print(f"[yellow]Failed to close {name} player:[/yellow] {exc}")

    async def toggle_playback(self, session: PlaybackSession | None = None) -> bool:
        """Pause both tracks if playing, otherwise re-sync and play both.

        Returns:
            The new value of ``is_playing``.

        Raises:
            PlaybackSyncError: No ready session, a missing handle, an unreadable
                clock, or a play command that failed. Nothing is left playing.
        """
        session = session if session is not None else self._session
        if session is None or not session.audio_ready:
            raise PlaybackSyncError("No translated audio is ready for playback.")

        if session.is_playing:
            await self._pause_all(session)
            return False

        video, audio = session.video, session.audio
        if video is None or audio is None:
            missing = "video" if video is None else "audio"
            raise PlaybackSyncError(f"The {missing} player is not loaded.")

        try:
            video_time = float(await _call(video.get_current_time))
            audio_time = float(await _call(audio.get_current_time))
        except Exception as exc:
            raise PlaybackSyncError(f"Could not read playback position: {exc}") from exc
        session.last_video_time = video_time
        session.last_audio_time = audio_time

        if abs(audio_time - video_time) > session.drift_threshold:
            try:
                await _call(audio.set_current_time, video_time)
            except Exception as exc:
                raise PlaybackSyncError(f"Could not seek audio track: {exc}") from exc
            session.last_audio_time = video_time

        failures = []
        for name, handle in (("video", video), ("audio", audio)):
            try:
                await _call(handle.play)
            except Exception as exc:
                failures.append(f"{name}: {exc}")

        if failures:
            await self._pause_all(session)
            raise PlaybackSyncError(f"Failed to start playback ({'; '.join(failures)}).")

        session.is_playing = True
        return True

    async def _pause_all(self, session: PlaybackSession) -> None:
        """Pause every present handle; a failing handle never blocks the other."""
        for name, handle in (("video", session.video), ("audio", session.audio)):
            if handle is None:
                continue
            try:
                await _call(handle.pause)
            except Exception as exc:
                console.print(f"[yellow]Failed to pause {name} track:[/yellow] {exc}")
        session.is_playing = False
