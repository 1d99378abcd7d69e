"""mpv-backed player handles for synced dub playback.

The video is streamed from YouTube through mpv's yt-dlp hook and muted; the
synthesized audio is played by a second, video-less mpv instance. Both load
paused so the sync controller decides when they start.
"""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path

from dubsync.core.config import PlaybackConfig
from dubsync.utils.console import console


def check_mpv() -> bool:
    """Check if mpv is available on the system."""
    return shutil.which("mpv") is not None


def youtube_watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def _create_player(**options: object):
    if not check_mpv():
        raise FileNotFoundError("mpv not found. Install it with: brew install mpv")

    import mpv

    return mpv.MPV(**options)


class MpvVideoHandle:
    """VideoPlayerHandle for a YouTube video shown in an mpv window."""

    def __init__(self, config: PlaybackConfig | None = None, player=None) -> None:
        if config is None:
            config = PlaybackConfig()
        if player is None:
            player = _create_player(
                ytdl=True,
                input_default_bindings=True,
                input_vo_keyboard=True,
                osc=False,
            )
        self._player = player
        self._player.mute = config.mute_video

    def load(self, video_id: str) -> None:
        self._player.pause = True
        self._player.play(youtube_watch_url(video_id))
        console.print(f"[bold]Video:[/bold] {youtube_watch_url(video_id)}")

    def play(self) -> None:
        self._player.pause = False

    def pause(self) -> None:
        self._player.pause = True

    def get_current_time(self) -> float | None:
        """Current position in seconds, or None while the stream is still loading."""
        return self._player.time_pos

    def close(self) -> None:
        self._player.terminate()


class MpvAudioHandle:
    """AudioPlayerHandle for a synthesized audio payload or file."""

    def __init__(
        self,
        audio: bytes | Path,
        audio_format: str = "mp3",
        player=None,
    ) -> None:
        self._temp_path: Path | None = None
        if isinstance(audio, bytes):
            with tempfile.NamedTemporaryFile(suffix=f".{audio_format}", delete=False) as f:
                f.write(audio)
            self._temp_path = Path(f.name)
            path = self._temp_path
        else:
            path = Path(audio)

        if player is None:
            player = _create_player(video=False)
        self._player = player
        self._player.pause = True
        self._player.play(str(path))
        self.path = path

    def play(self) -> None:
        self._player.pause = False

    def pause(self) -> None:
        self._player.pause = True

    def get_current_time(self) -> float:
        # Audio that has not started decoding yet sits at the beginning
        return self._player.time_pos or 0.0

    def set_current_time(self, seconds: float) -> None:
        self._player.seek(seconds, reference="absolute")

    def close(self) -> None:
        self._player.terminate()
        if self._temp_path is not None:
            self._temp_path.unlink(missing_ok=True)
            self._temp_path = None
