"""dubsync play command — play a video with a dub track, kept in sync."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from dubsync.cli.utils import require_video_id
from dubsync.core.config import load_config
from dubsync.core.errors import PlaybackSyncError
from dubsync.core.models import PlaybackSession
from dubsync.player.sync import SyncPlaybackController
from dubsync.utils.console import console
from dubsync.utils.paths import find_audio


async def interactive_playback(
    controller: SyncPlaybackController, session: PlaybackSession | None
) -> None:
    """Toggle synced playback on Enter until the user types q."""
    console.print("[dim]Press Enter to play/pause, q + Enter to quit.[/dim]")
    try:
        while True:
            line = await asyncio.to_thread(input)
            if line.strip().lower() in ("q", "quit"):
                break
            try:
                playing = await controller.toggle_playback(session)
            except PlaybackSyncError as e:
                console.print(f"[yellow]{e.message}[/yellow]")
                continue
            console.print("[green]Playing[/green]" if playing else "[dim]Paused[/dim]")
    except (EOFError, KeyboardInterrupt):
        pass
    finally:
        await controller.close_session()


def play(
    url: Annotated[str, typer.Argument(help="YouTube video URL.")],
    audio: Annotated[
        Path,
        typer.Argument(help="Dub audio file, or a workspace directory from 'dubsync dub'."),
    ],
) -> None:
    """Play a YouTube video muted, with a dub audio track kept in sync.

    Drift between the two tracks is corrected each time playback resumes.
    """
    from dubsync.player.mpv_player import MpvAudioHandle, MpvVideoHandle, check_mpv

    video_id = require_video_id(url)

    audio_path: Path | None = audio
    if audio.is_dir():
        audio_path = find_audio(audio)
        if audio_path is None:
            console.print(f"[red]No dub audio found in workspace:[/red] {audio}")
            raise typer.Exit(1)
    elif not audio.is_file():
        console.print(f"[red]File not found:[/red] {audio}")
        raise typer.Exit(1)

    if not check_mpv():
        console.print("[red]mpv not found.[/red] Install it with: brew install mpv")
        raise typer.Exit(1)

    config = load_config()
    video = MpvVideoHandle(config.playback)
    video.load(video_id)
    dub = MpvAudioHandle(audio_path)
    console.print(f"[bold]Dub track:[/bold] {audio_path.name}")

    controller = SyncPlaybackController(config.playback.drift_threshold)
    session = controller.open_session(video, dub, video_id)
    asyncio.run(interactive_playback(controller, session))
