"""dubsync dub command — transcript, translation, speech, and synced playback."""

from __future__ import annotations

import asyncio
from typing import Annotated, Optional

import typer
from rich.panel import Panel
from rich.status import Status

from dubsync.cli.play import interactive_playback
from dubsync.cli.utils import build_orchestrator, exit_on_failure, mpv_factories, require_video_id
from dubsync.core.config import DubSyncConfig, load_config
from dubsync.core.events import EventCallback, PipelineEvent
from dubsync.core.languages import language_name, validate_language
from dubsync.core.models import RunSnapshot
from dubsync.core.session import DubbingSession
from dubsync.player.sync import SyncPlaybackController
from dubsync.utils.console import console
from dubsync.utils.paths import create_workspace, save_metadata, workspace_paths


def dub(
    url: Annotated[str, typer.Argument(help="YouTube video URL.")],
    source: Annotated[
        Optional[str],
        typer.Option("--from", "-s", help="Transcript language code (see 'dubsync languages')."),
    ] = None,
    to: Annotated[
        Optional[str],
        typer.Option("--to", "-t", help="Dub language code."),
    ] = None,
    llm_model: Annotated[
        Optional[str],
        typer.Option("--llm-model", help="Translation model (LiteLLM string)."),
    ] = None,
    voice: Annotated[
        Optional[str],
        typer.Option("--voice", help="TTS voice name."),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Generate audio without confirming the transcript."),
    ] = False,
    no_play: Annotated[
        bool,
        typer.Option("--no-play", help="Skip synced playback after processing."),
    ] = False,
) -> None:
    """Dub a YouTube video: fetch its transcript, translate, synthesize, and play.

    The transcript is shown first; audio is only generated once you confirm it.
    """
    for code in (source, to):
        if code is None:
            continue
        try:
            validate_language(code)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

    require_video_id(url)
    config = load_config(
        **{
            "transcript.source_language": source,
            "llm.target_language": to,
            "llm.model": llm_model,
            "speech.voice": voice,
        }
    )

    asyncio.run(_dub(url, config, confirm=not yes, play=not no_play))


async def _dub(url: str, config: DubSyncConfig, confirm: bool, play: bool) -> None:
    orchestrator = build_orchestrator(config)
    controller = SyncPlaybackController(config.playback.drift_threshold)
    if play:
        video_factory, audio_factory = mpv_factories(config)
    else:
        video_factory, audio_factory = (lambda _: None), (lambda _: None)
    session = DubbingSession(orchestrator, controller, video_factory, audio_factory)

    source = language_name(config.transcript.source_language)
    target = language_name(config.llm.target_language)

    # Step 1: Transcript
    with console.status("Fetching transcript...") as status:
        unsubscribe = orchestrator.subscribe(_status_updater(status))
        await session.update_url(url)
        await session.run.wait()
        unsubscribe()

    snapshot = session.snapshot()
    exit_on_failure(snapshot)
    console.print(Panel(snapshot.transcript or "", title=f"{source} transcript"))

    if not snapshot.can_submit:
        console.print("[red]The transcript is empty; nothing to translate.[/red]")
        raise typer.Exit(1)
    if confirm and not typer.confirm(f"Generate {target} audio from this transcript?"):
        raise typer.Exit(0)

    # Step 2: Translation + speech
    with console.status(f"Translating {source} transcript to {target}...") as status:
        unsubscribe = orchestrator.subscribe(_status_updater(status))
        await session.submit().wait()
        unsubscribe()

    snapshot = session.snapshot()
    exit_on_failure(snapshot)
    console.print(Panel(snapshot.translation or "", title=f"{target} translation"))
    _save_outputs(snapshot, config)
    console.print(f"[bold green]{snapshot.status_message}[/bold green]")

    # Step 3: Synced playback
    if play:
        await interactive_playback(controller, controller.session)


def _status_updater(status: Status) -> EventCallback:
    """Mirror pipeline status messages onto a rich spinner."""

    def _on_event(event: PipelineEvent) -> None:
        if event.message:
            status.update(event.message)

    return _on_event


def _save_outputs(snapshot: RunSnapshot, config: DubSyncConfig) -> None:
    source_lang = config.transcript.source_language
    target_lang = config.llm.target_language
    workspace = create_workspace(snapshot.video_id or "unknown", base_dir=config.workspace_dir)
    paths = workspace_paths(workspace, source_lang, target_lang, config.speech.audio_format)

    paths["transcript"].write_text(snapshot.transcript or "", encoding="utf-8")
    paths["translation"].write_text(snapshot.translation or "", encoding="utf-8")
    paths["audio"].write_bytes(snapshot.audio or b"")
    for key in ("transcript", "translation", "audio"):
        console.print(f"[green]Saved:[/green] {paths[key]}")

    save_metadata(
        workspace,
        video_id=snapshot.video_id,
        source_language=source_lang,
        target_language=target_lang,
        llm_model=config.llm.model,
        speech_model=config.speech.model,
        voice=config.speech.voice,
    )
    console.print(f"[bold]Workspace:[/bold] {workspace}")
