"""dubsync transcript command — fetch and print a video's transcript."""

from __future__ import annotations

import asyncio
from typing import Annotated, Optional

import typer
from rich.panel import Panel

from dubsync.cli.utils import build_orchestrator, exit_on_failure, require_video_id
from dubsync.core.config import load_config
from dubsync.core.languages import language_name, validate_language
from dubsync.utils.console import console


def transcript(
    url: Annotated[str, typer.Argument(help="YouTube video URL.")],
    source: Annotated[
        Optional[str],
        typer.Option("--from", "-s", help="Transcript language code (see 'dubsync languages')."),
    ] = None,
) -> None:
    """Fetch the source-language transcript of a video and print it."""
    if source is not None:
        try:
            validate_language(source)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)

    video_id = require_video_id(url)
    config = load_config(**{"transcript.source_language": source})

    async def _fetch() -> None:
        orchestrator = build_orchestrator(config)
        with console.status("Fetching transcript..."):
            await orchestrator.start_run(video_id).wait()

        snapshot = orchestrator.snapshot()
        exit_on_failure(snapshot)
        lang = language_name(config.transcript.source_language)
        console.print(Panel(snapshot.transcript or "", title=f"{lang} transcript — {video_id}"))

    asyncio.run(_fetch())
