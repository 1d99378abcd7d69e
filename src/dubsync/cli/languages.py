"""dubsync languages command."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.table import Table

from dubsync.core.languages import LANGUAGES, SPEECH_LANGUAGES
from dubsync.utils.console import console


def languages(
    speech_only: Annotated[
        bool, typer.Option("--speech-only", help="Only show languages with native TTS voices.")
    ] = False,
) -> None:
    """List language codes usable as transcript source or dub target."""
    codes = sorted(c for c in LANGUAGES if c in SPEECH_LANGUAGES or not speech_only)

    table = Table(title=f"Languages ({len(codes)} of {len(LANGUAGES)})")
    table.add_column("Code", style="bold cyan")
    table.add_column("Name")
    table.add_column("Native voice", justify="center")
    for code in codes:
        table.add_row(code, LANGUAGES[code].title(), "✓" if code in SPEECH_LANGUAGES else "")

    console.print(table)
    if not speech_only:
        console.print(
            "[dim]Targets without a native voice are still translated, "
            "but the dub may sound accented.[/dim]"
        )
