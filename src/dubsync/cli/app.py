"""Command-line interface for DubSync."""

from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

from dubsync import __version__
from dubsync.cli.dub import dub
from dubsync.cli.languages import languages
from dubsync.cli.play import play
from dubsync.cli.transcript import transcript

app = typer.Typer(
    name="dubsync",
    help="Watch YouTube videos with a translated, synthesized soundtrack kept in sync.",
    no_args_is_help=True,
)

for _name, _command in (
    ("dub", dub),
    ("transcript", transcript),
    ("play", play),
    ("languages", languages),
):
    app.command(_name)(_command)


def _print_version(value: bool) -> None:
    if not value:
        return
    typer.echo(f"dubsync {__version__}")
    raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_print_version,
            is_eager=True,
            help="Print the dubsync version.",
        ),
    ] = None,
) -> None:
    """Dub Hindi YouTube videos into Tamil (or any supported language pair)."""
    # GEMINI_API_KEY and friends may live in .env; real env vars take precedence
    load_dotenv(override=False)
