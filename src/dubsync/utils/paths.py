"""Per-video output directories for dub runs."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

METADATA_FILE = "metadata.json"

# Filename prefix -> inventory type, first match wins
_FILE_KINDS = (
    ("audio.", "dub_audio"),
    ("transcript.", "transcript_text"),
    ("translation.", "translation_text"),
)


def create_workspace(video_id: str, base_dir: Path = Path("./dubsync_workspace")) -> Path:
    """Make and return ``<base_dir>/<video_id>/<YYYYMMDD_HHMMSS>``.

    Repeated dubs of one video end up side by side under the same parent.
    """
    run_dir = Path(base_dir, video_id, f"{datetime.now():%Y%m%d_%H%M%S}")
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def workspace_paths(
    workspace: Path, source_lang: str, target_lang: str, audio_format: str = "mp3"
) -> dict[str, Path]:
    """Output file locations keyed by transcript, translation, audio, metadata."""
    names = {
        "transcript": f"transcript.{source_lang}.txt",
        "translation": f"translation.{target_lang}.txt",
        "audio": f"audio.{target_lang}.{audio_format}",
        "metadata": METADATA_FILE,
    }
    return {key: workspace / name for key, name in names.items()}


def find_audio(workspace: Path) -> Path | None:
    return next(iter(sorted(workspace.glob("audio.*"))), None)


def save_metadata(workspace: Path, **fields: object) -> Path:
    """Write metadata.json with a creation time, an output file inventory, and fields."""
    inventory = {
        path.name: {"size_bytes": path.stat().st_size, "type": _file_kind(path.name)}
        for path in sorted(workspace.iterdir())
        if path.is_file() and path.name != METADATA_FILE and not path.name.startswith(".")
    }
    record: dict[str, object] = {
        "created_at": datetime.now(timezone.utc).isoformat(),
        "files": inventory,
    }
    for key, value in fields.items():
        record[key] = str(value) if isinstance(value, Path) else value

    target = workspace / METADATA_FILE
    target.write_text(json.dumps(record, indent=2, ensure_ascii=False), encoding="utf-8")
    return target


def _file_kind(name: str) -> str:
    for prefix, kind in _FILE_KINDS:
        if name.startswith(prefix):
            return kind
    return "other"
