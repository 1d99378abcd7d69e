"""Extract canonical YouTube video identifiers from free-form URL input."""

from __future__ import annotations

import re

from dubsync.core.models import VideoReference

# watch?v=, &v=, embed/, e/, v/, youtu.be/, and /<user>/<section>/<id> forms
_VIDEO_ID_RE = re.compile(
    r"(?:https?://)?(?:www\.)?"
    r"(?:youtube\.com/(?:[^/\n\s]+/\S+/|(?:v|e(?:mbed)?)/|\S*?[?&]v=)|youtu\.be/)"
    r"([a-zA-Z0-9_-]{11})"
)


def extract_video_id(raw_url: str) -> str | None:
    """Return the 11-character video id from a YouTube URL, or None."""
    if not raw_url:
        return None
    match = _VIDEO_ID_RE.search(raw_url)
    return match.group(1) if match else None


def parse_reference(raw_url: str) -> VideoReference:
    """Build a VideoReference for the given input string."""
    return VideoReference(raw=raw_url, video_id=extract_video_id(raw_url))
