"""Transcript retrieval from the youtubetranscript.com caption service.

The service is unofficial: it is first asked which caption languages a video
lists, and only if the source language is present is the transcript itself
fetched. Responses are routed through an optional CORS-style proxy, which can
answer 200 OK while wrapping a 404 page from the target, so bodies are
checked for that too.
"""

from __future__ import annotations

import json
from urllib.parse import quote

import httpx

from dubsync.core.config import TranscriptConfig
from dubsync.core.errors import NetworkError, TranscriptServiceError, TranscriptUnavailable
from dubsync.core.languages import language_name
from dubsync.core.models import TranscriptSegment
from dubsync.utils.console import console

_NOT_FOUND_MARKER = "<title>404 Not Found</title>"
_INVALID_LISTING = "The transcript service returned an invalid list of languages."


class YouTubeTranscriptService:
    """TranscriptProvider backed by youtubetranscript.com."""

    def __init__(
        self,
        config: TranscriptConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or TranscriptConfig()
        self._client = client

    async def fetch(self, video_id: str) -> list[TranscriptSegment]:
        """Fetch the source-language transcript for a video.

        Raises:
            TranscriptUnavailable: The source language is not listed.
            TranscriptServiceError: The service answered with an error or bad data.
            NetworkError: The request could not be sent.
        """
        lang = self.config.source_language
        try:
            async with self._session() as client:
                listing = await self._get_json(
                    client,
                    f"{self.config.base_url}/api/list-transcripts?video-id={video_id}",
                    failure="Could not retrieve the list of available transcripts for this video.",
                    invalid=_INVALID_LISTING,
                )
                if not isinstance(listing, list):
                    raise TranscriptServiceError(_INVALID_LISTING)
                if not any(
                    isinstance(entry, dict) and entry.get("languageCode") == lang
                    for entry in listing
                ):
                    raise TranscriptUnavailable(
                        f"The service did not find an available {language_name(lang)} "
                        "transcript for this video. It may not exist or may not be accessible."
                    )

                data = await self._get_json(
                    client,
                    f"{self.config.base_url}/api/transcript?video-id={video_id}&lang={lang}",
                    failure=(
                        f"The service listed a {language_name(lang)} transcript, "
                        "but failed to retrieve its content."
                    ),
                    invalid=(
                        "The transcript API returned invalid data. "
                        "The service might be temporarily unavailable."
                    ),
                )
        except httpx.TransportError as e:
            raise NetworkError() from e

        if not isinstance(data, list) or not data:
            raise TranscriptServiceError("The fetched transcript is empty or invalid.")

        segments = [_to_segment(item) for item in data]
        console.print(f"[green]Transcript fetched:[/green] {len(segments)} segments")
        return segments

    def _session(self) -> httpx.AsyncClient | _Borrowed:
        if self._client is not None:
            return _Borrowed(self._client)
        return httpx.AsyncClient(timeout=self.config.timeout, follow_redirects=True)

    def _proxied(self, url: str) -> str:
        if not self.config.proxy_url:
            return url
        return f"{self.config.proxy_url}{quote(url, safe='')}"

    async def _get_json(
        self, client: httpx.AsyncClient, url: str, failure: str, invalid: str
    ) -> object:
        response = await client.get(self._proxied(url))
        body = response.text
        if not response.is_success or _NOT_FOUND_MARKER in body:
            raise TranscriptServiceError(failure)
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise TranscriptServiceError(invalid) from e


def _to_segment(item: object) -> TranscriptSegment:
    if not isinstance(item, dict) or not isinstance(item.get("text"), str):
        raise TranscriptServiceError("The fetched transcript is empty or invalid.")
    return TranscriptSegment(
        text=item["text"],
        start=_float_or_none(item.get("start")),
        duration=_float_or_none(item.get("duration")),
    )


def _float_or_none(value: object) -> float | None:
    try:
        return float(value) if value is not None else None
    except (TypeError, ValueError):
        return None


class _Borrowed:
    """Async context wrapper that leaves an injected client open on exit."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def __aenter__(self) -> httpx.AsyncClient:
        return self._client

    async def __aexit__(self, *exc_info: object) -> None:
        return None
