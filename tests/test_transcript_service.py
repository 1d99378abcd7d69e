"""Tests for the youtubetranscript.com client using a mocked HTTP transport."""

import asyncio
import json
from urllib.parse import unquote

import httpx
import pytest
from conftest import VIDEO_ID

from dubsync.core.config import TranscriptConfig
from dubsync.core.errors import NetworkError, TranscriptServiceError, TranscriptUnavailable
from dubsync.providers.transcript import YouTubeTranscriptService

LISTING = [{"languageCode": "en"}, {"languageCode": "hi"}]
TRANSCRIPT = [
    {"text": "नमस्ते", "start": "0.0", "duration": "1.5"},
    {"text": "दुनिया", "start": 1.5, "duration": None},
]


def _service(handler, **config) -> tuple[YouTubeTranscriptService, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(record))
    return YouTubeTranscriptService(TranscriptConfig(**config), client=client), requests


def _routes(listing=LISTING, transcript=TRANSCRIPT):
    def handler(request: httpx.Request) -> httpx.Response:
        url = unquote(str(request.url))
        if "list-transcripts" in url:
            return httpx.Response(200, text=json.dumps(listing))
        return httpx.Response(200, text=json.dumps(transcript))

    return handler


def test_fetch_returns_segments():
    service, requests = _service(_routes())

    segments = asyncio.run(service.fetch(VIDEO_ID))

    assert [s.text for s in segments] == ["नमस्ते", "दुनिया"]
    assert segments[0].start == 0.0
    assert segments[0].duration == 1.5
    assert segments[1].duration is None
    assert len(requests) == 2
    assert requests[0].url.params["video-id"] == VIDEO_ID
    assert requests[1].url.params["lang"] == "hi"


def test_missing_language_is_unavailable():
    service, requests = _service(_routes(listing=[{"languageCode": "en"}]))

    with pytest.raises(TranscriptUnavailable, match="Hindi"):
        asyncio.run(service.fetch(VIDEO_ID))
    # Transcript itself is never requested
    assert len(requests) == 1


def test_source_language_is_configurable():
    service, requests = _service(_routes(listing=[{"languageCode": "en"}]), source_language="en")
    asyncio.run(service.fetch(VIDEO_ID))
    assert requests[1].url.params["lang"] == "en"


def test_proxy_wraps_encoded_url():
    service, requests = _service(_routes(), proxy_url="https://proxy.example/?url=")

    asyncio.run(service.fetch(VIDEO_ID))

    first = str(requests[0].url)
    assert first.startswith("https://proxy.example/")
    assert unquote(requests[0].url.params["url"]).startswith(
        "https://youtubetranscript.com/api/list-transcripts"
    )


def test_proxied_404_page_is_service_error():
    def handler(request):
        return httpx.Response(200, text="<html><title>404 Not Found</title></html>")

    service, _ = _service(handler)
    with pytest.raises(TranscriptServiceError, match="list of available transcripts"):
        asyncio.run(service.fetch(VIDEO_ID))


def test_http_error_on_transcript_fetch():
    def handler(request):
        if "list-transcripts" in str(request.url):
            return httpx.Response(200, text=json.dumps(LISTING))
        return httpx.Response(500, text="boom")

    service, _ = _service(handler)
    with pytest.raises(TranscriptServiceError, match="failed to retrieve its content"):
        asyncio.run(service.fetch(VIDEO_ID))


def test_invalid_json_is_service_error():
    def handler(request):
        if "list-transcripts" in str(request.url):
            return httpx.Response(200, text=json.dumps(LISTING))
        return httpx.Response(200, text="not json")

    service, _ = _service(handler)
    with pytest.raises(TranscriptServiceError, match="invalid data"):
        asyncio.run(service.fetch(VIDEO_ID))


@pytest.mark.parametrize("payload", [[], {"error": "nope"}, [{"start": 0}]])
def test_empty_or_malformed_transcript(payload):
    service, _ = _service(_routes(transcript=payload))
    with pytest.raises(TranscriptServiceError, match="empty or invalid"):
        asyncio.run(service.fetch(VIDEO_ID))


def test_transport_error_is_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    service, _ = _service(handler)
    with pytest.raises(NetworkError):
        asyncio.run(service.fetch(VIDEO_ID))


@pytest.mark.parametrize("listing", [{"error": "rate limited"}, "hi", None])
def test_wrong_shape_listing_is_service_error(listing):
    """Well-formed JSON that is not a language list is a service fault, not a missing track."""
    service, requests = _service(_routes(listing=listing))

    with pytest.raises(TranscriptServiceError, match="invalid list of languages"):
        asyncio.run(service.fetch(VIDEO_ID))
    assert len(requests) == 1
