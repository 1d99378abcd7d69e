"""Error taxonomy for the dubbing pipeline and playback controller.

Provider failures are converted to one of these at the stage boundary and
attached to the failed run. Only ``InvalidState`` and ``PlaybackSyncError``
are ever raised to callers of the core APIs.
"""

from __future__ import annotations

from enum import StrEnum

import httpx


class ErrorKind(StrEnum):
    INVALID_URL = "invalid_url"
    TRANSCRIPT_UNAVAILABLE = "transcript_unavailable"
    TRANSCRIPT_SERVICE = "transcript_service"
    NETWORK = "network"
    TRANSLATION = "translation"
    SYNTHESIS = "synthesis"
    INVALID_STATE = "invalid_state"
    PLAYBACK_SYNC = "playback_sync"


class DubSyncError(Exception):
    """Base class for all DubSync errors."""

    kind: ErrorKind
    default_message = "An unknown error occurred."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class TranscriptUnavailable(DubSyncError):
    kind = ErrorKind.TRANSCRIPT_UNAVAILABLE
    default_message = (
        "The service did not find an available transcript in the source language "
        "for this video. It may not exist or may not be accessible."
    )


class TranscriptServiceError(DubSyncError):
    kind = ErrorKind.TRANSCRIPT_SERVICE
    default_message = "An unknown error occurred while fetching the transcript."


class NetworkError(DubSyncError):
    kind = ErrorKind.NETWORK
    default_message = "A network error occurred. Please check your connection and try again."


class TranslationError(DubSyncError):
    kind = ErrorKind.TRANSLATION
    default_message = "Failed to translate text."


class SynthesisError(DubSyncError):
    kind = ErrorKind.SYNTHESIS
    default_message = "Failed to generate speech."


class InvalidState(DubSyncError):
    kind = ErrorKind.INVALID_STATE
    default_message = (
        "Cannot proceed without a transcript. "
        "Please provide a video with an available transcript."
    )


class PlaybackSyncError(DubSyncError):
    kind = ErrorKind.PLAYBACK_SYNC
    default_message = "Playback is not ready."


# Substrings that mark a transport-level failure when the exception type doesn't
_NETWORK_MARKERS = (
    "failed to fetch",
    "network error",
    "network is unreachable",
    "connection error",
    "connection refused",
    "connection reset",
    "connection aborted",
    "connection timed out",
)

_STAGE_DEFAULTS: dict[str, type[DubSyncError]] = {
    "transcript": TranscriptServiceError,
    "translate": TranslationError,
    "synthesize": SynthesisError,
}


def is_network_failure(exc: BaseException) -> bool:
    """Check whether an exception looks like a lower-level transport failure."""
    if isinstance(exc, (httpx.TransportError, ConnectionError, TimeoutError)):
        return True
    message = str(exc).lower()
    return any(marker in message for marker in _NETWORK_MARKERS)


def classify_error(exc: BaseException, stage: str) -> DubSyncError:
    """Wrap an exception raised during a pipeline stage into exactly one error kind.

    Typed provider errors pass through unchanged. Anything else becomes a
    ``NetworkError`` if it looks like a transport failure, otherwise the
    stage's default error.

    Args:
        exc: The exception raised by the provider call.
        stage: One of "transcript", "translate", "synthesize".
    """
    if isinstance(exc, DubSyncError):
        return exc
    if is_network_failure(exc):
        return NetworkError()
    error_cls = _STAGE_DEFAULTS[stage]
    detail = str(exc).strip()
    if detail:
        return error_cls(f"{error_cls.default_message} ({detail})")
    return error_cls()
