"""Player handle capabilities used by the playback controller.

Handles are created and owned by the front end; the controller only reads
their clocks and commands play/pause. Any method may return an awaitable.
"""

from __future__ import annotations

from typing import Awaitable, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")

MaybeAwaitable = T | Awaitable[T]


@runtime_checkable
class VideoPlayerHandle(Protocol):
    def load(self, video_id: str) -> MaybeAwaitable[None]: ...

    def play(self) -> MaybeAwaitable[None]: ...

    def pause(self) -> MaybeAwaitable[None]: ...

    def get_current_time(self) -> MaybeAwaitable[float]: ...


@runtime_checkable
class AudioPlayerHandle(Protocol):
    def play(self) -> MaybeAwaitable[None]: ...

    def pause(self) -> MaybeAwaitable[None]: ...

    def get_current_time(self) -> MaybeAwaitable[float]: ...

    def set_current_time(self, seconds: float) -> MaybeAwaitable[None]: ...
