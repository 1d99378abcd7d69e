"""Shared test fixtures — fake providers and player handles."""

from __future__ import annotations

import asyncio

import pytest

from dubsync.core.models import TranscriptSegment
from dubsync.core.pipeline import PipelineOrchestrator

VIDEO_ID = "dQw4w9WgXcQ"


class FakeTranscripts:
    """TranscriptProvider returning a fixed result or raising a fixed error."""

    def __init__(self, text: str | None = "नमस्ते दुनिया", error: Exception | None = None):
        self.segments = [TranscriptSegment(text=text)] if text is not None else []
        self.error = error
        self.calls: list[str] = []

    async def fetch(self, video_id: str) -> list[TranscriptSegment]:
        self.calls.append(video_id)
        if self.error is not None:
            raise self.error
        return self.segments


class FakeTranslator:
    def __init__(self, result: str = "வணக்கம் உலகம்", error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[str] = []

    async def translate(self, text: str) -> str:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


class FakeSynthesizer:
    def __init__(self, result: bytes = b"ID3-fake-mp3", error: Exception | None = None):
        self.result = result
        self.error = error
        self.calls: list[str] = []

    async def synthesize(self, text: str) -> bytes:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.result


class Deferred:
    """Provider whose calls block until the test resolves them, in any order.

    Implements fetch, translate, and synthesize so it can stand in for any
    of the three capabilities.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, asyncio.Future]] = []

    async def _call(self, arg: str):
        future = asyncio.get_running_loop().create_future()
        self.calls.append((arg, future))
        return await future

    async def fetch(self, video_id: str):
        return await self._call(video_id)

    async def translate(self, text: str):
        return await self._call(text)

    async def synthesize(self, text: str):
        return await self._call(text)

    def resolve(self, index: int, value) -> None:
        self.calls[index][1].set_result(value)

    def reject(self, index: int, error: Exception) -> None:
        self.calls[index][1].set_exception(error)


class FakeVideo:
    """VideoPlayerHandle recording commands; ``fail_on`` names methods that raise."""

    def __init__(self, time: float = 0.0, fail_on: tuple[str, ...] = ()):
        self.time = time
        self.fail_on = fail_on
        self.loaded: str | None = None
        self.commands: list[str] = []
        self.closed = False

    def _check(self, name: str) -> None:
        if name in self.fail_on:
            raise RuntimeError(f"video {name} failed")

    def load(self, video_id: str) -> None:
        self.loaded = video_id

    def play(self) -> None:
        self.commands.append("play")
        self._check("play")

    def pause(self) -> None:
        self.commands.append("pause")
        self._check("pause")

    def get_current_time(self) -> float:
        self._check("get_current_time")
        return self.time

    def close(self) -> None:
        self._check("close")
        self.closed = True


class FakeAudio:
    """AudioPlayerHandle recording commands, including seeks."""

    def __init__(self, time: float = 0.0, fail_on: tuple[str, ...] = ()):
        self.time = time
        self.fail_on = fail_on
        self.commands: list[str] = []
        self.seeks: list[float] = []
        self.closed = False

    def _check(self, name: str) -> None:
        if name in self.fail_on:
            raise RuntimeError(f"audio {name} failed")

    def play(self) -> None:
        self.commands.append("play")
        self._check("play")

    def pause(self) -> None:
        self.commands.append("pause")
        self._check("pause")

    def get_current_time(self) -> float:
        self._check("get_current_time")
        return self.time

    def set_current_time(self, seconds: float) -> None:
        self._check("set_current_time")
        self.seeks.append(seconds)
        self.time = seconds

    def close(self) -> None:
        self._check("close")
        self.closed = True


class AsyncFakeAudio(FakeAudio):
    """Same as FakeAudio but every method is a coroutine, like an HTML5 play()."""

    async def play(self) -> None:  # type: ignore[override]
        await asyncio.sleep(0)
        super().play()

    async def pause(self) -> None:  # type: ignore[override]
        super().pause()

    async def get_current_time(self) -> float:  # type: ignore[override]
        return super().get_current_time()

    async def set_current_time(self, seconds: float) -> None:  # type: ignore[override]
        super().set_current_time(seconds)


@pytest.fixture
def transcripts() -> FakeTranscripts:
    return FakeTranscripts()


@pytest.fixture
def translator() -> FakeTranslator:
    return FakeTranslator()


@pytest.fixture
def synthesizer() -> FakeSynthesizer:
    return FakeSynthesizer()


@pytest.fixture
def orchestrator(transcripts, translator, synthesizer) -> PipelineOrchestrator:
    return PipelineOrchestrator(transcripts, translator, synthesizer)
