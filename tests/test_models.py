"""Tests for data models and language definitions."""

import pytest

from dubsync.core.errors import TranslationError
from dubsync.core.languages import (
    LANGUAGES,
    SPEECH_LANGUAGES,
    is_valid_language,
    language_name,
    validate_language,
)
from dubsync.core.models import PlaybackSession, RunSnapshot, Stage, VideoReference


class TestStage:
    def test_failed_stages(self):
        failed = {s for s in Stage if s.is_failed}
        assert failed == {
            Stage.TRANSCRIPT_FAILED,
            Stage.TRANSLATION_FAILED,
            Stage.SYNTHESIS_FAILED,
        }

    def test_idle_and_ready_not_busy(self):
        assert not Stage.IDLE.is_busy
        assert not Stage.READY.is_busy
        assert not Stage.TRANSCRIPT_READY.is_busy
        assert Stage.TRANSLATING.is_busy


class TestRunSnapshot:
    def test_can_submit_requires_transcript_ready(self):
        snapshot = RunSnapshot(token=1, video_id="x", stage=Stage.TRANSLATED, transcript="text")
        assert snapshot.can_submit is False

    def test_can_submit_rejects_blank(self):
        snapshot = RunSnapshot(
            token=1, video_id="x", stage=Stage.TRANSCRIPT_READY, transcript=" \n "
        )
        assert snapshot.can_submit is False

    def test_can_submit(self):
        snapshot = RunSnapshot(
            token=1, video_id="x", stage=Stage.TRANSCRIPT_READY, transcript="नमस्ते"
        )
        assert snapshot.can_submit is True

    def test_error_attached(self):
        snapshot = RunSnapshot(
            token=1,
            video_id="x",
            stage=Stage.TRANSLATION_FAILED,
            error=TranslationError(),
        )
        assert snapshot.error.message == "Failed to translate text."


def test_video_reference_validity():
    assert VideoReference("https://youtu.be/dQw4w9WgXcQ", "dQw4w9WgXcQ").is_valid
    assert not VideoReference("nonsense").is_valid


def test_playback_session_defaults():
    session = PlaybackSession(video=None, audio=None, video_id="dQw4w9WgXcQ")
    assert session.is_playing is False
    assert session.audio_ready is True
    assert session.drift_threshold == 0.5
    assert session.last_video_time is None


class TestLanguages:
    def test_defaults_supported(self):
        assert is_valid_language("hi")
        assert is_valid_language("ta")
        assert "ta" in SPEECH_LANGUAGES

    def test_speech_languages_are_known(self):
        assert SPEECH_LANGUAGES <= set(LANGUAGES)

    def test_language_name(self):
        assert language_name("hi") == "Hindi"
        assert language_name("xx") == "xx"

    def test_validate_language(self):
        assert validate_language("ta") == "ta"
        with pytest.raises(ValueError, match="dubsync languages"):
            validate_language("klingon")
