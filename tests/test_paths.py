"""Tests for workspace directory management utilities."""

import json

from dubsync.utils.paths import create_workspace, find_audio, save_metadata, workspace_paths


class TestCreateWorkspace:
    def test_nested_structure(self, tmp_path):
        """Workspace is <base>/<video_id>/<timestamp>/."""
        ws = create_workspace("dQw4w9WgXcQ", base_dir=tmp_path)
        assert ws.is_dir()
        assert ws.parent.name == "dQw4w9WgXcQ"
        assert ws.parent.parent == tmp_path

    def test_has_timestamp(self, tmp_path):
        ws = create_workspace("dQw4w9WgXcQ", base_dir=tmp_path)
        assert len(ws.name) == 15  # YYYYMMDD_HHMMSS

    def test_multiple_runs_same_video(self, tmp_path):
        ws1 = create_workspace("dQw4w9WgXcQ", base_dir=tmp_path)
        ws2 = create_workspace("dQw4w9WgXcQ", base_dir=tmp_path)
        assert ws1.parent == ws2.parent


def test_workspace_paths(tmp_path):
    paths = workspace_paths(tmp_path, "hi", "ta")
    assert paths["transcript"] == tmp_path / "transcript.hi.txt"
    assert paths["translation"] == tmp_path / "translation.ta.txt"
    assert paths["audio"] == tmp_path / "audio.ta.mp3"
    assert paths["metadata"] == tmp_path / "metadata.json"
    assert workspace_paths(tmp_path, "hi", "ta", "wav")["audio"].suffix == ".wav"


class TestFindAudio:
    def test_found(self, tmp_path):
        (tmp_path / "audio.ta.mp3").write_bytes(b"ID3")
        assert find_audio(tmp_path) == tmp_path / "audio.ta.mp3"

    def test_missing(self, tmp_path):
        (tmp_path / "transcript.hi.txt").write_text("x")
        assert find_audio(tmp_path) is None


class TestSaveMetadata:
    def test_saves_json(self, tmp_path):
        meta_path = save_metadata(tmp_path, video_id="dQw4w9WgXcQ", target_language="ta")
        data = json.loads(meta_path.read_text())
        assert data["video_id"] == "dQw4w9WgXcQ"
        assert data["target_language"] == "ta"
        assert "created_at" in data

    def test_file_inventory(self, tmp_path):
        (tmp_path / "audio.ta.mp3").write_bytes(b"ID3-data")
        (tmp_path / "transcript.hi.txt").write_text("नमस्ते", encoding="utf-8")
        (tmp_path / "translation.ta.txt").write_text("வணக்கம்", encoding="utf-8")
        (tmp_path / "notes.md").write_text("x")

        data = json.loads(save_metadata(tmp_path).read_text())

        files = data["files"]
        assert files["audio.ta.mp3"] == {"size_bytes": 8, "type": "dub_audio"}
        assert files["transcript.hi.txt"]["type"] == "transcript_text"
        assert files["translation.ta.txt"]["type"] == "translation_text"
        assert files["notes.md"]["type"] == "other"
        assert "metadata.json" not in files
