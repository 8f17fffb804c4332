"""Tests for wordstreak.ui.sound – detune conversion, queued playback and failed loads."""

from __future__ import annotations

from pathlib import Path

import pytest

pytest.importorskip("PySide6.QtMultimedia")

from PySide6.QtMultimedia import QMediaPlayer  # noqa: E402

from wordstreak.core.feedback import FeedbackEvent, SoundKind  # noqa: E402
from wordstreak.ui.sound import DEFAULT_AUDIO_DIR, SoundPlayer, playback_rate  # noqa: E402


class TestPlaybackRate:
    def test_no_detune(self):
        assert playback_rate(0) == 1.0

    def test_octave(self):
        assert playback_rate(1200) == pytest.approx(2.0)
        assert playback_rate(-1200) == pytest.approx(0.5)


class TestAssets:
    @pytest.mark.parametrize("kind", list(SoundKind))
    def test_every_sound_has_an_asset(self, kind):
        assert (DEFAULT_AUDIO_DIR / f"{kind.value}.wav").exists()


class TestMissingSound:
    def test_missing_asset_is_dropped(self, tmp_path: Path, caplog):
        player = SoundPlayer(audio_dir=tmp_path)
        player.play(FeedbackEvent(SoundKind.CLICK))
        player.play(FeedbackEvent(SoundKind.CLICK))
        assert "click" in player._failed
        assert player._pending == {}
        assert caplog.text.count("not found") == 1


class TestQueuedPlayback:
    @pytest.fixture()
    def player(self, tmp_path: Path, monkeypatch) -> SoundPlayer:
        player = SoundPlayer(audio_dir=tmp_path)
        player.loads = []
        player.started = []

        def fake_load(name: str) -> None:
            player.loads.append(name)
            player._players[name] = object()

        monkeypatch.setattr(player, "_load", fake_load)
        monkeypatch.setattr(player, "_start", lambda name, detune: player.started.append((name, detune)))
        return player

    def test_requests_wait_for_loaded_media(self, player: SoundPlayer):
        player.play(FeedbackEvent(SoundKind.SUCCESS, -100.0))
        player.play(FeedbackEvent(SoundKind.SUCCESS, 50.0))
        assert player.loads == ["success"]
        assert len(player._players) == 1
        assert player._pending["success"] == [-100.0, 50.0]
        assert player.started == []

        player._on_status("success", QMediaPlayer.MediaStatus.LoadedMedia)
        assert player.started == [("success", -100.0), ("success", 50.0)]
        assert "success" not in player._pending

    def test_ready_sound_starts_immediately(self, player: SoundPlayer):
        player.play(FeedbackEvent(SoundKind.CLICK))
        player._on_status("click", QMediaPlayer.MediaStatus.LoadedMedia)
        player.play(FeedbackEvent(SoundKind.CLICK, 200.0))
        assert player.started == [("click", 100.0), ("click", 200.0)]
        assert player.loads == ["click"]

    def test_second_loaded_status_does_not_replay(self, player: SoundPlayer):
        player.play(FeedbackEvent(SoundKind.ERROR))
        player._on_status("error", QMediaPlayer.MediaStatus.LoadedMedia)
        player._on_status("error", QMediaPlayer.MediaStatus.LoadedMedia)
        assert player.started == [("error", 100.0)]


class TestLoadFailure:
    def test_invalid_media_then_error_logs_once(self, tmp_path: Path, caplog):
        player = SoundPlayer(audio_dir=tmp_path)
        player._pending["error"] = [100.0]
        player._on_status("error", QMediaPlayer.MediaStatus.InvalidMedia)
        player._on_error("error", "unsupported format")
        assert caplog.text.count("Could not load sound") == 1
        assert "error" in player._failed
        assert player._pending == {}

    def test_failed_sound_is_skipped(self, tmp_path: Path):
        player = SoundPlayer(audio_dir=tmp_path)
        player._on_error("click", "boom")
        player.play(FeedbackEvent(SoundKind.CLICK))
        assert player._pending == {}
        assert player._players == {}
