"""Best-effort playback of feedback sounds."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from PySide6.QtCore import QObject, QUrl
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer

from wordstreak.core.feedback import FeedbackEvent

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_DIR = Path(__file__).resolve().parent.parent / "assets" / "audio"


def playback_rate(detune: float) -> float:
    """Convert a detune in cents to a playback rate (1200 cents per octave)."""
    return 2.0 ** (detune / 1200.0)


class SoundPlayer(QObject):
    """Plays ``FeedbackEvent``s; each sound is loaded at most once per session.

    Requests that arrive while a sound is still loading are queued and played once
    it is ready. A sound that fails to load is logged and then silently skipped.
    """

    def __init__(self, audio_dir: Path = DEFAULT_AUDIO_DIR, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._audio_dir = audio_dir
        self._players: Dict[str, QMediaPlayer] = {}
        self._outputs: Dict[str, QAudioOutput] = {}
        self._ready: Set[str] = set()
        self._failed: Set[str] = set()
        self._pending: Dict[str, List[float]] = {}

    def play_all(self, events: Iterable[FeedbackEvent]) -> None:
        for event in events:
            self.play(event)

    def play(self, event: FeedbackEvent) -> None:
        name = event.sound.value
        if name in self._failed:
            return
        if name in self._ready:
            self._start(name, event.detune)
            return
        self._pending.setdefault(name, []).append(event.detune)
        if name not in self._players:
            self._load(name)

    def _load(self, name: str) -> None:
        path = self._audio_dir / f"{name}.wav"
        if not path.exists():
            logger.warning("Sound %r not found at %s", name, path)
            self._fail(name)
            return
        player = QMediaPlayer(self)
        output = QAudioOutput(self)
        output.setVolume(0.5)
        player.setAudioOutput(output)
        player.mediaStatusChanged.connect(lambda status, n=name: self._on_status(n, status))
        player.errorOccurred.connect(lambda _error, message, n=name: self._on_error(n, message))
        self._players[name] = player
        self._outputs[name] = output
        player.setSource(QUrl.fromLocalFile(str(path)))

    def _on_status(self, name: str, status: QMediaPlayer.MediaStatus) -> None:
        if status == QMediaPlayer.MediaStatus.LoadedMedia and name not in self._ready:
            self._ready.add(name)
            for detune in self._pending.pop(name, []):
                self._start(name, detune)
        elif status == QMediaPlayer.MediaStatus.InvalidMedia:
            self._on_error(name, "invalid media")

    def _on_error(self, name: str, message: str) -> None:
        if name in self._failed:
            return
        logger.warning("Could not load sound %r: %s", name, message)
        self._fail(name)

    def _fail(self, name: str) -> None:
        self._failed.add(name)
        self._ready.discard(name)
        self._pending.pop(name, None)

    def _start(self, name: str, detune: float) -> None:
        player = self._players[name]
        player.stop()
        player.setPlaybackRate(playback_rate(detune))
        player.setPosition(0)
        player.play()
