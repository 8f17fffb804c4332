from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Sequence, Tuple

from wordstreak.core.words import Character, Correctness, Word, create_word

DEFAULT_LEVEL = 0
DEFAULT_TARGET_WPM = 90
DEFAULT_TARGET_STREAK = 5

WPM_OPTIONS: Tuple[int, ...] = (30, 60, 90, 120, 200)
STREAK_OPTIONS: Tuple[int, ...] = (1, 3, 5, 10, 25)


class Phase(enum.Enum):
    """Which part of the practice loop a session is in."""

    INSTRUCTIONS = "instructions"
    TYPING = "typing"
    AWAITING_CONFIRM = "awaiting_confirm"
    FINISHED = "finished"


@dataclass(frozen=True)
class SessionState:
    """Immutable snapshot of one practice session.

    Every transition returns a new value; nothing here is mutated in place.
    """

    word: Word
    level: int = DEFAULT_LEVEL
    highest_level: Optional[int] = DEFAULT_LEVEL
    buffer: str = ""
    target_wpm: int = DEFAULT_TARGET_WPM
    target_streak: int = DEFAULT_TARGET_STREAK
    finished: bool = False
    show_instructions: bool = True
    last_save: Optional[int] = None
    last_wpm: Optional[int] = None
    dark_mode: bool = True
    muted: bool = True
    custom_wordlist: Optional[Tuple[str, ...]] = None

    def active_wordlist(self, default_wordlist: Sequence[str]) -> Sequence[str]:
        return self.custom_wordlist if self.custom_wordlist else default_wordlist

    @property
    def phase(self) -> Phase:
        return session_phase(self)

    @property
    def streak_target_met(self) -> bool:
        """True when the word already holds the target streak, so typing is ignored.

        Happens after the target streak is lowered below the streak in progress.
        """
        return not self.finished and self.word.streak >= self.target_streak

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": _word_to_dict(self.word),
            "level": self.level,
            "highest_level": self.highest_level,
            "buffer": self.buffer,
            "target_wpm": self.target_wpm,
            "target_streak": self.target_streak,
            "finished": self.finished,
            "show_instructions": self.show_instructions,
            "last_save": self.last_save,
            "last_wpm": self.last_wpm,
            "dark_mode": self.dark_mode,
            "muted": self.muted,
            "custom_wordlist": list(self.custom_wordlist) if self.custom_wordlist is not None else None,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "SessionState":
        """Rebuild a snapshot written by ``to_dict``.

        Raises ``KeyError``, ``TypeError`` or ``ValueError`` for anything that does not
        have the expected shape.
        """
        if not isinstance(payload, dict):
            raise TypeError(f"expected a mapping, got {type(payload).__name__}")
        custom = payload.get("custom_wordlist")
        if custom is not None:
            if not isinstance(custom, list) or not all(isinstance(w, str) for w in custom):
                raise TypeError("custom_wordlist must be a list of strings")
            custom = tuple(custom)
        highest = payload.get("highest_level")
        state = cls(
            word=_word_from_dict(payload["word"]),
            level=int(payload["level"]),
            highest_level=int(highest) if highest is not None else None,
            buffer=str(payload["buffer"]),
            target_wpm=int(payload["target_wpm"]),
            target_streak=int(payload["target_streak"]),
            finished=bool(payload["finished"]),
            show_instructions=bool(payload.get("show_instructions", True)),
            last_save=_optional_int(payload.get("last_save")),
            last_wpm=_optional_int(payload.get("last_wpm")),
            dark_mode=bool(payload.get("dark_mode", True)),
            muted=bool(payload.get("muted", True)),
            custom_wordlist=custom,
        )
        if len(state.buffer) > len(state.word.characters):
            raise ValueError("buffer is longer than the current word")
        if state.target_wpm <= 0 or state.target_streak <= 0:
            raise ValueError("targets must be positive")
        return state


def session_phase(state: SessionState) -> Phase:
    if state.show_instructions:
        return Phase.INSTRUCTIONS
    if state.finished:
        return Phase.FINISHED
    if state.word.end_time is not None:
        return Phase.AWAITING_CONFIRM
    return Phase.TYPING


def initial_state(default_wordlist: Sequence[str]) -> SessionState:
    return SessionState(word=create_word(default_wordlist, DEFAULT_LEVEL))


def validate_level(state: SessionState, default_wordlist: Sequence[str]) -> SessionState:
    """Raise ``ValueError`` unless ``state.level`` indexes its active wordlist."""
    active = state.active_wordlist(default_wordlist)
    if not 0 <= state.level < len(active):
        raise ValueError(f"level {state.level} is outside the active wordlist (size {len(active)})")
    if state.highest_level is not None and not state.level <= state.highest_level < len(active):
        raise ValueError(f"highest_level {state.highest_level} is inconsistent with level {state.level}")
    return state


def stamp(state: SessionState, now: int) -> SessionState:
    return replace(state, last_save=now)


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def _word_to_dict(word: Word) -> Dict[str, Any]:
    return {
        "characters": [
            {"character": c.character, "correct": c.correct.value} for c in word.characters
        ],
        "start_time": word.start_time,
        "end_time": word.end_time,
        "wpm": word.wpm,
        "match": word.match,
        "hit_target_wpm": word.hit_target_wpm,
        "streak": word.streak,
    }


def _word_from_dict(raw: Dict[str, Any]) -> Word:
    characters = tuple(
        Character(character=str(c["character"]), correct=Correctness(c.get("correct", "unknown")))
        for c in raw["characters"]
    )
    if not characters:
        raise ValueError("word has no characters")
    streak = int(raw.get("streak", 0))
    if streak < 0:
        raise ValueError("streak must not be negative")
    return Word(
        characters=characters,
        start_time=_optional_int(raw.get("start_time")),
        end_time=_optional_int(raw.get("end_time")),
        wpm=_optional_int(raw.get("wpm")),
        match=bool(raw.get("match", False)),
        hit_target_wpm=bool(raw.get("hit_target_wpm", False)),
        streak=streak,
    )
