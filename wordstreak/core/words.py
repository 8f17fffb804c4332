from __future__ import annotations

import enum
import unicodedata
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


class Correctness(enum.Enum):
    """Whether a character position has been typed, and typed right."""

    UNKNOWN = "unknown"
    CORRECT = "correct"
    INCORRECT = "incorrect"

    @classmethod
    def of(cls, typed: Optional[str], expected: str) -> "Correctness":
        if typed is None:
            return cls.UNKNOWN
        return cls.CORRECT if typed == expected else cls.INCORRECT


@dataclass(frozen=True)
class Character:
    character: str
    correct: Correctness = Correctness.UNKNOWN


@dataclass(frozen=True)
class Word:
    """One attempt at a wordlist entry.

    ``characters`` always ends with a single space; typing it confirms the word.
    """

    characters: Tuple[Character, ...]
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    wpm: Optional[int] = None
    match: bool = False
    hit_target_wpm: bool = False
    streak: int = 0

    @property
    def text(self) -> str:
        return "".join(c.character for c in self.characters)


def mark_characters(characters: Sequence[Character], typed: str) -> Tuple[Character, ...]:
    """Return ``characters`` re-marked against ``typed``; untyped positions are UNKNOWN."""
    marked = []
    for index, character in enumerate(characters):
        typed_char = typed[index] if index < len(typed) else None
        marked.append(Character(character.character, Correctness.of(typed_char, character.character)))
    return tuple(marked)


def create_word(wordlist: Sequence[str], index: int) -> Word:
    """Build a fresh ``Word`` for ``wordlist[index]``.

    Text is NFC-normalised first, so an accent typed as one key is one position.
    Raises ``IndexError`` for an out-of-range index; callers clamp first.
    """
    if index < 0 or index >= len(wordlist):
        raise IndexError(f"wordlist index {index} out of range (0..{len(wordlist) - 1})")
    raw = unicodedata.normalize("NFC", f"{wordlist[index]} ".lower())
    return Word(characters=tuple(Character(ch) for ch in raw))
