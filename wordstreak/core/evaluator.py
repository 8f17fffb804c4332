from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from wordstreak.core.words import Character, Word, mark_characters

CHARS_PER_WORD = 5
MS_PER_MINUTE = 60_000


@dataclass(frozen=True)
class Evaluation:
    """Outcome of appending one character to the buffer of a word."""

    append_buffer: str
    characters: Tuple[Character, ...]
    match: bool
    complete: bool
    start_time: int
    wpm: int
    hit_target_wpm: bool


def words_per_minute(typed_length: int, start_time: Optional[int], now: int) -> int:
    """Standard WPM: (characters / 5) / elapsed minutes, rounded half-up.

    No start time or no elapsed time yields 0 so the target is simply missed.
    """
    if start_time is None:
        return 0
    elapsed_ms = now - start_time
    if elapsed_ms <= 0:
        return 0
    minutes = elapsed_ms / MS_PER_MINUTE
    return int(math.floor(typed_length / CHARS_PER_WORD / minutes + 0.5))


def evaluate(word: Word, buffer: str, character: str, now: int, target_wpm: int) -> Evaluation:
    append_buffer = buffer + character
    characters = mark_characters(word.characters, append_buffer)
    expected = word.text
    match = all(
        index < len(expected) and typed == expected[index]
        for index, typed in enumerate(append_buffer)
    )
    start_time = word.start_time if word.start_time is not None else now
    complete = len(append_buffer) >= len(word.characters)
    wpm = words_per_minute(len(append_buffer), start_time, now) if complete else 0
    return Evaluation(
        append_buffer=append_buffer,
        characters=characters,
        match=match,
        complete=complete,
        start_time=start_time,
        wpm=wpm,
        hit_target_wpm=complete and wpm >= target_wpm,
    )
