from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List

from wordstreak.core.words import Correctness, Word

REFERENCE_DETUNE = 100.0


class SoundKind(enum.Enum):
    """Sound categories; the value is also the audio asset name."""

    CLICK = "click"
    ERROR = "error"
    SPEED_ERROR = "speed-error"
    SUCCESS = "success"


@dataclass(frozen=True)
class FeedbackEvent:
    sound: SoundKind
    detune: float = REFERENCE_DETUNE


def success_detune(streak: int, target_streak: int) -> float:
    """Pitch shift in cents; rises towards ``REFERENCE_DETUNE`` as the streak nears its target."""
    if streak <= 0:
        return REFERENCE_DETUNE
    return REFERENCE_DETUNE + REFERENCE_DETUNE * (1 - target_streak / streak)


def is_fresh_error(previous: Word) -> bool:
    """An error is fresh unless the word on screen already shows a mistake."""
    return not any(c.correct is Correctness.INCORRECT for c in previous.characters)


def mismatch_feedback(previous: Word) -> List[FeedbackEvent]:
    if is_fresh_error(previous):
        return [FeedbackEvent(SoundKind.ERROR)]
    return []


def keystroke_feedback() -> List[FeedbackEvent]:
    return [FeedbackEvent(SoundKind.CLICK)]


def completion_feedback(hit_target_wpm: bool, streak: int, target_streak: int) -> List[FeedbackEvent]:
    if hit_target_wpm:
        return [FeedbackEvent(SoundKind.SUCCESS, success_detune(streak, target_streak))]
    return [FeedbackEvent(SoundKind.SPEED_ERROR)]
