"""Tests for wordstreak.core.feedback – transition outcome to sound mapping."""

from __future__ import annotations

from dataclasses import replace

from wordstreak.core.feedback import (
    REFERENCE_DETUNE,
    FeedbackEvent,
    SoundKind,
    completion_feedback,
    is_fresh_error,
    mismatch_feedback,
    success_detune,
)
from wordstreak.core.words import create_word, mark_characters


class TestSoundKind:
    def test_values_are_asset_names(self):
        assert {k.value for k in SoundKind} == {"click", "error", "speed-error", "success"}


class TestSuccessDetune:
    def test_at_target_is_reference(self):
        assert success_detune(5, 5) == REFERENCE_DETUNE

    def test_far_from_target_is_lower(self):
        assert success_detune(1, 5) < success_detune(4, 5) < REFERENCE_DETUNE

    def test_formula(self):
        assert success_detune(2, 4) == 0.0

    def test_no_streak_is_reference(self):
        assert success_detune(0, 5) == REFERENCE_DETUNE


class TestMismatchFeedback:
    def test_fresh_word_errors(self):
        word = create_word(["cat"], 0)
        assert is_fresh_error(word)
        assert mismatch_feedback(word) == [FeedbackEvent(SoundKind.ERROR)]

    def test_word_already_showing_mistake_is_silent(self):
        word = create_word(["cat"], 0)
        broken = replace(word, characters=mark_characters(word.characters, "x"))
        assert not is_fresh_error(broken)
        assert mismatch_feedback(broken) == []


class TestCompletionFeedback:
    def test_hit_target(self):
        assert completion_feedback(True, 1, 1) == [FeedbackEvent(SoundKind.SUCCESS, 100.0)]

    def test_missed_target(self):
        assert completion_feedback(False, 0, 3) == [FeedbackEvent(SoundKind.SPEED_ERROR)]
