"""Tests for wordstreak.core.words – word factory and character marking."""

from __future__ import annotations

import pytest

from wordstreak.core.words import Character, Correctness, Word, create_word, mark_characters


# ---------------------------------------------------------------------------
# Correctness
# ---------------------------------------------------------------------------

class TestCorrectness:
    def test_untyped_is_unknown(self):
        assert Correctness.of(None, "a") is Correctness.UNKNOWN

    def test_same_character_is_correct(self):
        assert Correctness.of("a", "a") is Correctness.CORRECT

    def test_different_character_is_incorrect(self):
        assert Correctness.of("b", "a") is Correctness.INCORRECT


# ---------------------------------------------------------------------------
# create_word
# ---------------------------------------------------------------------------

class TestCreateWord:
    @pytest.mark.parametrize("index", [0, 1, 2])
    def test_length_includes_trailing_space(self, index):
        wordlist = ["a", "house", "typing"]
        word = create_word(wordlist, index)
        assert len(word.characters) == len(wordlist[index]) + 1
        assert word.characters[-1].character == " "

    def test_lowercases(self):
        word = create_word(["CaT"], 0)
        assert word.text == "cat "

    def test_fresh_word_defaults(self):
        word = create_word(["dog"], 0)
        assert all(c.correct is Correctness.UNKNOWN for c in word.characters)
        assert word.streak == 0
        assert word.match is False
        assert word.hit_target_wpm is False
        assert word.start_time is None
        assert word.end_time is None
        assert word.wpm is None

    def test_index_past_end_raises(self):
        with pytest.raises(IndexError):
            create_word(["a"], 1)

    def test_negative_index_raises(self):
        with pytest.raises(IndexError):
            create_word(["a", "b"], -1)

    def test_words_are_immutable(self):
        word = create_word(["a"], 0)
        with pytest.raises(AttributeError):
            word.streak = 3  # type: ignore[misc]

    def test_decomposed_accents_are_composed(self):
        word = create_word(["cafe\u0301"], 0)
        assert word.text == "café "
        assert len(word.characters) == 5

    def test_precomposed_text_unchanged(self):
        assert create_word(["Été"], 0).text == "été "


# ---------------------------------------------------------------------------
# mark_characters
# ---------------------------------------------------------------------------

class TestMarkCharacters:
    def test_marks_typed_prefix_only(self):
        word = create_word(["cat"], 0)
        marked = mark_characters(word.characters, "cx")
        assert [c.correct for c in marked] == [
            Correctness.CORRECT,
            Correctness.INCORRECT,
            Correctness.UNKNOWN,
            Correctness.UNKNOWN,
        ]

    def test_empty_buffer_resets_everything(self):
        characters = (Character("a", Correctness.INCORRECT), Character(" ", Correctness.CORRECT))
        marked = mark_characters(characters, "")
        assert all(c.correct is Correctness.UNKNOWN for c in marked)

    def test_keeps_characters(self):
        word = Word(characters=(Character("o"), Character("k"), Character(" ")))
        assert "".join(c.character for c in mark_characters(word.characters, "ok")) == "ok "
