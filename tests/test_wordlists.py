"""Tests for wordstreak.core.wordlists – YAML wordlist loading."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from wordstreak.core.wordlists import Wordlist, WordlistRepository, read_wordlist_file


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def wordlists_dir(tmp_path: Path) -> Path:
    d = tmp_path / "wordlists"
    d.mkdir()
    return d


def _write(path: Path, content: str) -> Path:
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Bundled wordlist
# ---------------------------------------------------------------------------

class TestBundled:
    def test_default_wordlist_loads(self):
        wordlist = WordlistRepository().default()
        assert wordlist.key == "en"
        assert wordlist.words[0] == "the"
        assert len(wordlist.words) > 100
        assert all(w == w.lower() and " " not in w for w in wordlist.words)


# ---------------------------------------------------------------------------
# WordlistRepository
# ---------------------------------------------------------------------------

class TestRepository:
    def test_loads_list(self, wordlists_dir: Path):
        _write(wordlists_dir / "en.yaml", """\
            title: Basics
            words:
              - The
              - cat
            """)
        repo = WordlistRepository(wordlists_dir)
        assert repo.get("en") == Wordlist(key="en", title="Basics", words=("the", "cat"))
        assert repo.default().key == "en"

    def test_multiline_string(self, wordlists_dir: Path):
        _write(wordlists_dir / "fruit.yaml", """\
            title: Fruit
            words: |
              apple

              pear
            """)
        repo = WordlistRepository(wordlists_dir)
        assert repo.get("fruit").words == ("apple", "pear")
        assert repo.default().key == "fruit"

    def test_all_sorted_by_file_name(self, wordlists_dir: Path):
        _write(wordlists_dir / "b.yaml", "title: B\nwords: [b]\n")
        _write(wordlists_dir / "a.yaml", "title: A\nwords: [a]\n")
        assert [w.key for w in WordlistRepository(wordlists_dir).all()] == ["a", "b"]

    def test_missing_dir(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            WordlistRepository(tmp_path / "nope")

    def test_empty_dir(self, wordlists_dir: Path):
        with pytest.raises(ValueError, match="No wordlist files"):
            WordlistRepository(wordlists_dir)

    def test_missing_title(self, wordlists_dir: Path):
        _write(wordlists_dir / "x.yaml", "words: [a]\n")
        with pytest.raises(ValueError, match="title"):
            WordlistRepository(wordlists_dir)

    def test_missing_words(self, wordlists_dir: Path):
        _write(wordlists_dir / "x.yaml", "title: X\n")
        with pytest.raises(ValueError, match="words"):
            WordlistRepository(wordlists_dir)

    def test_no_words(self, wordlists_dir: Path):
        _write(wordlists_dir / "x.yaml", "title: X\nwords: []\n")
        with pytest.raises(ValueError, match="no words"):
            WordlistRepository(wordlists_dir)

    def test_multi_word_entry_rejected(self, wordlists_dir: Path):
        _write(wordlists_dir / "x.yaml", "title: X\nwords: ['two words']\n")
        with pytest.raises(ValueError, match="single words"):
            WordlistRepository(wordlists_dir)


# ---------------------------------------------------------------------------
# read_wordlist_file
# ---------------------------------------------------------------------------

class TestReadWordlistFile:
    def test_text_file(self, tmp_path: Path):
        path = _write(tmp_path / "list.txt", "Alpha\n\n beta \n")
        assert read_wordlist_file(path) == ("alpha", "beta")

    def test_yaml_list(self, tmp_path: Path):
        path = _write(tmp_path / "list.yaml", "- one\n- two\n")
        assert read_wordlist_file(path) == ("one", "two")

    def test_yaml_mapping(self, tmp_path: Path):
        path = _write(tmp_path / "list.yml", "title: whatever\nwords: [one]\n")
        assert read_wordlist_file(path) == ("one",)

    def test_yaml_without_words(self, tmp_path: Path):
        path = _write(tmp_path / "list.yaml", "title: whatever\n")
        with pytest.raises(ValueError):
            read_wordlist_file(path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = _write(tmp_path / "list.yaml", "words: [unclosed\n")
        with pytest.raises(ValueError, match="invalid YAML"):
            read_wordlist_file(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            read_wordlist_file(tmp_path / "absent.txt")

    def test_empty_text_file(self, tmp_path: Path):
        path = _write(tmp_path / "list.txt", "\n\n")
        with pytest.raises(ValueError):
            read_wordlist_file(path)
