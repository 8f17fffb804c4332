from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml

DEFAULT_WORDLIST_KEY = "en"
_WORD_RE = re.compile(r"^\S+$")


@dataclass(frozen=True)
class Wordlist:
    key: str
    title: str
    words: Tuple[str, ...]


def _clean_words(raw: object, source: str) -> Tuple[str, ...]:
    if isinstance(raw, list):
        words = [str(item).strip().lower() for item in raw if str(item).strip()]
    elif isinstance(raw, str):
        words = [line.strip().lower() for line in raw.splitlines() if line.strip()]
    else:
        raise ValueError(f"{source}: 'words' must be a list or a multiline string")
    bad = [w for w in words if not _WORD_RE.match(w)]
    if bad:
        raise ValueError(f"{source}: entries must be single words, got {bad[0]!r}")
    if not words:
        raise ValueError(f"{source}: wordlist has no words")
    return tuple(words)


class WordlistRepository:
    """Wordlists bundled under ``wordstreak/data/wordlists/*.yaml``.

    Each file holds a ``title`` and an ordered ``words`` list; list order is level order.
    """

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or Path(__file__).resolve().parent.parent / "data" / "wordlists"
        self._wordlists = self._load_wordlists()

    def all(self) -> List[Wordlist]:
        return list(self._wordlists.values())

    def get(self, key: str) -> Wordlist:
        return self._wordlists[key]

    def default(self) -> Wordlist:
        if DEFAULT_WORDLIST_KEY in self._wordlists:
            return self._wordlists[DEFAULT_WORDLIST_KEY]
        return next(iter(self._wordlists.values()))

    def _load_wordlists(self) -> Dict[str, Wordlist]:
        if not self._base_dir.exists():
            raise FileNotFoundError(f"Wordlists directory not found: {self._base_dir}")

        wordlists: Dict[str, Wordlist] = {}
        for path in sorted(self._base_dir.glob("*.yaml")):
            raw = yaml.safe_load(path.read_text(encoding="utf-8"))
            if not raw or not isinstance(raw, dict):
                raise ValueError(f"{path.name}: expected YAML with 'title' and 'words'")
            title = raw.get("title")
            if not title or not isinstance(title, str):
                raise ValueError(f"{path.name}: missing or invalid 'title'")
            if raw.get("words") is None:
                raise ValueError(f"{path.name}: missing 'words'")
            wordlists[path.stem] = Wordlist(
                key=path.stem,
                title=title.strip(),
                words=_clean_words(raw["words"], path.name),
            )

        if not wordlists:
            raise ValueError(f"No wordlist files (*.yaml) found in {self._base_dir}")
        return wordlists


def read_wordlist_file(path: Path) -> Tuple[str, ...]:
    """Read a custom wordlist: YAML (a list, or a mapping with ``words``) or plain text, one word per line."""
    if not path.exists():
        raise FileNotFoundError(f"Wordlist file not found: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"{path.name}: invalid YAML: {e}") from e
        if isinstance(raw, dict):
            raw = raw.get("words")
        if raw is None:
            raise ValueError(f"{path.name}: missing 'words'")
        return _clean_words(raw, path.name)
    return _clean_words(text, path.name)
