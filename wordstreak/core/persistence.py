from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Sequence

from wordstreak.core.state import SessionState, initial_state, validate_level

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "WORDSTREAK_HOME"


def data_dir() -> Path:
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".wordstreak"


class SessionPersistence:
    """Keeps the session snapshot on disk across app restarts.

    File: ~/.wordstreak/session.json (or $WORDSTREAK_HOME/session.json).
    A snapshot that cannot be read back falls back to a fresh session.
    """

    def __init__(self, default_wordlist: Sequence[str], file_path: Optional[Path] = None) -> None:
        self._default_wordlist = tuple(default_wordlist)
        self._file_path = file_path or data_dir() / "session.json"

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self) -> SessionState:
        if not self._file_path.exists():
            return initial_state(self._default_wordlist)
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
            state = SessionState.from_dict(payload)
            return validate_level(state, self._default_wordlist)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load session from %s: %s", self._file_path, e)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding incompatible session snapshot in %s: %s", self._file_path, e)
        return initial_state(self._default_wordlist)

    def save(self, state: SessionState) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(state.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save session to %s: %s", self._file_path, e)

    def clear(self) -> None:
        """Remove the saved snapshot, if any."""
        try:
            self._file_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove %s: %s", self._file_path, e)
