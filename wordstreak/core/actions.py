"""Actions accepted by the progression controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from wordstreak.core.state import SessionState


@dataclass(frozen=True)
class AppendBuffer:
    character: str


@dataclass(frozen=True)
class JumpForwards:
    pass


@dataclass(frozen=True)
class JumpBackwards:
    pass


@dataclass(frozen=True)
class JumpStart:
    pass


@dataclass(frozen=True)
class JumpEnd:
    pass


@dataclass(frozen=True)
class ResetState:
    pass


@dataclass(frozen=True)
class LoadState:
    snapshot: SessionState


@dataclass(frozen=True)
class SaveState:
    pass


@dataclass(frozen=True)
class SetTargetWpm:
    value: int


@dataclass(frozen=True)
class SetTargetStreak:
    value: int


@dataclass(frozen=True)
class SetWordlist:
    words: Tuple[str, ...]


@dataclass(frozen=True)
class ToggleInstructions:
    pass


@dataclass(frozen=True)
class ToggleDarkMode:
    pass


@dataclass(frozen=True)
class ToggleMuted:
    pass


Action = Union[
    AppendBuffer,
    JumpForwards,
    JumpBackwards,
    JumpStart,
    JumpEnd,
    ResetState,
    LoadState,
    SaveState,
    SetTargetWpm,
    SetTargetStreak,
    SetWordlist,
    ToggleInstructions,
    ToggleDarkMode,
    ToggleMuted,
]
