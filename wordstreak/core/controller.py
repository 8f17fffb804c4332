from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Sequence, Tuple

from wordstreak.core.actions import (
    Action,
    AppendBuffer,
    JumpBackwards,
    JumpEnd,
    JumpForwards,
    JumpStart,
    LoadState,
    ResetState,
    SaveState,
    SetTargetStreak,
    SetTargetWpm,
    SetWordlist,
    ToggleDarkMode,
    ToggleInstructions,
    ToggleMuted,
)
from wordstreak.core.evaluator import evaluate
from wordstreak.core.feedback import (
    FeedbackEvent,
    completion_feedback,
    keystroke_feedback,
    mismatch_feedback,
)
from wordstreak.core.state import (
    STREAK_OPTIONS,
    WPM_OPTIONS,
    Phase,
    SessionState,
    initial_state,
    stamp,
)
from wordstreak.core.words import create_word, mark_characters

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def clean_wordlist(words: Sequence[str]) -> Tuple[str, ...]:
    return tuple(w.strip() for w in words if w and w.strip())


@dataclass(frozen=True)
class Transition:
    """New session state plus the feedback requested while reaching it."""

    state: SessionState
    events: List[FeedbackEvent] = field(default_factory=list)


class ProgressionController:
    """Drives a practice session: ``dispatch(state, action)`` returns the next state.

    The controller holds no session data of its own. It only knows the default
    wordlist (used whenever a session has no custom one) and a clock returning
    milliseconds, read once per transition.
    """

    def __init__(self, default_wordlist: Sequence[str], clock: Callable[[], int] = now_ms) -> None:
        if not default_wordlist:
            raise ValueError("default wordlist is empty")
        self._default_wordlist = tuple(default_wordlist)
        self._clock = clock

    @property
    def default_wordlist(self) -> Tuple[str, ...]:
        return self._default_wordlist

    def initial_state(self) -> SessionState:
        return initial_state(self._default_wordlist)

    def dispatch(self, state: SessionState, action: Action) -> Transition:
        now = self._clock()
        if isinstance(action, AppendBuffer):
            transition = self._append_buffer(state, action.character, now)
            if state.muted:
                return Transition(transition.state)
            return transition
        return Transition(self._control(state, action, now))

    def adopt_wordlist(self, state: SessionState, words: Sequence[str]) -> Transition:
        """Switch to ``words`` unless the session already practises exactly that list.

        Re-applying the list a saved session was built on keeps its progress.
        """
        if state.custom_wordlist is not None and state.custom_wordlist == clean_wordlist(words):
            logger.info("Wordlist already active; keeping progress at level %d", state.level)
            return Transition(state)
        return self.dispatch(state, SetWordlist(tuple(words)))

    # ------------------------------------------------------------------
    # Typing
    # ------------------------------------------------------------------

    def _append_buffer(self, state: SessionState, character: str, now: int) -> Transition:
        phase = state.phase
        if phase in (Phase.INSTRUCTIONS, Phase.FINISHED):
            return Transition(state)
        if not state.buffer and character == " ":
            return Transition(state)
        if state.word.streak >= state.target_streak:
            return Transition(state)

        result = evaluate(state.word, state.buffer, character, now, state.target_wpm)

        if not result.match:
            word = replace(
                state.word,
                characters=result.characters,
                end_time=now,
                streak=0,
                wpm=0,
                match=False,
                hit_target_wpm=False,
            )
            return Transition(replace(state, word=word, buffer=""), mismatch_feedback(state.word))

        if phase is Phase.AWAITING_CONFIRM:
            return self._replay(state, character, now)

        if not result.complete:
            word = replace(state.word, characters=result.characters, start_time=result.start_time)
            return Transition(replace(state, word=word, buffer=result.append_buffer), keystroke_feedback())

        streak = state.word.streak + 1 if result.hit_target_wpm else 0
        events = completion_feedback(result.hit_target_wpm, streak, state.target_streak)
        word = replace(
            state.word,
            characters=result.characters,
            start_time=result.start_time,
            end_time=now,
            wpm=result.wpm,
            match=True,
            hit_target_wpm=result.hit_target_wpm,
            streak=streak,
        )
        completed = replace(state, word=word, buffer="", last_wpm=result.wpm)
        if streak >= state.target_streak:
            return Transition(self._advance_level(completed, now), events)
        return Transition(completed, events)

    def _replay(self, state: SessionState, character: str, now: int) -> Transition:
        """Start the same level again, seeded with the keystroke that confirmed the last attempt."""
        previous = state.word
        carried = previous.match and previous.wpm is not None and previous.wpm >= state.target_wpm
        fresh = create_word(state.active_wordlist(self._default_wordlist), state.level)
        word = replace(
            fresh,
            characters=mark_characters(fresh.characters, character),
            start_time=now,
            streak=previous.streak if carried else 0,
        )
        return Transition(replace(state, word=word, buffer=character), keystroke_feedback())

    def _advance_level(self, state: SessionState, now: int) -> SessionState:
        wordlist = state.active_wordlist(self._default_wordlist)
        if state.level + 1 == len(wordlist):
            logger.info("Finished all %d words", len(wordlist))
            return replace(state, finished=True, last_save=now)
        level = state.level + 1
        logger.debug("Advancing to level %d", level)
        return replace(
            state,
            level=level,
            highest_level=max(state.highest_level or 0, level),
            word=create_word(wordlist, level),
            buffer="",
            last_save=now,
        )

    # ------------------------------------------------------------------
    # Session controls
    # ------------------------------------------------------------------

    def _control(self, state: SessionState, action: Action, now: int) -> SessionState:
        if isinstance(action, (JumpForwards, JumpBackwards, JumpStart, JumpEnd)):
            return self._jump(state, action, now)
        if isinstance(action, ResetState):
            return stamp(self.initial_state(), now)
        if isinstance(action, LoadState):
            return action.snapshot
        if isinstance(action, SaveState):
            return stamp(state, now)
        if isinstance(action, SetTargetWpm):
            if action.value not in WPM_OPTIONS:
                logger.debug("Ignoring target WPM %r outside %s", action.value, WPM_OPTIONS)
                return state
            return replace(state, target_wpm=action.value, last_save=now)
        if isinstance(action, SetTargetStreak):
            if action.value not in STREAK_OPTIONS:
                logger.debug("Ignoring target streak %r outside %s", action.value, STREAK_OPTIONS)
                return state
            return replace(state, target_streak=action.value, last_save=now)
        if isinstance(action, SetWordlist):
            return self._set_wordlist(state, action.words, now)
        if isinstance(action, ToggleInstructions):
            return replace(state, show_instructions=not state.show_instructions)
        if isinstance(action, ToggleDarkMode):
            return replace(state, dark_mode=not state.dark_mode, last_save=now)
        if isinstance(action, ToggleMuted):
            return replace(state, muted=not state.muted, last_save=now)
        logger.warning("Unknown action %r", action)
        return state

    def _jump(self, state: SessionState, action: Action, now: int) -> SessionState:
        if state.show_instructions:
            return state
        highest = state.highest_level
        target: Optional[int]
        if isinstance(action, JumpStart):
            target = 0
        elif highest is None:
            target = None
        elif isinstance(action, JumpForwards):
            target = min(highest, state.level + 1)
        elif isinstance(action, JumpBackwards):
            target = max(0, state.level - 1)
        else:
            target = highest
        if target is None:
            return state
        wordlist = state.active_wordlist(self._default_wordlist)
        target = max(0, min(target, len(wordlist) - 1))
        return replace(
            state,
            level=target,
            word=create_word(wordlist, target),
            buffer="",
            finished=False,
            last_save=now,
        )

    def _set_wordlist(self, state: SessionState, words: Sequence[str], now: int) -> SessionState:
        cleaned = clean_wordlist(words)
        if not cleaned:
            logger.warning("Ignoring empty wordlist")
            return state
        fresh = initial_state(cleaned)
        return replace(
            fresh,
            level=0,
            highest_level=0,
            target_wpm=state.target_wpm,
            target_streak=state.target_streak,
            dark_mode=state.dark_mode,
            custom_wordlist=cleaned,
            show_instructions=False,
            last_save=now,
        )
