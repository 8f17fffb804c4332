from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QCloseEvent, QKeyEvent
from PySide6.QtWidgets import (
    QFileDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from wordstreak.core.actions import (
    Action,
    AppendBuffer,
    JumpBackwards,
    JumpEnd,
    JumpForwards,
    JumpStart,
    ResetState,
    SetTargetStreak,
    SetTargetWpm,
    ToggleDarkMode,
    ToggleInstructions,
    ToggleMuted,
)
from wordstreak.core.controller import ProgressionController, Transition
from wordstreak.core.persistence import SessionPersistence
from wordstreak.core.state import STREAK_OPTIONS, WPM_OPTIONS, Phase, SessionState
from wordstreak.core.wordlists import read_wordlist_file
from wordstreak.ui.colors import palette
from wordstreak.ui.sound import SoundPlayer
from wordstreak.ui.typing_widgets import LevelProgressWidget, StreakDots, WordWidget

logger = logging.getLogger(__name__)

INSTRUCTIONS_TEXT = (
    "<h2>How it works</h2>"
    "<p>Type the word shown, then press <b>space</b> to confirm it.</p>"
    "<p>A wrong letter restarts the word. Finish it at or above the target WPM "
    "enough times in a row to reach the next word.</p>"
    "<p><b>&larr; / &rarr;</b> previous / next unlocked word &nbsp; "
    "<b>Home / End</b> first / furthest word &nbsp; <b>Esc</b> show or hide this help</p>"
    "<p>Press <b>Esc</b> to start.</p>"
)

_NAVIGATION_KEYS: Dict[int, Action] = {
    Qt.Key.Key_Left.value: JumpBackwards(),
    Qt.Key.Key_Right.value: JumpForwards(),
    Qt.Key.Key_Home.value: JumpStart(),
    Qt.Key.Key_End.value: JumpEnd(),
    Qt.Key.Key_Escape.value: ToggleInstructions(),
}


class MainWindow(QMainWindow):
    """Single-screen practice window.

    Every keystroke and button press becomes an action passed to the controller;
    the returned state replaces the current one and the view is redrawn from it.
    """

    def __init__(
        self,
        controller: ProgressionController,
        persistence: SessionPersistence,
        sound_player: SoundPlayer,
        state: Optional[SessionState] = None,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._persistence = persistence
        self._sound_player = sound_player
        self._state = state or persistence.load()

        self._wpm_buttons: Dict[int, QPushButton] = {}
        self._streak_buttons: Dict[int, QPushButton] = {}
        self._dark_button: Optional[QPushButton] = None
        self._mute_button: Optional[QPushButton] = None
        self._stack: Optional[QStackedWidget] = None
        self._word_widget: Optional[WordWidget] = None
        self._wpm_label: Optional[QLabel] = None
        self._streak_dots: Optional[StreakDots] = None
        self._level_label: Optional[QLabel] = None
        self._progress_widget: Optional[LevelProgressWidget] = None
        self._instructions_page: Optional[QLabel] = None
        self._practice_page: Optional[QWidget] = None
        self._finished_page: Optional[QWidget] = None

        self.setWindowTitle("Wordstreak")
        self._build_ui()
        self._render()

    @property
    def state(self) -> SessionState:
        return self._state

    def dispatch(self, action: Action) -> None:
        self._apply(self._controller.dispatch(self._state, action))

    def _apply(self, transition: Transition) -> None:
        previous = self._state
        self._state = transition.state
        self._sound_player.play_all(transition.events)
        if self._state.last_save != previous.last_save:
            self._persistence.save(self._state)
        if self._state is not previous:
            self._render()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_ui(self) -> None:
        root = QWidget()
        layout = QVBoxLayout(root)
        layout.setContentsMargins(32, 24, 32, 24)
        layout.setSpacing(16)

        toolbar = QHBoxLayout()
        toolbar.addStretch(1)
        for wpm in WPM_OPTIONS:
            button = self._option_button(f"{wpm}\nWPM", lambda _=False, v=wpm: self.dispatch(SetTargetWpm(v)))
            self._wpm_buttons[wpm] = button
            toolbar.addWidget(button)
        divider = QFrame()
        divider.setFrameShape(QFrame.VLine)
        toolbar.addWidget(divider)
        for streak in STREAK_OPTIONS:
            button = self._option_button(
                f"{streak}\nStreak", lambda _=False, v=streak: self.dispatch(SetTargetStreak(v))
            )
            self._streak_buttons[streak] = button
            toolbar.addWidget(button)
        toolbar.addStretch(1)
        layout.addLayout(toolbar)

        controls = QHBoxLayout()
        controls.addStretch(1)
        self._dark_button = self._plain_button("Dark mode", lambda: self.dispatch(ToggleDarkMode()))
        self._mute_button = self._plain_button("Mute", lambda: self.dispatch(ToggleMuted()))
        controls.addWidget(self._dark_button)
        controls.addWidget(self._mute_button)
        controls.addWidget(self._plain_button("Help", lambda: self.dispatch(ToggleInstructions())))
        controls.addWidget(self._plain_button("Load wordlist…", self._choose_wordlist))
        controls.addWidget(self._plain_button("Reset", lambda: self.dispatch(ResetState())))
        controls.addStretch(1)
        layout.addLayout(controls)

        self._stack = QStackedWidget()
        self._instructions_page = QLabel(INSTRUCTIONS_TEXT)
        self._instructions_page.setAlignment(Qt.AlignCenter)
        self._instructions_page.setWordWrap(True)
        self._stack.addWidget(self._instructions_page)

        self._practice_page = QWidget()
        practice = QVBoxLayout(self._practice_page)
        practice.addStretch(1)
        self._level_label = QLabel()
        self._level_label.setAlignment(Qt.AlignCenter)
        practice.addWidget(self._level_label)
        self._word_widget = WordWidget()
        practice.addWidget(self._word_widget)
        self._wpm_label = QLabel()
        self._wpm_label.setAlignment(Qt.AlignCenter)
        practice.addWidget(self._wpm_label)
        self._streak_dots = StreakDots()
        practice.addWidget(self._streak_dots)
        practice.addStretch(1)
        self._stack.addWidget(self._practice_page)

        self._finished_page = QWidget()
        finished = QVBoxLayout(self._finished_page)
        finished.addStretch(1)
        congrats = QLabel("<h1>Congrats!</h1><p>You finished the whole wordlist.</p>")
        congrats.setAlignment(Qt.AlignCenter)
        finished.addWidget(congrats)
        again = self._plain_button("Play again", lambda: self.dispatch(ResetState()))
        finished.addWidget(again, alignment=Qt.AlignCenter)
        finished.addStretch(1)
        self._stack.addWidget(self._finished_page)

        layout.addWidget(self._stack, 1)
        self._progress_widget = LevelProgressWidget()
        layout.addWidget(self._progress_widget)
        self.setCentralWidget(root)

    def _option_button(self, text: str, on_click) -> QPushButton:
        button = QPushButton(text)
        button.setCheckable(True)
        button.setFixedWidth(72)
        button.setFocusPolicy(Qt.NoFocus)
        button.clicked.connect(on_click)
        return button

    def _plain_button(self, text: str, on_click) -> QPushButton:
        button = QPushButton(text)
        button.setFocusPolicy(Qt.NoFocus)
        button.clicked.connect(on_click)
        return button

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render(self) -> None:
        state = self._state
        colors = palette(state.dark_mode)
        self.setStyleSheet(
            f"""
            QMainWindow, QWidget {{ background: {colors.BG}; color: {colors.TEXT_SECONDARY}; }}
            QPushButton {{
                background: {colors.PANEL}; border: 2px solid {colors.BORDER};
                border-radius: 6px; padding: 6px 10px;
            }}
            QPushButton:checked {{ border-color: {colors.WPM_ACCENT}; color: {colors.WPM_ACCENT}; }}
            """
        )
        for value, button in self._wpm_buttons.items():
            button.setChecked(value == state.target_wpm)
        for value, button in self._streak_buttons.items():
            button.setChecked(value == state.target_streak)
        self._dark_button.setText("Light mode" if state.dark_mode else "Dark mode")
        self._mute_button.setText("Unmute" if state.muted else "Mute")

        wordlist = state.active_wordlist(self._controller.default_wordlist)
        self._progress_widget.set_progress(state, len(wordlist))

        phase = state.phase
        if phase is Phase.INSTRUCTIONS:
            self._stack.setCurrentWidget(self._instructions_page)
            return
        if phase is Phase.FINISHED:
            self._stack.setCurrentWidget(self._finished_page)
            return
        self._stack.setCurrentWidget(self._practice_page)
        level_text = f"Word {state.level + 1} of {len(wordlist)}"
        if state.streak_target_met:
            if state.highest_level is not None and state.highest_level > state.level:
                level_text += " \u00b7 streak reached: press \u2192 to move on or pick a higher streak"
            else:
                level_text += " \u00b7 streak reached: pick a higher streak to keep practising"
        self._level_label.setText(level_text)
        self._word_widget.set_word(state.word, state.dark_mode)
        self._streak_dots.set_streak(state.word.streak, state.target_streak, state.dark_mode)
        self._render_wpm(state)

    def _render_wpm(self, state: SessionState) -> None:
        colors = palette(state.dark_mode)
        word = state.word
        if word.wpm is not None:
            passed = word.match and word.wpm >= state.target_wpm
            color = colors.SUCCESS if passed else colors.ERROR
            text = f"{word.wpm} WPM"
        elif word.start_time is None:
            color, text = colors.TEXT_MUTED, "N/A"
        else:
            color, text = colors.TEXT_MUTED, ">>>"
        self._wpm_label.setText(f'<span style="font-size:28px; color:{color};">{text}</span>')

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def keyPressEvent(self, event: QKeyEvent) -> None:
        action = _NAVIGATION_KEYS.get(int(event.key()))
        if action is not None:
            self.dispatch(action)
            return
        text = event.text()
        if len(text) == 1 and (text == " " or text.isalpha()):
            self.dispatch(AppendBuffer(text.lower()))
            return
        super().keyPressEvent(event)

    def _choose_wordlist(self) -> None:
        path_str, _ = QFileDialog.getOpenFileName(
            self, "Load wordlist", str(Path.home()), "Wordlists (*.yaml *.yml *.txt)"
        )
        if not path_str:
            return
        self.load_wordlist_file(Path(path_str))

    def load_wordlist_file(self, path: Path) -> None:
        try:
            words = read_wordlist_file(path)
        except (OSError, ValueError) as e:
            logger.warning("Could not load wordlist %s: %s", path, e)
            return
        logger.info("Loaded %d words from %s", len(words), path)
        self._apply(self._controller.adopt_wordlist(self._state, words))

    def closeEvent(self, event: QCloseEvent) -> None:
        """Persist the session when closing the app."""
        self._persistence.save(self._state)
        super().closeEvent(event)
