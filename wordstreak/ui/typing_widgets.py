"""Practice screen widgets: the word being typed, streak dots and level progress."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QFont, QPainter
from PySide6.QtWidgets import QWidget

from wordstreak.core.state import SessionState
from wordstreak.core.words import Word
from wordstreak.ui.colors import blend_hex, character_color, palette


class WordWidget(QWidget):
    """Large centred word; each character colored by whether it was typed right."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._word: Optional[Word] = None
        self._dark_mode = True
        self.setMinimumHeight(160)

    def set_word(self, word: Word, dark_mode: bool) -> None:
        self._word = word
        self._dark_mode = dark_mode
        self.update()

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        if self._word is None:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        font = QFont(painter.font())
        font.setPointSize(64)
        font.setBold(True)
        font.setLetterSpacing(QFont.AbsoluteSpacing, 6)
        painter.setFont(font)

        metrics = painter.fontMetrics()
        # trailing space is not drawn; it is confirmed, not displayed
        visible = self._word.characters[:-1]
        total = sum(metrics.horizontalAdvance(c.character) for c in visible)
        x = max(0, (self.width() - total) // 2)
        baseline = (self.height() + metrics.ascent() - metrics.descent()) // 2
        for c in visible:
            painter.setPen(QColor(character_color(c.correct, self._dark_mode)))
            painter.drawText(x, baseline, c.character)
            x += metrics.horizontalAdvance(c.character)


class StreakDots(QWidget):
    """One dot per repetition needed; filled dots brighten as the streak grows."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._streak = 0
        self._target = 1
        self._dark_mode = True
        self.setFixedHeight(24)

    def set_streak(self, streak: int, target: int, dark_mode: bool) -> None:
        self._streak = streak
        self._target = max(1, target)
        self._dark_mode = dark_mode
        self.update()

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        colors = palette(self._dark_mode)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(Qt.NoPen)
        size, spacing = 12, 10
        total_width = self._target * (size + spacing) - spacing
        x = max(0, (self.width() - total_width) // 2)
        y = (self.height() - size) // 2
        filled = blend_hex(colors.SUCCESS, colors.WPM_ACCENT, self._streak / self._target)
        for i in range(self._target):
            painter.setBrush(QColor(filled if i < self._streak else colors.BORDER))
            painter.drawRoundedRect(x, y, size, size, 3, 3)
            x += size + spacing


class LevelProgressWidget(QWidget):
    """Row of small dots: passed levels, reachable levels and the rest of the list."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._level = 0
        self._highest = 0
        self._total = 0
        self._dark_mode = True
        self.setMinimumHeight(40)

    def set_progress(self, state: SessionState, total: int) -> None:
        self._level = state.level
        self._highest = state.highest_level or 0
        self._total = total
        self._dark_mode = state.dark_mode
        self.update()

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        if self._total <= 0:
            return
        colors = palette(self._dark_mode)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(Qt.NoPen)
        size, spacing = 6, 3
        per_row = max(1, (self.width() + spacing) // (size + spacing))
        for i in range(self._total):
            if i < self._level:
                color = colors.SUCCESS
            elif i <= self._highest:
                color = blend_hex(colors.SUCCESS, colors.BORDER, 0.6)
            else:
                color = colors.BORDER
            painter.setBrush(QColor(color))
            row, col = divmod(i, per_row)
            painter.drawEllipse(col * (size + spacing), row * (size + spacing), size, size)
