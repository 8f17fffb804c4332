"""Application entry point and setup for the Wordstreak typing trainer."""

import logging
import os
import sys
from pathlib import Path

from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from wordstreak.core.controller import ProgressionController
from wordstreak.core.persistence import SessionPersistence
from wordstreak.core.wordlists import WordlistRepository
from wordstreak.ui.main_window import MainWindow
from wordstreak.ui.sound import SoundPlayer

WORDLIST_ENV_VAR = "WORDSTREAK_WORDLIST"


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load the wordlist and saved session, then start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Wordstreak")
    app.setApplicationDisplayName("Wordstreak")

    wordlist = WordlistRepository().default()
    logging.info("Using wordlist %r (%d words)", wordlist.title, len(wordlist.words))
    controller = ProgressionController(wordlist.words)
    persistence = SessionPersistence(wordlist.words)
    sound_player = SoundPlayer()

    window = MainWindow(controller=controller, persistence=persistence, sound_player=sound_player)
    custom_path = os.environ.get(WORDLIST_ENV_VAR)
    if custom_path:
        window.load_wordlist_file(Path(custom_path).expanduser())

    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(int(geometry.width() * 0.8), int(geometry.height() * 0.8))
    window.show()

    sys.exit(app.exec())
