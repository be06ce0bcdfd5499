"""Qt main window switching between question authoring and answer review."""

from __future__ import annotations

import logging
from enum import Enum, auto

from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from assign_app.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from assign_app.constants.ui_constants import MODE_BUTTON_QUESTIONS, MODE_BUTTON_REVIEWS, WINDOW_TITLE
from assign_app.core.admin_console import AdminConsole
from assign_app.core.services.api_client import AdminApiClient
from assign_app.styling.styles import Styles
from assign_app.ui.components.question_panel import QuestionPanel
from assign_app.ui.components.review_panel import ReviewPanel
from assign_app.ui.dialog_helpers import show_info
from assign_app.ui.settings_dialog import SettingsDialog
from assign_app.utils.config import ConsoleConfig

logger = logging.getLogger(__name__)


class ConsoleMode(Enum):
    """Screen shown in the main window."""

    QUESTIONS = auto()
    REVIEWS = auto()


class AdminMainWindow(QMainWindow):
    """Main Qt window hosting the question and review screens."""

    def __init__(self, console: AdminConsole, config: ConsoleConfig) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(1200, 780)

        self.console = console
        self.config = config
        self._mode = ConsoleMode.QUESTIONS
        self._reviews_loaded = False
        self._ui_font_size: int = config.ui_font_size

        self._build_ui()
        self._apply_styles()
        self.question_panel.load_assignments()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_mode_buttons(root_layout)

        self.mode_stack = QStackedWidget(self)
        self.question_panel = QuestionPanel(self.console, self)
        self.review_panel = ReviewPanel(self.console, self)
        self.mode_stack.addWidget(self.question_panel)
        self.mode_stack.addWidget(self.review_panel)
        root_layout.addWidget(self.mode_stack)

        self._set_mode(ConsoleMode.QUESTIONS)

    def _build_mode_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.questions_mode_button = QPushButton(MODE_BUTTON_QUESTIONS, self)
        self.questions_mode_button.setCheckable(True)
        self.questions_mode_button.clicked.connect(lambda: self._set_mode(ConsoleMode.QUESTIONS))
        button_row.addWidget(self.questions_mode_button)

        self.reviews_mode_button = QPushButton(MODE_BUTTON_REVIEWS, self)
        self.reviews_mode_button.setCheckable(True)
        self.reviews_mode_button.clicked.connect(lambda: self._set_mode(ConsoleMode.REVIEWS))
        button_row.addWidget(self.reviews_mode_button)

        button_row.addStretch()

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        self.settings_button = QPushButton("Settings", self)
        self.settings_button.clicked.connect(self._handle_settings)
        button_row.addWidget(self.settings_button)

        layout.addLayout(button_row)

    def _set_mode(self, mode: ConsoleMode) -> None:
        self._mode = mode
        self.questions_mode_button.setChecked(mode == ConsoleMode.QUESTIONS)
        self.reviews_mode_button.setChecked(mode == ConsoleMode.REVIEWS)

        index_map = {
            ConsoleMode.QUESTIONS: 0,
            ConsoleMode.REVIEWS: 1,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

        # The review queue is fetched the first time its screen is shown.
        if mode == ConsoleMode.REVIEWS and not self._reviews_loaded:
            self._reviews_loaded = True
            self.review_panel.reload()

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}\n\n"
            f"API: {self.console.base_url}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def _handle_settings(self) -> None:
        dialog = SettingsDialog(
            self,
            api_base_url=self.config.api_base_url,
            api_token=self.config.api_token,
            timeout_seconds=self.config.request_timeout_seconds,
            ui_font_size=self._ui_font_size,
        )
        if not dialog.exec():
            return

        connection_changed = (
            dialog.get_api_base_url() != self.config.api_base_url
            or dialog.get_api_token() != self.config.api_token
            or dialog.get_timeout_seconds() != self.config.request_timeout_seconds
        )
        self._ui_font_size = dialog.get_ui_font_size()
        self.config = self.config.model_copy(
            update={
                "api_base_url": dialog.get_api_base_url(),
                "api_token": dialog.get_api_token(),
                "request_timeout_seconds": dialog.get_timeout_seconds(),
                "ui_font_size": self._ui_font_size,
            }
        )
        self._apply_styles()

        if connection_changed:
            self.console.set_api_client(
                AdminApiClient(
                    base_url=self.config.api_base_url,
                    token=self.config.api_token,
                    timeout=self.config.request_timeout_seconds,
                )
            )
            self.question_panel.load_assignments()
            self._reviews_loaded = self._mode == ConsoleMode.REVIEWS
            if self._reviews_loaded:
                self.review_panel.reload()

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style())

        ui_style = f"font-size: {self._ui_font_size}pt;"
        buttons = [
            self.questions_mode_button,
            self.reviews_mode_button,
            self.about_button,
            self.help_button,
            self.settings_button,
        ]
        for button in buttons:
            button.setStyleSheet(ui_style)

        self.question_panel.apply_font_size(self._ui_font_size)
        self.review_panel.apply_font_size(self._ui_font_size)

    def closeEvent(self, event) -> None:  # noqa: N802
        logger.info("Closing %s", APP_NAME)
        self.console.close()
        super().closeEvent(event)
