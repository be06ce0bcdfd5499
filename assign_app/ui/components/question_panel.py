"""Component for browsing and editing the questions of an assignment block."""

from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)
from pydantic import ValidationError

from assign_app.constants.ui_constants import (
    ASSIGNMENT_PLACEHOLDER,
    BLOCK_LABEL_TEMPLATE,
    BLOCK_PLACEHOLDER,
    EMPTY_CELL,
    QUESTIONS_ADD_BUTTON,
    QUESTIONS_DELETE_BUTTON,
    QUESTIONS_EDIT_BUTTON,
    QUESTIONS_EMPTY_STATE,
    QUESTIONS_REFRESH_BUTTON,
)
from assign_app.core.admin_console import AdminConsole
from assign_app.core.models import QuestionRecord
from assign_app.core.question_catalog import UnknownQuestionTypeError
from assign_app.core.question_editor import QuestionEditor
from assign_app.core.services.api_client import ApiError
from assign_app.ui.components.question_editor_dialog import QuestionEditorDialog
from assign_app.ui.dialog_helpers import confirm_delete_question, show_error, show_info

logger = logging.getLogger(__name__)

PROMPT_PREVIEW_LENGTH = 80
COLUMNS = ("#", "Type", "Question", "Points", "Teacher review")


class QuestionPanel(QWidget):
    """UI component for the question list of the selected assignment block."""

    def __init__(self, console: AdminConsole, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.console = console
        self._font_size: int = 10

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Assignment and block selectors
        selector_row = QHBoxLayout()
        self.assignment_combo = QComboBox(self)
        self.assignment_combo.currentIndexChanged.connect(self._handle_assignment_changed)
        selector_row.addWidget(self.assignment_combo, stretch=2)

        self.block_combo = QComboBox(self)
        self.block_combo.currentIndexChanged.connect(self._handle_block_changed)
        selector_row.addWidget(self.block_combo, stretch=1)
        layout.addLayout(selector_row)

        # Action buttons
        action_row = QHBoxLayout()
        self.add_button = QPushButton(QUESTIONS_ADD_BUTTON, self)
        self.add_button.clicked.connect(self._handle_add)
        action_row.addWidget(self.add_button)

        self.edit_button = QPushButton(QUESTIONS_EDIT_BUTTON, self)
        self.edit_button.clicked.connect(self._handle_edit)
        action_row.addWidget(self.edit_button)

        self.delete_button = QPushButton(QUESTIONS_DELETE_BUTTON, self)
        self.delete_button.clicked.connect(self._handle_delete)
        action_row.addWidget(self.delete_button)

        action_row.addStretch()

        self.refresh_button = QPushButton(QUESTIONS_REFRESH_BUTTON, self)
        self.refresh_button.clicked.connect(self.refresh_questions)
        action_row.addWidget(self.refresh_button)
        layout.addLayout(action_row)

        # Question table
        self.table = QTableWidget(0, len(COLUMNS), self)
        self.table.setHorizontalHeaderLabels(list(COLUMNS))
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setAlternatingRowColors(True)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(2, QHeaderView.Stretch)
        self.table.itemSelectionChanged.connect(self._update_buttons)
        self.table.itemDoubleClicked.connect(lambda _item: self._handle_edit())
        layout.addWidget(self.table, stretch=1)

        self.status_label = QLabel("Select an assignment and a block.", self)
        layout.addWidget(self.status_label)

        self._reset_block_combo()
        self._update_buttons()

    # --- Selectors ---

    def load_assignments(self) -> None:
        """Fill the assignment selector from the API."""
        try:
            assignments = self.console.api.list_assignments()
        except ApiError as exc:
            show_error(self, "Could not load assignments", exc.message)
            return

        self.assignment_combo.blockSignals(True)
        self.assignment_combo.clear()
        self.assignment_combo.addItem(ASSIGNMENT_PLACEHOLDER, userData=None)
        for assignment in assignments:
            self.assignment_combo.addItem(assignment.title or f"#{assignment.id}", userData=assignment.id)
        self.assignment_combo.blockSignals(False)
        self._reset_block_combo()
        self._clear_questions("Select an assignment and a block.")

    def _reset_block_combo(self) -> None:
        self.block_combo.blockSignals(True)
        self.block_combo.clear()
        self.block_combo.addItem(BLOCK_PLACEHOLDER, userData=None)
        self.block_combo.blockSignals(False)

    def _handle_assignment_changed(self, _index: int) -> None:
        self._reset_block_combo()
        self._clear_questions("Select a block.")
        assignment_id = self.assignment_combo.currentData()
        if assignment_id is None:
            return
        try:
            blocks = self.console.load_assignment_blocks(assignment_id)
        except ApiError as exc:
            show_error(self, "Could not load blocks", exc.message)
            return

        self.block_combo.blockSignals(True)
        for block in blocks:
            self.block_combo.addItem(BLOCK_LABEL_TEMPLATE.format(order=block.order_index), userData=block.id)
        self.block_combo.blockSignals(False)

    def _handle_block_changed(self, _index: int) -> None:
        block_id = self.block_combo.currentData()
        if block_id is None:
            self._clear_questions("Select a block.")
            return
        self._load_block(block_id)

    # --- Listing ---

    def _load_block(self, block_id: int) -> None:
        try:
            self.console.questions.load_block(block_id)
        except ApiError as exc:
            show_error(self, "Could not load questions", exc.message)
            return
        self._populate_table()

    def refresh_questions(self) -> None:
        if self.console.questions.assignment_block_id is None:
            return
        try:
            self.console.questions.refresh()
        except ApiError as exc:
            show_error(self, "Could not load questions", exc.message)
            return
        self._populate_table()

    def _clear_questions(self, message: str) -> None:
        self.console.questions.clear()
        self.table.setRowCount(0)
        self.status_label.setText(message)
        self._update_buttons()

    def _populate_table(self) -> None:
        questions = self.console.questions.get_questions()
        self.table.setRowCount(len(questions))
        for row, question in enumerate(questions):
            prompt = question.prompt_text.replace("\n", " ")
            if len(prompt) > PROMPT_PREVIEW_LENGTH:
                prompt = prompt[: PROMPT_PREVIEW_LENGTH - 1] + "…"
            values = (
                str(row + 1),
                self.console.question_type_label(question.type),
                prompt or EMPTY_CELL,
                str(question.points),
                "Yes" if question.requires_teacher_review else "No",
            )
            for column, value in enumerate(values):
                item = QTableWidgetItem(value)
                if column == 0:
                    item.setData(Qt.UserRole, question.id)
                self.table.setItem(row, column, item)

        count = len(questions)
        self.status_label.setText(QUESTIONS_EMPTY_STATE if count == 0 else f"{count} question(s) in this block.")
        self._update_buttons()

    def _selected_question(self) -> QuestionRecord | None:
        row = self.table.currentRow()
        if row < 0 or not self.table.selectionModel().hasSelection():
            return None
        item = self.table.item(row, 0)
        if item is None:
            return None
        try:
            return self.console.questions.get_question(item.data(Qt.UserRole))
        except LookupError:
            return None

    def _update_buttons(self) -> None:
        has_block = self.console.questions.assignment_block_id is not None
        has_selection = self._selected_question() is not None
        self.add_button.setEnabled(has_block)
        self.refresh_button.setEnabled(has_block)
        self.edit_button.setEnabled(has_selection)
        self.delete_button.setEnabled(has_selection)

    # --- Actions ---

    def _handle_add(self) -> None:
        block_id = self.console.questions.assignment_block_id
        if block_id is None:
            show_info(self, "No block", "Select a block before adding questions.")
            return
        editor = self.console.new_editor()
        editor.start_new(block_id)
        self._open_editor(editor)

    def _handle_edit(self) -> None:
        question = self._selected_question()
        if question is None:
            return
        try:
            editor = self.console.edit_question(question)
        except UnknownQuestionTypeError as exc:
            show_error(self, "Unsupported question", str(exc))
            return
        except ValidationError as exc:
            logger.warning("Question %s has malformed content: %s", question.id, exc)
            show_error(self, "Unsupported question", "The stored content of this question cannot be edited.")
            return
        self._open_editor(editor)

    def _open_editor(self, editor: QuestionEditor) -> None:
        dialog = QuestionEditorDialog(editor, self, font_size=self._font_size)
        if dialog.exec():
            self.refresh_questions()

    def _handle_delete(self) -> None:
        question = self._selected_question()
        if question is None:
            return
        label = f"{self.console.question_type_label(question.type)}: {question.prompt_text or EMPTY_CELL}"
        if not confirm_delete_question(self, label):
            return
        try:
            self.console.questions.delete_question(question.id)
        except ApiError as exc:
            show_error(self, "Delete failed", exc.message)
            return
        self._populate_table()

    def apply_font_size(self, font_size: int) -> None:
        self._font_size = font_size
        style = f"font-size: {font_size}pt;"
        for button in (self.add_button, self.edit_button, self.delete_button, self.refresh_button):
            button.setStyleSheet(style)
