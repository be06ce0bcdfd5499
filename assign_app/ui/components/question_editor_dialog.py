"""Dialog for creating and editing a single question."""

from __future__ import annotations

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from assign_app.constants.ui_constants import (
    EDITOR_SAVE_EDIT,
    EDITOR_SAVE_NEW,
    EDITOR_SAVING,
    EDITOR_TITLE_EDIT,
    EDITOR_TITLE_NEW,
    PLACEHOLDER_QUESTION,
)
from assign_app.core.answer_html import render_prompt_document
from assign_app.core.question_editor import QuestionEditor, QuestionValidationError
from assign_app.core.services.api_client import ApiError
from assign_app.ui.components.content_forms import ContentForm, build_content_form
from assign_app.ui.dialog_helpers import check_unsaved_changes, show_error, show_warning


class QuestionEditorDialog(QDialog):
    """Type selector, shared fields, a type-specific form and a rendered preview."""

    def __init__(
        self,
        editor: QuestionEditor,
        parent: QWidget | None = None,
        font_size: int = 10,
    ) -> None:
        super().__init__(parent)
        self.editor = editor
        self._font_size = font_size
        self._loading = False
        self.content_form: ContentForm | None = None

        self.setWindowTitle(EDITOR_TITLE_NEW if editor.is_new else EDITOR_TITLE_EDIT)
        self.setModal(True)
        self.resize(880, 720)

        self._build_ui()
        self._load_from_editor()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Type, points and review flag
        header_row = QHBoxLayout()
        header_row.addWidget(QLabel("Type:", self))
        self.type_combo = QComboBox(self)
        for tag in self.editor.catalog.tags():
            self.type_combo.addItem(self.editor.catalog.label_for(tag), userData=tag)
        self.type_combo.currentIndexChanged.connect(self._handle_type_changed)
        header_row.addWidget(self.type_combo, stretch=1)

        header_row.addWidget(QLabel("Points:", self))
        self.points_spinbox = QSpinBox(self)
        self.points_spinbox.setRange(1, 1000)
        self.points_spinbox.valueChanged.connect(self._handle_points_changed)
        header_row.addWidget(self.points_spinbox)

        self.review_checkbox = QCheckBox("Requires teacher review", self)
        self.review_checkbox.toggled.connect(self._handle_review_toggled)
        header_row.addWidget(self.review_checkbox)
        layout.addLayout(header_row)

        # Prompt
        self.prompt_input = QPlainTextEdit(self)
        self.prompt_input.setPlaceholderText(PLACEHOLDER_QUESTION)
        self.prompt_input.setMaximumHeight(120)
        self.prompt_input.textChanged.connect(self._handle_prompt_changed)
        layout.addWidget(self.prompt_input)

        # Type-specific fields
        self.form_container = QVBoxLayout()
        layout.addLayout(self.form_container)

        # Preview
        self.preview_view = QWebEngineView(self)
        self.preview_view.setMinimumHeight(180)
        layout.addWidget(self.preview_view, stretch=1)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.cancel_button = QPushButton("Cancel", self)
        self.cancel_button.clicked.connect(self.reject)
        button_row.addWidget(self.cancel_button)

        self.save_button = QPushButton(self._save_label(), self)
        self.save_button.setDefault(True)
        self.save_button.clicked.connect(self._handle_save)
        button_row.addWidget(self.save_button)
        layout.addLayout(button_row)

    def _save_label(self) -> str:
        return EDITOR_SAVE_NEW if self.editor.is_new else EDITOR_SAVE_EDIT

    def _load_from_editor(self) -> None:
        """Push the editor state into the widgets without marking it changed."""
        self._loading = True
        try:
            index = self.type_combo.findData(self.editor.question_type)
            self.type_combo.setCurrentIndex(max(index, 0))
            self.points_spinbox.setValue(self.editor.points)
            self.review_checkbox.setChecked(self.editor.requires_teacher_review)
            self._show_content()
        finally:
            self._loading = False
        self._refresh_preview()

    def _show_content(self) -> None:
        was_loading = self._loading
        self._loading = True
        try:
            self.prompt_input.setPlainText(self.editor.content.text)
        finally:
            self._loading = was_loading

        if self.content_form is not None:
            self.form_container.removeWidget(self.content_form)
            self.content_form.deleteLater()
        self.content_form = build_content_form(self.editor.content, self)
        self.content_form.changed.connect(self._handle_content_changed)
        self.form_container.addWidget(self.content_form)

    # --- Edits ---

    def _handle_type_changed(self, _index: int) -> None:
        if self._loading:
            return
        tag = self.type_combo.currentData()
        if tag is None or tag == self.editor.question_type:
            return
        self.editor.set_type(tag)
        self._show_content()
        self._refresh_preview()

    def _handle_points_changed(self, value: int) -> None:
        if not self._loading:
            self.editor.set_points(int(value))

    def _handle_review_toggled(self, checked: bool) -> None:
        if not self._loading:
            self.editor.set_requires_teacher_review(checked)

    def _handle_prompt_changed(self) -> None:
        if self._loading:
            return
        self.editor.content.text = self.prompt_input.toPlainText()
        self.editor.mark_changed()
        self._refresh_preview()

    def _handle_content_changed(self) -> None:
        self.editor.mark_changed()

    def _refresh_preview(self) -> None:
        html = render_prompt_document(self.editor.content.text, font_size=self._font_size + 4)
        self.preview_view.setHtml(html)

    # --- Save / close ---

    def _handle_save(self) -> None:
        if self._save():
            self.accept()

    def _save(self) -> bool:
        self.save_button.setEnabled(False)
        self.save_button.setText(EDITOR_SAVING)
        try:
            self.editor.save()
        except QuestionValidationError as exc:
            show_warning(self, "Invalid question", str(exc))
            return False
        except ApiError as exc:
            show_error(self, "Save failed", exc.message)
            return False
        finally:
            self.save_button.setEnabled(True)
            self.save_button.setText(self._save_label())
        return True

    def reject(self) -> None:
        if self.editor.has_unsaved_changes:
            choice = check_unsaved_changes(self)
            if choice is None:
                return
            if choice is True:
                if self._save():
                    self.accept()
                return
        super().reject()
