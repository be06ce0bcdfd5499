"""Per-type widgets that edit a question's content model in place.

Each form is bound to one content instance and writes every edit straight into
it, emitting ``changed`` afterwards. Switching the question type therefore
means building a new form for the new content.
"""

from __future__ import annotations

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from assign_app.constants.question_constants import MIN_MATCH_PAIRS
from assign_app.core.question_content import (
    BreakWordContent,
    ChoiceContent,
    ComposeWordContent,
    ContentModel,
    DrawCircleSingleContent,
    FillSentenceContent,
    FreeTextContent,
    ListenRepeatContent,
    MatchImageTextContent,
    McqSingleContent,
    OrderWordsContent,
    ReadQuestionContent,
    SelectImageTextContent,
    WriteWordsContent,
)
from assign_app.styling.styles import Styles

SINGLE_ANSWER_TYPES = (McqSingleContent, DrawCircleSingleContent, FillSentenceContent)


def _split_lines(text: str) -> list[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


class ContentForm(QWidget):
    """Base class for the type-specific part of the question editor."""

    changed = Signal()

    def __init__(self, content: ContentModel, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.content = content
        self._layout = QVBoxLayout()
        self._layout.setContentsMargins(0, 0, 0, 0)
        self.setLayout(self._layout)

    def _emit_changed(self, *_args: object) -> None:
        self.changed.emit()


class EmptyForm(ContentForm):
    """Types whose content is just the prompt."""

    def __init__(self, content: ContentModel, parent: QWidget | None = None) -> None:
        super().__init__(content, parent)
        note = QLabel("This question type has no extra fields.", self)
        note.setWordWrap(True)
        self._layout.addWidget(note)


class FieldsForm(ContentForm):
    """Plain text fields mapped one-to-one onto content attributes."""

    def __init__(
        self,
        content: ContentModel,
        fields: list[tuple[str, str]],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(content, parent)
        form_layout = QFormLayout()
        self.inputs: dict[str, QLineEdit] = {}
        for attribute, label in fields:
            line_edit = QLineEdit(str(getattr(content, attribute)), self)
            line_edit.textChanged.connect(
                lambda text, name=attribute: self._handle_text(name, text)
            )
            form_layout.addRow(label, line_edit)
            self.inputs[attribute] = line_edit
        self._layout.addLayout(form_layout)

    def _handle_text(self, attribute: str, text: str) -> None:
        setattr(self.content, attribute, text)
        self.changed.emit()


class WordListForm(ContentForm):
    """One entry per line for list-of-string attributes (words, letters)."""

    def __init__(
        self,
        content: ContentModel,
        fields: list[tuple[str, str]],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(content, parent)
        self.inputs: dict[str, QPlainTextEdit] = {}
        for attribute, label in fields:
            self._layout.addWidget(QLabel(label, self))
            editor = QPlainTextEdit(self)
            editor.setPlaceholderText("One entry per line")
            editor.setPlainText("\n".join(getattr(content, attribute)))
            editor.setMaximumHeight(110)
            editor.textChanged.connect(lambda name=attribute: self._handle_lines(name))
            self._layout.addWidget(editor)
            self.inputs[attribute] = editor

    def _handle_lines(self, attribute: str) -> None:
        setattr(self.content, attribute, _split_lines(self.inputs[attribute].toPlainText()))
        self.changed.emit()


class ChoiceOptionsForm(ContentForm):
    """Options with a correct flag; single-answer types allow one correct option."""

    def __init__(self, content: ChoiceContent, parent: QWidget | None = None) -> None:
        super().__init__(content, parent)
        self.single_answer = isinstance(content, SINGLE_ANSWER_TYPES)

        self.rows_group = QGroupBox("Options", self)
        self.rows_layout = QVBoxLayout()
        self.rows_group.setLayout(self.rows_layout)
        self._layout.addWidget(self.rows_group)

        self.add_button = QPushButton("Add option", self)
        self.add_button.clicked.connect(self._handle_add)
        self._layout.addWidget(self.add_button)

        self.correct_checkboxes: list[QCheckBox] = []
        self._rebuild_rows()

    def _rebuild_rows(self) -> None:
        while self.rows_layout.count():
            item = self.rows_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self.correct_checkboxes = []

        for index, option in enumerate(self.content.options):
            row = QWidget(self.rows_group)
            row_layout = QHBoxLayout()
            row_layout.setContentsMargins(0, 0, 0, 0)
            row.setLayout(row_layout)

            text_input = QLineEdit(option.text, row)
            text_input.setPlaceholderText(f"Option {index + 1}")
            text_input.textChanged.connect(lambda text, i=index: self._handle_text(i, text))
            row_layout.addWidget(text_input, stretch=1)

            correct_checkbox = QCheckBox("Correct", row)
            correct_checkbox.setChecked(option.is_correct)
            correct_checkbox.toggled.connect(lambda checked, i=index: self._handle_correct(i, checked))
            row_layout.addWidget(correct_checkbox)
            self.correct_checkboxes.append(correct_checkbox)

            remove_button = QPushButton("Remove", row)
            remove_button.clicked.connect(lambda _=False, i=index: self._handle_remove(i))
            row_layout.addWidget(remove_button)

            self.rows_layout.addWidget(row)

    def _handle_text(self, index: int, text: str) -> None:
        self.content.options[index].text = text
        self.changed.emit()

    def _handle_correct(self, index: int, checked: bool) -> None:
        self.content.options[index].is_correct = checked
        if checked and self.single_answer:
            for other, option in enumerate(self.content.options):
                if other != index and option.is_correct:
                    option.is_correct = False
                    self.correct_checkboxes[other].blockSignals(True)
                    self.correct_checkboxes[other].setChecked(False)
                    self.correct_checkboxes[other].blockSignals(False)
        self.changed.emit()

    def _handle_add(self) -> None:
        self.content.add_option()
        self._rebuild_rows()
        self.changed.emit()

    def _handle_remove(self, index: int) -> None:
        if self.content.remove_option(index):
            self._rebuild_rows()
            self.changed.emit()


class MatchPairsForm(ContentForm):
    """Image/text pairs; a pair can only be removed above the minimum count."""

    def __init__(self, content: MatchImageTextContent, parent: QWidget | None = None) -> None:
        super().__init__(content, parent)
        self.rows_group = QGroupBox("Pairs", self)
        self.rows_layout = QVBoxLayout()
        self.rows_group.setLayout(self.rows_layout)
        self._layout.addWidget(self.rows_group)

        self.add_button = QPushButton("Add pair", self)
        self.add_button.clicked.connect(self._handle_add)
        self._layout.addWidget(self.add_button)

        self.incomplete_label = QLabel("", self)
        self.incomplete_label.setStyleSheet(Styles.get_error_label_style())
        self._layout.addWidget(self.incomplete_label)

        self.remove_buttons: list[QPushButton] = []
        self._rebuild_rows()

    def _rebuild_rows(self) -> None:
        while self.rows_layout.count():
            item = self.rows_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self.remove_buttons = []
        can_remove = len(self.content.pairs) > MIN_MATCH_PAIRS

        for index, pair in enumerate(self.content.pairs):
            row = QWidget(self.rows_group)
            row_layout = QHBoxLayout()
            row_layout.setContentsMargins(0, 0, 0, 0)
            row.setLayout(row_layout)

            image_input = QLineEdit(pair.image, row)
            image_input.setPlaceholderText("Image URL")
            image_input.textChanged.connect(lambda text, i=index: self._handle_field(i, "image", text))
            row_layout.addWidget(image_input, stretch=1)

            text_input = QLineEdit(pair.text, row)
            text_input.setPlaceholderText("Matching text")
            text_input.textChanged.connect(lambda text, i=index: self._handle_field(i, "text", text))
            row_layout.addWidget(text_input, stretch=1)

            remove_button = QPushButton("Remove", row)
            remove_button.setEnabled(can_remove)
            remove_button.clicked.connect(lambda _=False, i=index: self._handle_remove(i))
            row_layout.addWidget(remove_button)
            self.remove_buttons.append(remove_button)

            self.rows_layout.addWidget(row)
        self._update_incomplete_hint()

    def _update_incomplete_hint(self) -> None:
        incomplete = self.content.incomplete_pairs()
        self.incomplete_label.setText(
            "Incomplete pairs: " + ", ".join(str(index + 1) for index in incomplete) if incomplete else ""
        )

    def _handle_field(self, index: int, attribute: str, text: str) -> None:
        setattr(self.content.pairs[index], attribute, text)
        self._update_incomplete_hint()
        self.changed.emit()

    def _handle_add(self) -> None:
        self.content.add_pair()
        self._rebuild_rows()
        self.changed.emit()

    def _handle_remove(self, index: int) -> None:
        if self.content.remove_pair(index):
            self._rebuild_rows()
            self.changed.emit()


class SelectImageTextForm(ContentForm):
    """Pictures with their correct word, plus the shared list of candidate words."""

    def __init__(self, content: SelectImageTextContent, parent: QWidget | None = None) -> None:
        super().__init__(content, parent)
        self.rows_group = QGroupBox("Pictures", self)
        self.rows_layout = QVBoxLayout()
        self.rows_group.setLayout(self.rows_layout)
        self._layout.addWidget(self.rows_group)

        self.add_button = QPushButton("Add picture", self)
        self.add_button.clicked.connect(self._handle_add)
        self._layout.addWidget(self.add_button)

        self._layout.addWidget(QLabel("Candidate words:", self))
        self.options_input = QPlainTextEdit(self)
        self.options_input.setPlaceholderText("One entry per line")
        self.options_input.setPlainText("\n".join(content.options))
        self.options_input.setMaximumHeight(110)
        self.options_input.textChanged.connect(self._handle_options)
        self._layout.addWidget(self.options_input)

        self._rebuild_rows()

    def _rebuild_rows(self) -> None:
        while self.rows_layout.count():
            item = self.rows_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

        for index, entry in enumerate(self.content.items):
            row = QWidget(self.rows_group)
            row_layout = QHBoxLayout()
            row_layout.setContentsMargins(0, 0, 0, 0)
            row.setLayout(row_layout)

            image_input = QLineEdit(entry.image, row)
            image_input.setPlaceholderText("Image URL")
            image_input.textChanged.connect(lambda text, i=index: self._handle_field(i, "image", text))
            row_layout.addWidget(image_input, stretch=1)

            answer_input = QLineEdit(entry.correct_text, row)
            answer_input.setPlaceholderText("Correct word")
            answer_input.textChanged.connect(
                lambda text, i=index: self._handle_field(i, "correct_text", text)
            )
            row_layout.addWidget(answer_input, stretch=1)

            remove_button = QPushButton("Remove", row)
            remove_button.clicked.connect(lambda _=False, i=index: self._handle_remove(i))
            row_layout.addWidget(remove_button)

            self.rows_layout.addWidget(row)

    def _handle_field(self, index: int, attribute: str, text: str) -> None:
        setattr(self.content.items[index], attribute, text)
        self.changed.emit()

    def _handle_options(self) -> None:
        self.content.options = _split_lines(self.options_input.toPlainText())
        self.changed.emit()

    def _handle_add(self) -> None:
        self.content.add_item()
        self._rebuild_rows()
        self.changed.emit()

    def _handle_remove(self, index: int) -> None:
        if 0 <= index < len(self.content.items):
            self.content.items.pop(index)
            self._rebuild_rows()
            self.changed.emit()


def build_content_form(content: ContentModel, parent: QWidget | None = None) -> ContentForm:
    """Return the form widget that edits ``content``."""
    if isinstance(content, ChoiceContent):
        return ChoiceOptionsForm(content, parent)
    if isinstance(content, MatchImageTextContent):
        return MatchPairsForm(content, parent)
    if isinstance(content, SelectImageTextContent):
        return SelectImageTextForm(content, parent)
    if isinstance(content, OrderWordsContent):
        return WordListForm(
            content, [("words", "Words (as shown):"), ("correct_order", "Correct order:")], parent
        )
    if isinstance(content, WriteWordsContent):
        return WordListForm(content, [("words", "Words:")], parent)
    if isinstance(content, ComposeWordContent):
        return WordListForm(content, [("letters", "Letters:")], parent)
    if isinstance(content, ListenRepeatContent):
        return FieldsForm(content, [("audio_url", "Audio URL:")], parent)
    if isinstance(content, ReadQuestionContent):
        return FieldsForm(content, [("image_url", "Image URL:")], parent)
    if isinstance(content, BreakWordContent):
        return FieldsForm(content, [("word", "Word:")], parent)
    if isinstance(content, FreeTextContent):
        return FieldsForm(content, [("placeholder", "Answer placeholder:")], parent)
    return EmptyForm(content, parent)
