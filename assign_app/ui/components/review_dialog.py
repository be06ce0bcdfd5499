"""Dialog for grading one pending answer."""

from __future__ import annotations

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDoubleSpinBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from assign_app.constants.review_constants import POINTS_DECIMALS, POINTS_STEP
from assign_app.constants.ui_constants import (
    MAX_POINTS_TEMPLATE,
    REVIEW_CORRECT_CHECKBOX,
    REVIEW_DIALOG_TITLE,
    REVIEW_SAVE_BUTTON,
    REVIEW_SAVING,
)
from assign_app.core.admin_console import AdminConsole
from assign_app.core.answer_html import render_answer_document
from assign_app.core.models import AnswerReview
from assign_app.core.services.api_client import ApiError
from assign_app.core.services.review_submission import (
    PointsOutOfRangeError,
    ReviewInFlightError,
    ReviewNotPendingError,
)
from assign_app.styling.styles import Styles
from assign_app.ui.dialog_helpers import show_error, show_warning


class ReviewDialog(QDialog):
    """Shows the student's answer and collects the verdict and points."""

    def __init__(
        self,
        console: AdminConsole,
        review: AnswerReview,
        parent: QWidget | None = None,
        font_size: int = 10,
    ) -> None:
        super().__init__(parent)
        self.console = console
        self.review = review
        self.form = console.open_review(review.id)
        self._font_size = font_size

        self.setWindowTitle(REVIEW_DIALOG_TITLE)
        self.setModal(True)
        self.resize(640, 520)

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        details = QFormLayout()
        details.addRow("Student:", QLabel(self.console.student_name_for(self.review) or "-", self))
        details.addRow("Assignment:", QLabel(self.console.assignment_title_for(self.review) or "-", self))
        question_type = self.review.question_type
        if question_type:
            details.addRow("Question type:", QLabel(self.console.question_type_label(question_type), self))
        layout.addLayout(details)

        self.answer_view = QWebEngineView(self)
        self.answer_view.setHtml(
            render_answer_document(self.review.answer, self.console.base_url, font_size=self._font_size + 4)
        )
        layout.addWidget(self.answer_view, stretch=1)

        self.correct_checkbox = QCheckBox(REVIEW_CORRECT_CHECKBOX, self)
        self.correct_checkbox.setChecked(self.form.is_correct)
        layout.addWidget(self.correct_checkbox)

        points_row = QHBoxLayout()
        points_row.addWidget(QLabel("Points:", self))
        self.points_spinbox = QDoubleSpinBox(self)
        self.points_spinbox.setDecimals(POINTS_DECIMALS)
        self.points_spinbox.setSingleStep(POINTS_STEP)
        self.points_spinbox.setRange(0.0, self.form.input_max_points)
        self.points_spinbox.setValue(self.form.points)
        points_row.addWidget(self.points_spinbox)

        self.max_points_label = QLabel(MAX_POINTS_TEMPLATE.format(max_points=self.form.max_points), self)
        self.max_points_label.setStyleSheet(Styles.get_muted_label_style())
        points_row.addWidget(self.max_points_label)
        points_row.addStretch()
        layout.addLayout(points_row)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.cancel_button = QPushButton("Cancel", self)
        self.cancel_button.clicked.connect(self.reject)
        button_row.addWidget(self.cancel_button)

        self.save_button = QPushButton(REVIEW_SAVE_BUTTON, self)
        self.save_button.setDefault(True)
        self.save_button.clicked.connect(self._handle_save)
        button_row.addWidget(self.save_button)
        layout.addLayout(button_row)

    def _set_submitting(self, submitting: bool) -> None:
        self.save_button.setEnabled(not submitting)
        self.cancel_button.setEnabled(not submitting)
        self.save_button.setText(REVIEW_SAVING if submitting else REVIEW_SAVE_BUTTON)

    def _handle_save(self) -> None:
        self._set_submitting(True)
        try:
            self.review = self.console.submit_review(
                self.review.id,
                self.correct_checkbox.isChecked(),
                self.points_spinbox.value(),
            )
        except PointsOutOfRangeError as exc:
            show_warning(self, "Invalid points", str(exc))
            return
        except (ReviewNotPendingError, ReviewInFlightError) as exc:
            show_warning(self, "Review unavailable", str(exc))
            return
        except ApiError as exc:
            show_error(self, "Review failed", exc.message)
            return
        finally:
            self._set_submitting(False)
        self.accept()
