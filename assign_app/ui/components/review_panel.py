"""Component for the paginated answer review queue."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QSpinBox,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from assign_app.constants.review_constants import PAGE_SIZE_CHOICES, REVIEW_STATUS_FILTERS
from assign_app.constants.ui_constants import (
    ALL_ASSIGNMENTS_LABEL,
    ALL_STUDENTS_LABEL,
    EMPTY_CELL,
    RANGE_TEMPLATE,
    REVIEW_STATUS_LABELS,
    REVIEWS_DONE_LABEL,
    REVIEWS_EMPTY_STATE,
    REVIEWS_REVIEW_BUTTON,
)
from assign_app.core.admin_console import AdminConsole
from assign_app.core.models import AnswerReview
from assign_app.core.services.api_client import ApiError
from assign_app.core.services.review_submission import resolve_max_points
from assign_app.styling.styles import Styles
from assign_app.ui.components.review_dialog import ReviewDialog
from assign_app.ui.dialog_helpers import show_error

COLUMNS = ("Student", "Assignment", "Question type", "Answer", "Status", "Points", "")
ACTION_COLUMN = len(COLUMNS) - 1


class ReviewPanel(QWidget):
    """Filters, answer table and pager for the review screen."""

    def __init__(self, console: AdminConsole, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.console = console
        self._font_size: int = 10
        self._page_buttons: list[QPushButton] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Filters
        filter_row = QHBoxLayout()
        self.status_combo = QComboBox(self)
        for status in REVIEW_STATUS_FILTERS:
            self.status_combo.addItem(REVIEW_STATUS_LABELS[status], userData=status)
        self.status_combo.setCurrentIndex(
            self.status_combo.findData(self.console.reviews.filters.review_status)
        )
        self.status_combo.currentIndexChanged.connect(self._handle_status_changed)
        filter_row.addWidget(self.status_combo)

        self.student_combo = QComboBox(self)
        self.student_combo.addItem(ALL_STUDENTS_LABEL, userData=None)
        self.student_combo.currentIndexChanged.connect(self._handle_student_changed)
        filter_row.addWidget(self.student_combo, stretch=1)

        self.assignment_combo = QComboBox(self)
        self.assignment_combo.addItem(ALL_ASSIGNMENTS_LABEL, userData=None)
        self.assignment_combo.currentIndexChanged.connect(self._handle_assignment_changed)
        filter_row.addWidget(self.assignment_combo, stretch=1)

        self.refresh_button = QPushButton("Refresh", self)
        self.refresh_button.clicked.connect(self.refresh_reviews)
        filter_row.addWidget(self.refresh_button)
        layout.addLayout(filter_row)

        # Table
        self.table = QTableWidget(0, len(COLUMNS), self)
        self.table.setHorizontalHeaderLabels(list(COLUMNS))
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setAlternatingRowColors(True)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(3, QHeaderView.Stretch)
        layout.addWidget(self.table, stretch=1)

        self.empty_label = QLabel(REVIEWS_EMPTY_STATE, self)
        self.empty_label.setStyleSheet(Styles.get_muted_label_style())
        self.empty_label.setVisible(False)
        layout.addWidget(self.empty_label)

        # Pager
        pager_row = QHBoxLayout()
        self.range_label = QLabel("", self)
        pager_row.addWidget(self.range_label)
        pager_row.addStretch()

        self.prev_button = QPushButton("Previous", self)
        self.prev_button.clicked.connect(self._handle_previous)
        pager_row.addWidget(self.prev_button)

        self.page_buttons_row = QHBoxLayout()
        pager_row.addLayout(self.page_buttons_row)

        self.next_button = QPushButton("Next", self)
        self.next_button.clicked.connect(self._handle_next)
        pager_row.addWidget(self.next_button)

        pager_row.addWidget(QLabel("Page:", self))
        self.page_spinbox = QSpinBox(self)
        self.page_spinbox.setRange(1, 1)
        self.page_spinbox.setKeyboardTracking(False)
        self.page_spinbox.valueChanged.connect(self._handle_page_entered)
        pager_row.addWidget(self.page_spinbox)

        pager_row.addWidget(QLabel("Per page:", self))
        self.limit_combo = QComboBox(self)
        for size in PAGE_SIZE_CHOICES:
            self.limit_combo.addItem(str(size), userData=size)
        self.limit_combo.setCurrentIndex(self.limit_combo.findData(self.console.reviews.limit))
        self.limit_combo.currentIndexChanged.connect(self._handle_limit_changed)
        pager_row.addWidget(self.limit_combo)
        layout.addLayout(pager_row)

    # --- Filter options ---

    def reload(self) -> None:
        """Sync the selectors with the queue, then fetch filters and the current page."""
        for combo, value in (
            (self.status_combo, self.console.reviews.filters.review_status),
            (self.limit_combo, self.console.reviews.limit),
        ):
            combo.blockSignals(True)
            self._select_data(combo, value)
            combo.blockSignals(False)
        self.load_filter_options()
        self.refresh_reviews()

    def load_filter_options(self) -> None:
        """Fill the student and assignment selectors from the API."""
        try:
            self.console.load_filter_options()
        except ApiError as exc:
            show_error(self, "Could not load filters", exc.message)
            return

        self.student_combo.blockSignals(True)
        self.student_combo.clear()
        self.student_combo.addItem(ALL_STUDENTS_LABEL, userData=None)
        for student in self.console.get_students():
            label = student.display_name
            if student.contact_email:
                label = f"{label} ({student.contact_email})"
            self.student_combo.addItem(label, userData=student.id)
        self._select_data(self.student_combo, self.console.reviews.filters.student_id)
        self.student_combo.blockSignals(False)

        self.assignment_combo.blockSignals(True)
        self.assignment_combo.clear()
        self.assignment_combo.addItem(ALL_ASSIGNMENTS_LABEL, userData=None)
        for assignment in self.console.get_assignments():
            self.assignment_combo.addItem(assignment.title or f"#{assignment.id}", userData=assignment.id)
        self._select_data(self.assignment_combo, self.console.reviews.filters.assignment_id)
        self.assignment_combo.blockSignals(False)

    @staticmethod
    def _select_data(combo: QComboBox, value: object) -> None:
        index = combo.findData(value)
        combo.setCurrentIndex(index if index >= 0 else 0)

    def _handle_status_changed(self, _index: int) -> None:
        if self.console.reviews.set_review_status(self.status_combo.currentData()):
            self.refresh_reviews()

    def _handle_student_changed(self, _index: int) -> None:
        if self.console.reviews.set_student_id(self.student_combo.currentData()):
            self.refresh_reviews()

    def _handle_assignment_changed(self, _index: int) -> None:
        if self.console.reviews.set_assignment_id(self.assignment_combo.currentData()):
            self.refresh_reviews()

    def _handle_limit_changed(self, _index: int) -> None:
        if self.console.reviews.set_limit(self.limit_combo.currentData()):
            self.refresh_reviews()

    # --- Paging ---

    def _handle_previous(self) -> None:
        if self.console.reviews.has_previous_page():
            self.console.reviews.previous_page()
            self.refresh_reviews()

    def _handle_next(self) -> None:
        if self.console.reviews.has_next_page():
            self.console.reviews.next_page()
            self.refresh_reviews()

    def _go_to_page(self, page: int) -> None:
        if page != self.console.reviews.page:
            self.console.reviews.set_page(page)
            self.refresh_reviews()

    def _handle_page_entered(self, value: int) -> None:
        self._go_to_page(value)

    # --- Listing ---

    def refresh_reviews(self) -> None:
        """Load the current page with the current filters."""
        self.refresh_button.setEnabled(False)
        try:
            self.console.reviews.refresh()
        except ApiError as exc:
            show_error(self, "Could not load reviews", exc.message)
        finally:
            self.refresh_button.setEnabled(True)
        self._populate_table()
        self._update_pager()

    def _populate_table(self) -> None:
        reviews = self.console.reviews.items
        self.table.setRowCount(len(reviews))
        for row, review in enumerate(reviews):
            self._fill_row(row, review)
        self.empty_label.setVisible(not reviews)

    def _fill_row(self, row: int, review: AnswerReview) -> None:
        answer = self.console.reviews.render_answer(review, self.console.base_url)
        status_text = REVIEW_STATUS_LABELS.get(review.review_status.value, review.review_status.value)
        max_points = resolve_max_points(review)
        points = EMPTY_CELL if review.points is None else f"{review.points:g}"
        points = f"{points} / {max_points:g}"
        values = (
            self.console.student_name_for(review) or EMPTY_CELL,
            self.console.assignment_title_for(review) or EMPTY_CELL,
            self.console.question_type_label(review.question_type) if review.question_type else EMPTY_CELL,
            answer.text,
            status_text,
            points,
        )
        for column, value in enumerate(values):
            self.table.setItem(row, column, QTableWidgetItem(value))

        if self.console.reviews.is_actionable(review):
            button = QPushButton(REVIEWS_REVIEW_BUTTON, self.table)
            button.clicked.connect(lambda _=False, review_id=review.id: self._open_review(review_id))
            self.table.setCellWidget(row, ACTION_COLUMN, button)
        else:
            done_label = QLabel(REVIEWS_DONE_LABEL, self.table)
            done_label.setStyleSheet(Styles.get_status_badge_style(is_pending=False))
            self.table.setCellWidget(row, ACTION_COLUMN, done_label)

    def _update_pager(self) -> None:
        queue = self.console.reviews
        first, last = queue.display_range()
        self.range_label.setText(
            RANGE_TEMPLATE.format(first=first, last=last, total=queue.total) if queue.total else ""
        )
        self.prev_button.setEnabled(queue.has_previous_page())
        self.next_button.setEnabled(queue.has_next_page())

        self.page_spinbox.blockSignals(True)
        self.page_spinbox.setRange(1, max(queue.total_pages, 1))
        self.page_spinbox.setValue(queue.page)
        self.page_spinbox.blockSignals(False)

        for button in self._page_buttons:
            self.page_buttons_row.removeWidget(button)
            button.deleteLater()
        self._page_buttons = []
        for page in queue.visible_pages():
            button = QPushButton(str(page), self)
            button.setCheckable(True)
            button.setChecked(page == queue.page)
            button.setStyleSheet(f"font-size: {self._font_size}pt;")
            button.clicked.connect(lambda _=False, target=page: self._go_to_page(target))
            self.page_buttons_row.addWidget(button)
            self._page_buttons.append(button)

    # --- Review ---

    def _open_review(self, review_id: int) -> None:
        try:
            review = self.console.reviews.get_item(review_id)
        except LookupError:
            return
        dialog = ReviewDialog(self.console, review, self, font_size=self._font_size)
        if dialog.exec():
            self._populate_table()

    def apply_font_size(self, font_size: int) -> None:
        self._font_size = font_size
        style = f"font-size: {font_size}pt;"
        for button in (self.refresh_button, self.prev_button, self.next_button, *self._page_buttons):
            button.setStyleSheet(style)
