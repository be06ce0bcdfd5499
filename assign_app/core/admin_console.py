"""Facade tying the API client to the question and review services."""

from __future__ import annotations

import logging

from assign_app.core.models import (
    AnswerReview,
    AssignmentBlockSummary,
    AssignmentSummary,
    QuestionRecord,
    StudentSummary,
)
from assign_app.core.question_catalog import QuestionTypeCatalog, default_catalog
from assign_app.core.question_editor import QuestionEditor
from assign_app.core.services.api_client import AdminApiClient
from assign_app.core.services.question_repository import QuestionRepository
from assign_app.core.services.review_queue import ReviewQueue
from assign_app.core.services.review_submission import ReviewForm, ReviewSubmission
from assign_app.utils.config import ConsoleConfig

logger = logging.getLogger(__name__)


class AdminConsole:
    """Facade for the console services: questions, review queue and review submission."""

    def __init__(
        self,
        api: AdminApiClient,
        catalog: QuestionTypeCatalog | None = None,
        page_size: int | None = None,
    ) -> None:
        self.catalog = catalog or default_catalog
        self._page_size = page_size
        self._students: list[StudentSummary] = []
        self._assignments: list[AssignmentSummary] = []
        self._bind(api)

    @classmethod
    def from_config(cls, config: ConsoleConfig) -> AdminConsole:
        api = AdminApiClient(
            base_url=config.api_base_url,
            token=config.api_token,
            timeout=config.request_timeout_seconds,
        )
        return cls(api, page_size=config.default_page_size)

    def _bind(self, api: AdminApiClient) -> None:
        self.api = api
        self.questions = QuestionRepository(api)
        if self._page_size is None:
            self.reviews = ReviewQueue(api)
        else:
            self.reviews = ReviewQueue(api, limit=self._page_size)
        self.review_submission = ReviewSubmission(api, self.reviews)

    def set_api_client(self, api: AdminApiClient) -> None:
        """Swap the API connection; cached listings and queue state are reset."""
        old_api = self.api
        self._bind(api)
        self._students = []
        self._assignments = []
        if old_api is not api:
            old_api.close()
        logger.info("API connection changed to %s", api.base_url)

    @property
    def base_url(self) -> str:
        return self.api.base_url

    def close(self) -> None:
        self.api.close()

    # --- Questions ---

    def new_editor(self) -> QuestionEditor:
        return QuestionEditor(self.api, self.catalog)

    def edit_question(self, record: QuestionRecord) -> QuestionEditor:
        editor = self.new_editor()
        editor.load(record)
        return editor

    def load_assignment_blocks(self, assignment_id: int) -> list[AssignmentBlockSummary]:
        blocks = self.api.list_assignment_blocks(assignment_id)
        return sorted(blocks, key=lambda block: (block.order_index, block.id))

    def question_type_label(self, tag: str) -> str:
        return self.catalog.display_label(tag)

    # --- Filter options ---

    def load_filter_options(self) -> None:
        """Fetch students and assignments for the selectors."""
        self._students = self.api.list_students()
        self._assignments = self.api.list_assignments()

    def get_students(self) -> list[StudentSummary]:
        return list(self._students)

    def get_assignments(self) -> list[AssignmentSummary]:
        return list(self._assignments)

    def student_name_for(self, review: AnswerReview) -> str:
        if review.student is not None and review.student.user is not None:
            return review.student.display_name
        student = next((s for s in self._students if s.id == review.student_id), None)
        return student.display_name if student else ""

    def assignment_title_for(self, review: AnswerReview) -> str:
        if review.assignment is not None:
            return review.assignment.title
        assignment = next((a for a in self._assignments if a.id == review.assignment_id), None)
        return assignment.title if assignment else ""

    # --- Reviews ---

    def open_review(self, review_id: int) -> ReviewForm:
        return self.review_submission.open_review(self.reviews.get_item(review_id))

    def submit_review(self, review_id: int, is_correct: bool, points: float) -> AnswerReview:
        return self.review_submission.submit_review(review_id, is_correct, points)
