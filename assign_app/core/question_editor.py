"""Editing state for a single question and its save workflow."""

from __future__ import annotations

import logging

from assign_app.constants.question_constants import DEFAULT_QUESTION_POINTS, DEFAULT_QUESTION_TYPE
from assign_app.core.models import QuestionPayload, QuestionRecord, QuestionType
from assign_app.core.question_catalog import QuestionTypeCatalog, ValidationResult, default_catalog
from assign_app.core.question_content import ContentModel
from assign_app.core.services.api_client import AdminApiClient

logger = logging.getLogger(__name__)

MISSING_BLOCK = "missing block"
INVALID_POINTS = "invalid points"


class ContentShapeError(TypeError):
    """Raised when content does not belong to the editor's current question type."""


class QuestionValidationError(ValueError):
    """Raised by :meth:`QuestionEditor.save` when local validation fails."""

    def __init__(self, result: ValidationResult) -> None:
        super().__init__(result.message or result.reason or "Invalid question.")
        self.result = result


class QuestionEditor:
    """Holds the question being edited and submits it to the API.

    Changing the type always discards the current content and starts from the
    catalog's default for the new type; nothing is carried over by field name.
    Failed saves leave the editor untouched so the user can retry.
    """

    def __init__(self, api: AdminApiClient, catalog: QuestionTypeCatalog | None = None) -> None:
        self._api = api
        self._catalog = catalog or default_catalog
        self.question_id: int | None = None
        self.assignment_block_id: int = 0
        self.question_type: str = DEFAULT_QUESTION_TYPE
        self.content: ContentModel = self._catalog.default_content_for(DEFAULT_QUESTION_TYPE)
        self.points: int = DEFAULT_QUESTION_POINTS
        self.requires_teacher_review: bool = False
        self.has_unsaved_changes: bool = False

    @property
    def catalog(self) -> QuestionTypeCatalog:
        return self._catalog

    @property
    def is_new(self) -> bool:
        return self.question_id is None

    def start_new(self, assignment_block_id: int, question_type: str = DEFAULT_QUESTION_TYPE) -> None:
        self.question_id = None
        self.assignment_block_id = assignment_block_id
        self.question_type = self._tag(question_type)
        self.content = self._catalog.default_content_for(self.question_type)
        self.points = DEFAULT_QUESTION_POINTS
        self.requires_teacher_review = False
        self.has_unsaved_changes = False

    def load(self, record: QuestionRecord) -> None:
        """Load a saved question; raises for unknown types or malformed content."""
        content = self._catalog.parse_content(record.type, record.content)
        self.question_id = record.id
        self.assignment_block_id = record.assignment_block_id
        self.question_type = self._tag(record.type)
        self.content = content
        self.points = record.points
        self.requires_teacher_review = record.requires_teacher_review
        self.has_unsaved_changes = False

    def set_type(self, question_type: str) -> None:
        tag = self._tag(question_type)
        content = self._catalog.default_content_for(tag)
        self.question_type = tag
        self.content = content
        self.has_unsaved_changes = True

    def set_content(self, content: ContentModel) -> None:
        expected = self._catalog.content_model_for(self.question_type)
        if type(content) is not expected:
            raise ContentShapeError(
                f"{type(content).__name__} does not match question type {self.question_type!r}."
            )
        self.content = content
        self.has_unsaved_changes = True

    def mark_changed(self) -> None:
        """Record an in-place edit of ``content``."""
        self.has_unsaved_changes = True

    def set_points(self, points: int) -> None:
        if isinstance(points, bool) or not isinstance(points, int) or points < 1:
            raise ValueError("Points must be a whole number of at least 1.")
        self.points = points
        self.has_unsaved_changes = True

    def set_requires_teacher_review(self, required: bool) -> None:
        self.requires_teacher_review = bool(required)
        self.has_unsaved_changes = True

    def set_assignment_block(self, assignment_block_id: int) -> None:
        self.assignment_block_id = assignment_block_id
        self.has_unsaved_changes = True

    def validate(self) -> ValidationResult:
        if not self.assignment_block_id or self.assignment_block_id < 1:
            return ValidationResult.failure(MISSING_BLOCK, "Select the block this question belongs to.")
        if self.points < 1:
            return ValidationResult.failure(INVALID_POINTS, "Points must be at least 1.")
        return self._catalog.validate(self.question_type, self.content)

    def build_payload(self) -> QuestionPayload:
        return QuestionPayload(
            assignment_block_id=self.assignment_block_id,
            type=self.question_type,
            content=self.content.to_payload(),
            points=self.points,
            requires_teacher_review=self.requires_teacher_review,
        )

    def save(self) -> QuestionRecord | None:
        """Validate locally, then create or update the question remotely.

        Raises :class:`QuestionValidationError` before any request when the
        content is invalid; API failures propagate as ``ApiError``.
        """
        result = self.validate()
        if not result.is_valid:
            raise QuestionValidationError(result)

        payload = self.build_payload()
        if self.question_id is None:
            record = self._api.create_question(payload)
            if record is not None:
                self.question_id = record.id
            logger.info("Created %s question in block %s", self.question_type, self.assignment_block_id)
        else:
            record = self._api.update_question(self.question_id, payload)
            logger.info("Updated question %s", self.question_id)

        self.has_unsaved_changes = False
        return record

    def _tag(self, question_type: str) -> str:
        tag = question_type.value if isinstance(question_type, QuestionType) else str(question_type)
        self._catalog.entry(tag)
        return tag
