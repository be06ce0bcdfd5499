"""Service for the questions of the currently selected assignment block."""

from __future__ import annotations

import logging

from assign_app.core.models import QuestionRecord
from assign_app.core.services.api_client import AdminApiClient

logger = logging.getLogger(__name__)


class QuestionRepository:
    """Caches the question list of one block and mirrors deletions locally."""

    def __init__(self, api: AdminApiClient) -> None:
        self._api = api
        self._assignment_block_id: int | None = None
        self._questions: list[QuestionRecord] = []

    @property
    def assignment_block_id(self) -> int | None:
        return self._assignment_block_id

    def load_block(self, assignment_block_id: int) -> list[QuestionRecord]:
        """Fetch the questions of a block; the previous listing is kept on failure."""
        questions = self._api.list_questions(assignment_block_id)
        self._assignment_block_id = assignment_block_id
        self._questions = list(questions)
        return self.get_questions()

    def refresh(self) -> list[QuestionRecord]:
        if self._assignment_block_id is None:
            return []
        return self.load_block(self._assignment_block_id)

    def clear(self) -> None:
        self._assignment_block_id = None
        self._questions = []

    def get_questions(self) -> list[QuestionRecord]:
        """Return a copy of the loaded questions."""
        return list(self._questions)

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_question(self, question_id: int) -> QuestionRecord:
        for question in self._questions:
            if question.id == question_id:
                return question
        raise LookupError(f"Question {question_id} is not loaded")

    def delete_question(self, question_id: int) -> None:
        """Delete remotely, then drop the question from the local listing."""
        self.get_question(question_id)
        self._api.delete_question(question_id)
        self._questions = [q for q in self._questions if q.id != question_id]
        logger.info("Deleted question %s", question_id)
