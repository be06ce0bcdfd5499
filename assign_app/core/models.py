"""Domain models for the admin console.

Records that arrive from or are sent to the API are pydantic models using the
API's camelCase field names as aliases. Parsing is tolerant: unknown keys are
ignored and optional embedded objects may be missing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


class QuestionType(str, Enum):
    """Built-in question type tags, spelled as the API stores them."""

    MCQ_SINGLE = "mcq_single"
    MCQ_MULTIPLE = "mcq_multiple"
    MATCH_IMAGE_TEXT = "match_image_text"
    DRAW_CIRCLE_SINGLE = "draw_circle_single"
    DRAW_CIRCLE_MULTIPLE = "draw_circle_multiple"
    LISTEN_REPEAT = "listen_repeat"
    BREAK_WORD = "break_word"
    COMPOSE_WORD = "compose_word"
    WRITE_WORDS = "write_words"
    FILL_SENTENCE = "fill_sentence"
    ORDER_WORDS = "order_words"
    SELECT_IMAGE_TEXT = "select_image_text"
    READ_QUESTION = "read_question"
    FREE_TEXT = "free_text"
    FREE_TEXT_UPLOAD = "free_text_upload"


class ReviewStatus(str, Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"


class ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class UserSummary(ApiModel):
    id: int | None = None
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    email: str = ""


class StudentSummary(ApiModel):
    """Student as listed by the API; names may sit on the nested user."""

    id: int
    user_id: int | None = Field(default=None, alias="userId")
    first_name: str | None = Field(default=None, alias="firstName")
    last_name: str | None = Field(default=None, alias="lastName")
    email: str | None = None
    user: UserSummary | None = None

    @property
    def display_name(self) -> str:
        first = (self.user.first_name if self.user else "") or self.first_name or ""
        last = (self.user.last_name if self.user else "") or self.last_name or ""
        return f"{first} {last}".strip() or "Unknown"

    @property
    def contact_email(self) -> str:
        return (self.user.email if self.user else "") or self.email or ""


class AssignmentSummary(ApiModel):
    id: int
    title: str = ""


class AssignmentBlockSummary(ApiModel):
    id: int
    order_index: int = Field(default=0, alias="orderIndex")
    assignment_id: int | None = Field(default=None, alias="assignmentId")


class QuestionSummary(ApiModel):
    """Question data the API embeds in an answer review."""

    id: int | None = None
    type: str = ""
    content: dict[str, Any] = Field(default_factory=dict)
    points: float | None = None


class QuestionRecord(ApiModel):
    id: int
    assignment_block_id: int = Field(alias="assignmentBlockId")
    type: str
    content: dict[str, Any] = Field(default_factory=dict)
    points: int = 1
    requires_teacher_review: bool = Field(default=False, alias="requiresTeacherReview")
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("content", mode="before")
    @classmethod
    def _content_defaults_to_empty(cls, value: Any) -> Any:
        return value if value is not None else {}

    @field_validator("requires_teacher_review", mode="before")
    @classmethod
    def _missing_flag_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    @property
    def prompt_text(self) -> str:
        text = self.content.get("text")
        return str(text) if text else ""


class QuestionPayload(ApiModel):
    """Request body for creating or updating a question."""

    assignment_block_id: int = Field(alias="assignmentBlockId")
    type: str
    content: dict[str, Any]
    points: int = Field(ge=1)
    requires_teacher_review: bool = Field(default=False, alias="requiresTeacherReview")

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class AnswerReview(ApiModel):
    """A student answer waiting for, or having received, a teacher review.

    Instances are frozen: a review transition produces a new copy, so
    ``max_points`` can never change once the record exists.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: int
    student_answer_id: int = Field(alias="studentAnswerId")
    student_id: int | None = Field(default=None, alias="studentId")
    question_id: int | None = Field(default=None, alias="questionId")
    assignment_id: int | None = Field(default=None, alias="assignmentId")
    answer: Any = None
    review_status: ReviewStatus = Field(default=ReviewStatus.PENDING, alias="reviewStatus")
    is_correct: bool | None = Field(default=None, alias="isCorrect")
    points: float | None = None
    max_points: float | None = Field(default=None, alias="maxPoints")
    student: StudentSummary | None = None
    question: QuestionSummary | None = None
    assignment: AssignmentSummary | None = None

    @field_validator("review_status", mode="before")
    @classmethod
    def _missing_status_is_pending(cls, value: Any) -> Any:
        return ReviewStatus.PENDING if value in (None, "") else value

    @property
    def is_pending(self) -> bool:
        return self.review_status == ReviewStatus.PENDING

    @property
    def question_type(self) -> str:
        return self.question.type if self.question and self.question.type else ""


class ReviewPayload(ApiModel):
    """Request body for the review endpoint."""

    student_answer_id: int = Field(alias="studentAnswerId")
    is_correct: bool = Field(alias="isCorrect")
    points: float

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


T = TypeVar("T")


@dataclass(slots=True)
class PageResult(Generic[T]):
    """One page of a listing plus the totals reported by the API."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    total_pages: int = 0
