"""HTTP client for the platform's admin REST API.

Only the endpoints used by the question editor and the answer review workflow
are wrapped here. Every failure, transport or HTTP, surfaces as
:class:`ApiError` carrying a message that can be shown to the user as is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from assign_app.constants.api_constants import (
    ANSWER_REVIEW_SUBMIT_ENDPOINT,
    ANSWER_REVIEWS_ENDPOINT,
    ASSIGNMENT_BLOCKS_ENDPOINT,
    ASSIGNMENTS_ENDPOINT,
    DEFAULT_TIMEOUT_SECONDS,
    FALLBACK_ERROR_MESSAGE,
    QUESTIONS_ENDPOINT,
    STUDENTS_ENDPOINT,
)
from assign_app.core.models import (
    AnswerReview,
    AssignmentBlockSummary,
    AssignmentSummary,
    PageResult,
    QuestionPayload,
    QuestionRecord,
    ReviewPayload,
    StudentSummary,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ApiError(Exception):
    """Raised when a request to the API fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@dataclass(slots=True)
class ListEnvelope:
    """Raw items of a listing response plus its totals."""

    items: list[Any] = field(default_factory=list)
    total: int = 0
    total_pages: int = 0


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value) if value is not None else default
    except (TypeError, ValueError):
        return default


def parse_list_envelope(body: Any) -> ListEnvelope:
    """Accept ``{data, meta}`` or a bare list; anything else is an empty listing."""
    if isinstance(body, Mapping) and isinstance(body.get("data"), list):
        items = list(body["data"])
        meta = body.get("meta")
        if isinstance(meta, Mapping):
            return ListEnvelope(
                items=items,
                total=_as_int(meta.get("total"), 0) or 0,
                total_pages=_as_int(meta.get("totalPages"), 1) or 1,
            )
        return ListEnvelope(items=items, total=len(items), total_pages=1)
    if isinstance(body, list):
        return ListEnvelope(items=list(body), total=len(body), total_pages=1)
    return ListEnvelope()


def extract_error_message(response: httpx.Response) -> str:
    """Pull the server's ``message`` out of an error body, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return FALLBACK_ERROR_MESSAGE
    if not isinstance(body, Mapping):
        return FALLBACK_ERROR_MESSAGE
    message = body.get("message")
    if isinstance(message, list):
        parts = [str(part) for part in message if part]
        return "; ".join(parts) if parts else FALLBACK_ERROR_MESSAGE
    if isinstance(message, str) and message.strip():
        return message.strip()
    return FALLBACK_ERROR_MESSAGE


def _parse_items(model: type[ModelT], raw_items: list[Any]) -> list[ModelT]:
    parsed: list[ModelT] = []
    for raw in raw_items:
        try:
            parsed.append(model.model_validate(raw))
        except ValidationError as exc:
            logger.warning("Skipping malformed %s record: %s", model.__name__, exc)
    return parsed


class AdminApiClient:
    """Thin synchronous wrapper around ``httpx.Client``."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if client is None:
            client = httpx.Client(base_url=self.base_url, headers=headers, timeout=timeout)
        else:
            client.headers.update(headers)
        self._client = client

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> AdminApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --- Transport ---

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        logger.debug("%s %s %s", method, path, kwargs.get("params") or "")
        try:
            response = self._client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiError(FALLBACK_ERROR_MESSAGE) from exc

        if response.is_error:
            message = extract_error_message(response)
            logger.warning("%s %s returned %s: %s", method, path, response.status_code, message)
            raise ApiError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            logger.warning("%s %s returned a non-JSON body", method, path)
            return None

    def _list(self, model: type[ModelT], path: str, params: Mapping[str, Any] | None = None) -> PageResult[ModelT]:
        envelope = parse_list_envelope(self._request("GET", path, params=params))
        return PageResult(
            items=_parse_items(model, envelope.items),
            total=envelope.total,
            total_pages=envelope.total_pages,
        )

    @staticmethod
    def _unwrap_record(body: Any) -> Any:
        if isinstance(body, Mapping) and isinstance(body.get("data"), Mapping):
            return body["data"]
        return body

    # --- Answer reviews ---

    def list_answer_reviews(self, params: Mapping[str, Any]) -> PageResult[AnswerReview]:
        return self._list(AnswerReview, ANSWER_REVIEWS_ENDPOINT, params=params)

    def submit_answer_review(self, payload: ReviewPayload) -> Any:
        return self._request("POST", ANSWER_REVIEW_SUBMIT_ENDPOINT, json=payload.to_json())

    # --- Questions ---

    def list_questions(self, assignment_block_id: int) -> list[QuestionRecord]:
        return self._list(
            QuestionRecord, QUESTIONS_ENDPOINT, params={"assignmentBlockId": assignment_block_id}
        ).items

    def create_question(self, payload: QuestionPayload) -> QuestionRecord | None:
        body = self._request("POST", QUESTIONS_ENDPOINT, json=payload.to_json())
        return self._parse_question(body)

    def update_question(self, question_id: int, payload: QuestionPayload) -> QuestionRecord | None:
        body = self._request("PATCH", f"{QUESTIONS_ENDPOINT}/{question_id}", json=payload.to_json())
        return self._parse_question(body)

    def delete_question(self, question_id: int) -> None:
        self._request("DELETE", f"{QUESTIONS_ENDPOINT}/{question_id}")

    def _parse_question(self, body: Any) -> QuestionRecord | None:
        record = self._unwrap_record(body)
        if not isinstance(record, Mapping):
            return None
        try:
            return QuestionRecord.model_validate(record)
        except ValidationError as exc:
            logger.warning("Question response could not be parsed: %s", exc)
            return None

    # --- Filter options ---

    def list_assignments(self) -> list[AssignmentSummary]:
        return self._list(AssignmentSummary, ASSIGNMENTS_ENDPOINT).items

    def list_assignment_blocks(self, assignment_id: int) -> list[AssignmentBlockSummary]:
        return self._list(
            AssignmentBlockSummary, ASSIGNMENT_BLOCKS_ENDPOINT, params={"assignmentId": assignment_id}
        ).items

    def list_students(self) -> list[StudentSummary]:
        return self._list(StudentSummary, STUDENTS_ENDPOINT).items
