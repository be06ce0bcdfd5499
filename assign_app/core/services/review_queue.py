"""Filtered, paginated listing of answer reviews."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from assign_app.constants.review_constants import (
    DEFAULT_PAGE_SIZE,
    PAGE_SIZE_CHOICES,
    REVIEW_STATUS_FILTERS,
    REVIEW_STATUS_PENDING,
    VISIBLE_PAGE_BUTTONS,
)
from assign_app.core.answer_classifier import AnswerView, describe_answer
from assign_app.core.models import AnswerReview
from assign_app.core.services.api_client import AdminApiClient, ApiError

logger = logging.getLogger(__name__)


class ReviewNotFoundError(LookupError):
    """Raised when a review id is not on the current page."""


@dataclass(frozen=True, slots=True)
class ReviewFilters:
    review_status: str = REVIEW_STATUS_PENDING
    student_id: int | None = None
    assignment_id: int | None = None


class ReviewQueue:
    """Owns filter and pagination state for the review screen.

    Any change to a filter or to the page size sends the user back to page 1,
    and a manually entered page number is clamped to the known page count.
    """

    def __init__(self, api: AdminApiClient, limit: int = DEFAULT_PAGE_SIZE) -> None:
        if limit not in PAGE_SIZE_CHOICES:
            raise ValueError(f"Page size must be one of {PAGE_SIZE_CHOICES}.")
        self._api = api
        self._filters = ReviewFilters()
        self._page: int = 1
        self._limit: int = limit
        self._items: list[AnswerReview] = []
        self._total: int = 0
        self._total_pages: int = 0

    # --- State ---

    @property
    def filters(self) -> ReviewFilters:
        return self._filters

    @property
    def page(self) -> int:
        return self._page

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def total(self) -> int:
        return self._total

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def items(self) -> list[AnswerReview]:
        return list(self._items)

    # --- Filters ---

    def _apply_filters(self, filters: ReviewFilters) -> bool:
        if filters == self._filters:
            return False
        self._filters = filters
        self._page = 1
        return True

    def set_review_status(self, review_status: str) -> bool:
        if review_status not in REVIEW_STATUS_FILTERS:
            raise ValueError(f"Review status must be one of {REVIEW_STATUS_FILTERS}.")
        return self._apply_filters(
            ReviewFilters(review_status, self._filters.student_id, self._filters.assignment_id)
        )

    def set_student_id(self, student_id: int | None) -> bool:
        return self._apply_filters(
            ReviewFilters(self._filters.review_status, student_id or None, self._filters.assignment_id)
        )

    def set_assignment_id(self, assignment_id: int | None) -> bool:
        return self._apply_filters(
            ReviewFilters(self._filters.review_status, self._filters.student_id, assignment_id or None)
        )

    def set_limit(self, limit: int) -> bool:
        if limit not in PAGE_SIZE_CHOICES:
            raise ValueError(f"Page size must be one of {PAGE_SIZE_CHOICES}.")
        if limit == self._limit:
            return False
        self._limit = limit
        self._page = 1
        return True

    # --- Pagination ---

    def set_page(self, page: int) -> int:
        """Move to ``page`` clamped into ``[1, total_pages]`` and return the result."""
        self._page = max(1, min(int(page), self._total_pages or 1))
        return self._page

    def next_page(self) -> int:
        return self.set_page(self._page + 1)

    def previous_page(self) -> int:
        return self.set_page(self._page - 1)

    def has_next_page(self) -> bool:
        return self._page < self._total_pages

    def has_previous_page(self) -> bool:
        return self._page > 1

    def visible_pages(self) -> list[int]:
        """Page numbers for the pager: at most five, kept around the current page."""
        count = min(VISIBLE_PAGE_BUTTONS, self._total_pages)
        if count <= 0:
            return []
        half = VISIBLE_PAGE_BUTTONS // 2
        if self._total_pages <= VISIBLE_PAGE_BUTTONS or self._page <= half + 1:
            start = 1
        elif self._page >= self._total_pages - half:
            start = self._total_pages - VISIBLE_PAGE_BUTTONS + 1
        else:
            start = self._page - half
        return list(range(start, start + count))

    def display_range(self) -> tuple[int, int]:
        """Return the 1-based numbers of the first and last item on the page."""
        if self._total <= 0:
            return (0, 0)
        first = (self._page - 1) * self._limit + 1
        last = min(self._page * self._limit, self._total)
        return (first, last)

    # --- Loading ---

    def build_query(self) -> dict[str, Any]:
        params: dict[str, Any] = {"reviewStatus": self._filters.review_status}
        if self._filters.student_id:
            params["studentId"] = self._filters.student_id
        if self._filters.assignment_id:
            params["assignmentId"] = self._filters.assignment_id
        params["page"] = self._page
        params["limit"] = self._limit
        return params

    def refresh(self) -> list[AnswerReview]:
        """Load the current page; on failure the listing is emptied and the error re-raised."""
        try:
            result = self._api.list_answer_reviews(self.build_query())
        except ApiError:
            self._items = []
            self._total = 0
            self._total_pages = 0
            raise
        self._items = list(result.items)
        self._total = result.total
        self._total_pages = result.total_pages
        logger.debug(
            "Loaded %d reviews (page %d of %d, %d total)",
            len(self._items), self._page, self._total_pages, self._total,
        )
        return self.items

    # --- Items ---

    def get_item(self, review_id: int) -> AnswerReview:
        for item in self._items:
            if item.id == review_id:
                return item
        raise ReviewNotFoundError(f"Review {review_id} is not on the current page")

    def replace_item(self, review: AnswerReview) -> None:
        for index, item in enumerate(self._items):
            if item.id == review.id:
                self._items[index] = review
                return
        raise ReviewNotFoundError(f"Review {review.id} is not on the current page")

    @staticmethod
    def is_actionable(review: AnswerReview) -> bool:
        return review.is_pending

    def render_answer(self, review: AnswerReview, base_url: str | None = None) -> AnswerView:
        return describe_answer(review.answer, base_url)
