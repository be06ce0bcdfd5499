"""The one-way ``pending -> reviewed`` transition of an answer review."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from assign_app.constants.review_constants import POINTS_DECIMALS
from assign_app.core.models import AnswerReview, ReviewPayload, ReviewStatus
from assign_app.core.services.api_client import AdminApiClient
from assign_app.core.services.review_queue import ReviewQueue

logger = logging.getLogger(__name__)


class PointsOutOfRangeError(ValueError):
    """Raised when a point award falls outside ``[0, max_points]``."""


class ReviewNotPendingError(RuntimeError):
    """Raised when a review has already been completed."""


class ReviewInFlightError(RuntimeError):
    """Raised when a submission for the same review is still outstanding."""


def resolve_max_points(review: AnswerReview) -> float:
    """Maximum award: the review's own ``max_points``, else the question's points."""
    if review.max_points is not None:
        return float(review.max_points)
    if review.question is not None and review.question.points is not None:
        return float(review.question.points)
    return 0.0


def validate_points(points: float, max_points: float) -> float:
    try:
        value = float(points)
    except (TypeError, ValueError) as exc:
        raise PointsOutOfRangeError("Points must be a number.") from exc
    if math.isnan(value) or value < 0 or value > max_points:
        raise PointsOutOfRangeError(f"Points must be between 0 and {max_points:g}.")
    return value


def floor_to_precision(value: float, decimals: int = POINTS_DECIMALS) -> float:
    """Round ``value`` down to ``decimals`` places so an input showing it stays in range."""
    factor = 10**decimals
    return math.floor(round(value * factor, 6)) / factor


@dataclass(slots=True)
class ReviewForm:
    """Initial values for the review dialog."""

    review_id: int
    is_correct: bool
    points: float
    max_points: float
    input_max_points: float


class ReviewSubmission:
    """Validates point awards and submits reviews for items of a :class:`ReviewQueue`."""

    def __init__(self, api: AdminApiClient, queue: ReviewQueue) -> None:
        self._api = api
        self._queue = queue
        self._in_flight: set[int] = set()

    def is_submitting(self, review_id: int) -> bool:
        return review_id in self._in_flight

    def open_review(self, review: AnswerReview) -> ReviewForm:
        max_points = resolve_max_points(review)
        if review.points is not None:
            points = float(review.points)
        else:
            points = max_points
        return ReviewForm(
            review_id=review.id,
            is_correct=review.is_correct if review.is_correct is not None else True,
            points=floor_to_precision(min(max(points, 0.0), max_points)),
            max_points=max_points,
            input_max_points=floor_to_precision(max_points),
        )

    def submit_review(self, review_id: int, is_correct: bool, points: float) -> AnswerReview:
        """Grade a pending review.

        All checks run before the request is sent; if the API call fails the
        item stays pending and the ``ApiError`` propagates so the caller can
        offer a retry.
        """
        review = self._queue.get_item(review_id)
        if not review.is_pending:
            raise ReviewNotPendingError(f"Review {review_id} has already been reviewed.")
        if review_id in self._in_flight:
            raise ReviewInFlightError(f"Review {review_id} is already being submitted.")
        awarded = validate_points(points, resolve_max_points(review))

        payload = ReviewPayload(
            student_answer_id=review.student_answer_id,
            is_correct=bool(is_correct),
            points=awarded,
        )
        self._in_flight.add(review_id)
        try:
            self._api.submit_answer_review(payload)
        finally:
            self._in_flight.discard(review_id)

        reviewed = review.model_copy(
            update={
                "review_status": ReviewStatus.REVIEWED,
                "is_correct": bool(is_correct),
                "points": awarded,
            }
        )
        self._queue.replace_item(reviewed)
        logger.info(
            "Reviewed answer %s: correct=%s points=%g", review.student_answer_id, is_correct, awarded
        )
        return reviewed
