from __future__ import annotations

import math

import pytest

from assign_app.core.models import AnswerReview, ReviewStatus
from assign_app.core.services.api_client import ApiError
from assign_app.core.services.review_queue import ReviewQueue
from assign_app.core.services.review_submission import (
    PointsOutOfRangeError,
    ReviewInFlightError,
    ReviewNotPendingError,
    ReviewSubmission,
    floor_to_precision,
    resolve_max_points,
    validate_points,
)
from tests.fake_backend import make_review

SUBMIT_PATH = "/admin/answer-reviews/review"


@pytest.fixture
def queue(api) -> ReviewQueue:
    queue = ReviewQueue(api)
    queue.refresh()
    return queue


@pytest.fixture
def submission(api, queue) -> ReviewSubmission:
    return ReviewSubmission(api, queue)


def _review(**overrides) -> AnswerReview:
    return AnswerReview.model_validate(make_review(1, **overrides))


def test_max_points_prefers_the_review_value():
    assert resolve_max_points(_review(max_points=5, question_points=8)) == 5.0


def test_max_points_falls_back_to_question_points():
    assert resolve_max_points(_review(max_points=None, question_points=8)) == 8.0


def test_max_points_defaults_to_zero():
    assert resolve_max_points(_review(max_points=None, question_points=None)) == 0.0


def test_zero_max_points_is_respected():
    assert resolve_max_points(_review(max_points=0, question_points=8)) == 0.0


@pytest.mark.parametrize("points", [-0.1, 5.1, math.nan, "many", None])
def test_validate_points_rejects_out_of_range(points):
    with pytest.raises(PointsOutOfRangeError):
        validate_points(points, 5.0)


@pytest.mark.parametrize("points", [0, 2.5, 5])
def test_validate_points_accepts_bounds(points):
    assert validate_points(points, 5.0) == float(points)


def test_missing_status_is_treated_as_pending():
    assert _review(status=None).is_pending
    assert _review(status="").review_status is ReviewStatus.PENDING


def test_open_review_prefills_form(submission, queue):
    form = submission.open_review(queue.get_item(1))
    assert form.review_id == 1
    assert form.is_correct is True
    assert form.points == 5.0
    assert form.max_points == 5.0


def test_open_review_clamps_existing_points():
    review = _review(max_points=3).model_copy(update={"points": 7.0, "is_correct": False})
    form = ReviewSubmission(api=None, queue=None).open_review(review)
    assert form.points == 3.0
    assert form.is_correct is False


def test_fractional_max_points_stay_submittable():
    review = _review(max_points=2.255).model_copy(update={"points": None})
    form = ReviewSubmission(api=None, queue=None).open_review(review)
    assert form.max_points == 2.255
    assert form.input_max_points == 2.25
    assert form.points == 2.25
    assert validate_points(form.input_max_points, form.max_points) == 2.25


@pytest.mark.parametrize(("value", "expected"), [(2.25, 2.25), (2.259, 2.25), (0.29, 0.29), (5, 5.0)])
def test_floor_to_precision(value, expected):
    assert floor_to_precision(value) == expected


def test_over_max_points_are_rejected_without_a_request(submission, store, queue):
    with pytest.raises(PointsOutOfRangeError):
        submission.submit_review(1, True, 5.5)
    assert store.calls_to("POST", SUBMIT_PATH) == 0
    assert queue.get_item(1).is_pending


def test_exact_max_points_are_accepted(submission, store, queue):
    reviewed = submission.submit_review(1, True, 5)

    assert store.submitted_reviews == [{"studentAnswerId": 101, "isCorrect": True, "points": 5.0}]
    assert reviewed.review_status is ReviewStatus.REVIEWED
    assert reviewed.points == 5.0
    assert reviewed.max_points == 5.0
    assert queue.get_item(1) == reviewed
    assert not queue.is_actionable(queue.get_item(1))


def test_incorrect_answer_with_zero_points(submission, store):
    reviewed = submission.submit_review(2, False, 0)
    assert reviewed.is_correct is False
    assert store.submitted_reviews[-1]["isCorrect"] is False


def test_api_failure_leaves_review_pending(submission, store, queue):
    store.fail_once("POST", SUBMIT_PATH, 422, {"message": "Points exceed maximum"})

    with pytest.raises(ApiError) as excinfo:
        submission.submit_review(1, True, 4)

    assert excinfo.value.message == "Points exceed maximum"
    assert queue.get_item(1).is_pending
    assert not submission.is_submitting(1)

    submission.submit_review(1, True, 4)
    assert not queue.get_item(1).is_pending


def test_reviewed_items_cannot_be_resubmitted(submission, store, queue):
    submission.submit_review(3, True, 1)
    with pytest.raises(ReviewNotPendingError):
        submission.submit_review(3, True, 1)
    assert store.calls_to("POST", SUBMIT_PATH) == 1


def test_second_submission_is_blocked_while_first_is_in_flight(api, queue):
    submission = ReviewSubmission(api, queue)
    nested_errors: list[Exception] = []
    real_submit = api.submit_answer_review

    def submit_and_retry(payload):
        try:
            submission.submit_review(1, True, 1)
        except ReviewInFlightError as exc:
            nested_errors.append(exc)
        return real_submit(payload)

    api.submit_answer_review = submit_and_retry
    submission.submit_review(1, True, 2)

    assert len(nested_errors) == 1
    assert queue.get_item(1).points == 2.0


def test_server_conflict_surfaces_as_api_error(submission, store, queue):
    store.reviews[0]["reviewStatus"] = "reviewed"
    with pytest.raises(ApiError) as excinfo:
        submission.submit_review(1, True, 1)
    assert excinfo.value.status_code == 409
    assert queue.get_item(1).is_pending


def test_console_submits_through_the_shared_queue(console, store):
    console.reviews.refresh()
    form = console.open_review(4)
    reviewed = console.submit_review(4, form.is_correct, form.points)
    assert reviewed.review_status is ReviewStatus.REVIEWED
    assert console.reviews.get_item(4).review_status is ReviewStatus.REVIEWED
    assert store.reviews[3]["reviewStatus"] == "reviewed"
