from __future__ import annotations

import pytest

from assign_app.core.models import PageResult
from assign_app.core.services.api_client import ApiError
from assign_app.core.services.review_queue import ReviewNotFoundError, ReviewQueue


@pytest.fixture
def queue(api) -> ReviewQueue:
    return ReviewQueue(api)


def test_defaults_query_pending_first_page(queue):
    assert queue.build_query() == {"reviewStatus": "pending", "page": 1, "limit": 10}


def test_refresh_loads_page_and_totals(queue, store):
    items = queue.refresh()
    assert len(items) == 10
    assert queue.total == 23
    assert queue.total_pages == 3
    assert all(item.is_pending for item in items)
    assert store.review_queries[-1] == {"reviewStatus": "pending", "page": "1", "limit": "10"}


def test_all_status_is_sent_explicitly(queue, store):
    queue.set_review_status("all")
    queue.refresh()
    assert store.review_queries[-1]["reviewStatus"] == "all"
    assert queue.total == 26


def test_filters_are_only_sent_when_set(queue):
    queue.set_student_id(2)
    queue.set_assignment_id(1)
    assert queue.build_query() == {
        "reviewStatus": "pending",
        "studentId": 2,
        "assignmentId": 1,
        "page": 1,
        "limit": 10,
    }
    queue.set_student_id(None)
    assert "studentId" not in queue.build_query()


@pytest.mark.parametrize(
    "change",
    [
        lambda q: q.set_review_status("reviewed"),
        lambda q: q.set_student_id(1),
        lambda q: q.set_assignment_id(2),
        lambda q: q.set_limit(20),
    ],
)
def test_any_filter_or_limit_change_returns_to_first_page(queue, change):
    queue.refresh()
    queue.set_page(3)
    assert queue.page == 3

    assert change(queue) is True
    assert queue.page == 1


def test_setting_the_same_filter_keeps_the_page(queue):
    queue.refresh()
    queue.set_page(2)
    assert queue.set_review_status("pending") is False
    assert queue.set_limit(10) is False
    assert queue.page == 2


def test_invalid_status_and_limit_are_rejected(queue):
    with pytest.raises(ValueError):
        queue.set_review_status("archived")
    with pytest.raises(ValueError):
        queue.set_limit(7)
    with pytest.raises(ValueError):
        ReviewQueue(queue._api, limit=3)


def test_page_numbers_are_clamped(queue):
    queue.refresh()
    assert queue.set_page(99) == 3
    assert queue.set_page(0) == 1
    assert queue.set_page(-5) == 1


def test_page_is_clamped_to_one_before_anything_is_loaded(queue):
    assert queue.set_page(4) == 1


def test_next_and_previous_navigation(queue):
    queue.refresh()
    assert not queue.has_previous_page()
    assert queue.next_page() == 2
    queue.refresh()
    assert queue.items[0].id == 11
    assert queue.next_page() == 3
    assert not queue.has_next_page()
    assert queue.next_page() == 3
    assert queue.previous_page() == 2


def test_last_page_holds_the_remainder(queue):
    queue.refresh()
    queue.set_page(3)
    assert len(queue.refresh()) == 3
    assert queue.display_range() == (21, 23)


def test_display_range_of_empty_listing(queue):
    assert queue.display_range() == (0, 0)
    assert queue.visible_pages() == []


@pytest.mark.parametrize(
    ("page", "total_pages", "expected"),
    [
        (1, 3, [1, 2, 3]),
        (1, 10, [1, 2, 3, 4, 5]),
        (3, 10, [1, 2, 3, 4, 5]),
        (6, 10, [4, 5, 6, 7, 8]),
        (9, 10, [6, 7, 8, 9, 10]),
        (10, 10, [6, 7, 8, 9, 10]),
    ],
)
def test_visible_pages_window(queue, page, total_pages, expected):
    queue._total_pages = total_pages
    queue.set_page(page)
    assert queue.visible_pages() == expected


def test_failed_refresh_empties_the_listing(queue, store):
    queue.refresh()
    store.fail_once("GET", "/admin/answer-reviews", 500, {"message": "Database unavailable"})

    with pytest.raises(ApiError) as excinfo:
        queue.refresh()

    assert excinfo.value.message == "Database unavailable"
    assert queue.items == []
    assert queue.total == 0
    assert queue.total_pages == 0


def test_get_item_only_finds_current_page(queue):
    queue.refresh()
    assert queue.get_item(5).student_answer_id == 105
    with pytest.raises(ReviewNotFoundError):
        queue.get_item(15)


def test_items_are_a_copy(queue):
    queue.refresh()
    queue.items.clear()
    assert len(queue.items) == 10


class _StubApi:
    def __init__(self, result: PageResult) -> None:
        self.result = result

    def list_answer_reviews(self, params):
        return self.result


def test_totals_come_from_the_response_not_the_page_length():
    queue = ReviewQueue(_StubApi(PageResult(items=[], total=40, total_pages=4)))
    queue.refresh()
    assert queue.total == 40
    assert queue.set_page(4) == 4
    assert queue.has_previous_page()
