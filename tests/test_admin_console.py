from __future__ import annotations

from fastapi.testclient import TestClient

from assign_app.core.admin_console import AdminConsole
from assign_app.core.models import AnswerReview
from assign_app.core.question_content import FreeTextContent
from assign_app.core.services.api_client import AdminApiClient
from assign_app.utils.config import ConsoleConfig
from tests.fake_backend import create_app, make_review, seeded_store


def test_from_config_uses_configured_page_size():
    config = ConsoleConfig(api_base_url="https://api.example.com/", default_page_size=20)
    console = AdminConsole.from_config(config)
    try:
        assert console.base_url == "https://api.example.com"
        assert console.reviews.limit == 20
    finally:
        console.close()


def test_assignment_blocks_are_sorted_by_order(console):
    blocks = console.load_assignment_blocks(1)
    assert [block.id for block in blocks] == [11, 12]


def test_edit_question_loads_typed_content(console):
    record = console.questions.load_block(11)[1]
    editor = console.edit_question(record)
    assert isinstance(editor.content, FreeTextContent)
    assert editor.content.placeholder == ""


def test_question_type_labels(console):
    assert console.question_type_label("free_text") == "Free answer (typed)"
    assert console.question_type_label("legacy_type") == "legacy_type"


def test_names_fall_back_to_loaded_filter_options(console):
    console.load_filter_options()
    review = AnswerReview.model_validate(
        dict(make_review(1, student_id=2, assignment_id=2), student=None, assignment=None)
    )
    assert console.student_name_for(review) == "Student2 Test"
    assert console.assignment_title_for(review) == "Greetings"


def test_embedded_names_win(console):
    review = AnswerReview.model_validate(make_review(1))
    assert console.student_name_for(review) == "Student1 Test"
    assert console.assignment_title_for(review) == "Assignment 1"


def test_switching_api_resets_state(console):
    console.load_filter_options()
    console.reviews.refresh()
    console.reviews.set_page(2)

    other = AdminApiClient("http://other", client=TestClient(create_app(seeded_store())))
    console.set_api_client(other)

    assert console.api is other
    assert console.reviews.page == 1
    assert console.reviews.items == []
    assert console.get_students() == []
    assert console.review_submission is not None
    console.close()
