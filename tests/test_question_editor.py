from __future__ import annotations

import pytest
from pydantic import ValidationError

from assign_app.core.models import QuestionRecord
from assign_app.core.question_catalog import INCOMPLETE_PAIR, UnknownQuestionTypeError
from assign_app.core.question_content import (
    McqMultipleContent,
    McqSingleContent,
    OrderWordsContent,
)
from assign_app.core.question_editor import (
    INVALID_POINTS,
    MISSING_BLOCK,
    ContentShapeError,
    QuestionEditor,
    QuestionValidationError,
)
from assign_app.core.services.api_client import ApiError


@pytest.fixture
def editor(api) -> QuestionEditor:
    editor = QuestionEditor(api)
    editor.start_new(assignment_block_id=11)
    return editor


def test_new_editor_starts_with_single_choice_defaults(editor):
    assert editor.is_new
    assert editor.question_type == "mcq_single"
    assert isinstance(editor.content, McqSingleContent)
    assert editor.points == 1
    assert editor.requires_teacher_review is False
    assert editor.has_unsaved_changes is False


def test_changing_type_replaces_content_entirely(editor):
    editor.content.text = "Custom prompt"
    editor.content.add_option("Extra", True)

    editor.set_type("order_words")

    assert isinstance(editor.content, OrderWordsContent)
    payload = editor.build_payload().content
    assert set(payload) == {"text", "words", "correctOrder"}
    assert payload["text"] != "Custom prompt"
    assert editor.has_unsaved_changes


def test_switching_between_choice_types_does_not_carry_options(editor):
    editor.content.options[0].text = "kept?"
    editor.set_type("mcq_multiple")
    assert isinstance(editor.content, McqMultipleContent)
    assert all(option.text != "kept?" for option in editor.content.options)


def test_unknown_type_is_rejected_and_state_is_kept(editor):
    with pytest.raises(UnknownQuestionTypeError):
        editor.set_type("essay")
    assert editor.question_type == "mcq_single"
    assert isinstance(editor.content, McqSingleContent)


def test_set_content_rejects_other_type_shapes(editor):
    with pytest.raises(ContentShapeError):
        editor.set_content(OrderWordsContent(text="x"))


@pytest.mark.parametrize("points", [0, -3, 1.5, True, "2"])
def test_points_must_be_a_positive_integer(editor, points):
    with pytest.raises(ValueError):
        editor.set_points(points)
    assert editor.points == 1


def test_missing_block_fails_validation(api):
    editor = QuestionEditor(api)
    result = editor.validate()
    assert result.reason == MISSING_BLOCK


def test_invalid_points_fail_validation(editor):
    editor.points = 0
    assert editor.validate().reason == INVALID_POINTS


def test_incomplete_match_question_is_never_sent(editor, store):
    editor.set_type("match_image_text")
    with pytest.raises(QuestionValidationError) as excinfo:
        editor.save()
    assert excinfo.value.result.reason == INCOMPLETE_PAIR
    assert store.calls_to("POST", "/admin/questions") == 0
    assert editor.is_new


def test_save_new_question_posts_payload_and_records_id(editor, store):
    editor.content.text = "ما هذا؟"
    editor.set_points(3)
    editor.set_requires_teacher_review(True)

    record = editor.save()

    assert record is not None
    assert editor.question_id == record.id
    assert editor.has_unsaved_changes is False
    body = store.question_bodies[-1]
    assert body["assignmentBlockId"] == 11
    assert body["type"] == "mcq_single"
    assert body["points"] == 3
    assert body["requiresTeacherReview"] is True
    assert body["content"]["text"] == "ما هذا؟"
    assert body["content"]["options"][1]["is_correct"] is True


def test_second_save_updates_instead_of_creating(editor, store):
    editor.save()
    editor.content.text = "Changed"
    editor.mark_changed()
    editor.save()

    assert store.calls_to("POST", "/admin/questions") == 1
    assert store.calls_to("PATCH", f"/admin/questions/{editor.question_id}") == 1
    assert store.questions[editor.question_id]["content"]["text"] == "Changed"


def test_failed_save_keeps_editor_state(editor, store):
    editor.content.text = "Draft"
    editor.mark_changed()
    store.fail_once("POST", "/admin/questions", 400, {"message": ["points must be positive", "type invalid"]})

    with pytest.raises(ApiError) as excinfo:
        editor.save()

    assert excinfo.value.message == "points must be positive; type invalid"
    assert excinfo.value.status_code == 400
    assert editor.is_new
    assert editor.content.text == "Draft"
    assert editor.has_unsaved_changes

    editor.save()
    assert not editor.is_new


def test_load_existing_question(api, store):
    record = QuestionRecord.model_validate(store.questions[3])
    editor = QuestionEditor(api)
    editor.load(record)

    assert editor.question_id == 3
    assert editor.assignment_block_id == 12
    assert isinstance(editor.content, OrderWordsContent)
    assert editor.content.correct_order == ["a", "b"]
    assert editor.has_unsaved_changes is False


def test_load_with_unknown_type_raises(api):
    record = QuestionRecord(id=9, assignment_block_id=11, type="essay", content={})
    with pytest.raises(UnknownQuestionTypeError):
        QuestionEditor(api).load(record)


def test_load_with_malformed_content_raises(api):
    record = QuestionRecord(id=9, assignment_block_id=11, type="order_words", content={"words": "abc"})
    with pytest.raises(ValidationError):
        QuestionEditor(api).load(record)
