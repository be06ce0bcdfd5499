from __future__ import annotations

import pytest

from assign_app.core.answer_classifier import (
    RenderStrategy,
    classify,
    describe_answer,
    resolve_media_url,
)
from assign_app.core.answer_html import render_answer_html

BASE = "https://api.example.com"


def test_text_wins_over_image():
    answer = {"text": "مرحبا", "imageUrl": "/uploads/a.png"}
    assert classify(answer) is RenderStrategy.TEXT
    assert describe_answer(answer).text == "مرحبا"


def test_empty_text_falls_through_to_the_next_rule():
    assert classify({"text": "", "imageUrl": "/uploads/a.png"}) is RenderStrategy.IMAGE


def test_selected_options_are_joined_with_commas():
    view = describe_answer({"selectedOptions": ["أ", "ب"]})
    assert view.strategy is RenderStrategy.CHOICE_LIST
    assert view.text == "أ, ب"


def test_empty_selection_is_still_a_choice_list():
    assert classify({"selectedOptions": []}) is RenderStrategy.CHOICE_LIST


def test_selected_options_must_be_a_list():
    assert classify({"selectedOptions": "a"}) is RenderStrategy.UNKNOWN


def test_image_path_is_resolved_against_the_api_host():
    view = describe_answer({"imageUrl": "/uploads/photo.jpg"}, BASE + "/")
    assert view.strategy is RenderStrategy.IMAGE
    assert view.media_url == "https://api.example.com/uploads/photo.jpg"


def test_audio_answer_keeps_absolute_urls():
    view = describe_answer({"audioUrl": "https://cdn.example.com/a.mp3"}, BASE)
    assert view.strategy is RenderStrategy.AUDIO
    assert view.media_url == "https://cdn.example.com/a.mp3"


@pytest.mark.parametrize(
    ("matches", "expected"),
    [([], "0 matches"), ([{"a": 1}], "1 match"), ([{}, {}, {}], "3 matches")],
)
def test_matches_are_counted(matches, expected):
    view = describe_answer({"matches": matches})
    assert view.strategy is RenderStrategy.MATCH_COUNT
    assert view.text == expected


def test_ordered_words_and_letters_are_space_separated():
    assert describe_answer({"orderedWords": ["الطالب", "يذهب"]}).text == "الطالب يذهب"
    letters = describe_answer({"letters": ["ك", "ت", "ب"]})
    assert letters.strategy is RenderStrategy.LETTERS
    assert letters.text == "ك ت ب"


@pytest.mark.parametrize("answer", [None, {}, [], "plain", 42, {"other": "x"}, {"text": None}])
def test_unrecognised_shapes_render_as_placeholder(answer):
    view = describe_answer(answer)
    assert view.strategy is RenderStrategy.UNKNOWN
    assert view.text == "—"


def test_resolve_media_url_without_base_returns_path():
    assert resolve_media_url("uploads/a.png", None) == "uploads/a.png"
    assert resolve_media_url("uploads/a.png", BASE) == "https://api.example.com/uploads/a.png"


def test_text_answers_are_escaped_in_html():
    html = render_answer_html({"text": "<script>alert(1)</script>"})
    assert "<script>" not in html
    assert "&lt;script&gt;" in html


def test_image_answers_render_an_img_tag():
    html = render_answer_html({"imageUrl": "/uploads/a.png"}, BASE)
    assert '<img src="https://api.example.com/uploads/a.png"' in html
