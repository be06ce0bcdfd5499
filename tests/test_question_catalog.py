from __future__ import annotations

import pytest

from assign_app.core.models import QuestionType
from assign_app.core.question_catalog import (
    INCOMPLETE_PAIR,
    INSUFFICIENT_PAIRS,
    QuestionTypeCatalog,
    QuestionTypeEntry,
    UnknownQuestionTypeError,
    default_catalog,
    default_content_for,
    label_for,
    validate,
)
from assign_app.core.question_content import (
    MatchImageTextContent,
    MatchPair,
    McqSingleContent,
    OrderWordsContent,
)

EXPECTED_PAYLOAD_KEYS = {
    "mcq_single": {"text", "options"},
    "mcq_multiple": {"text", "options"},
    "match_image_text": {"text", "pairs"},
    "draw_circle_single": {"text", "options"},
    "draw_circle_multiple": {"text", "options"},
    "listen_repeat": {"text", "audioUrl"},
    "break_word": {"text", "word"},
    "compose_word": {"text", "letters"},
    "write_words": {"text", "words"},
    "fill_sentence": {"text", "options"},
    "order_words": {"text", "words", "correctOrder"},
    "select_image_text": {"text", "items", "options"},
    "read_question": {"text", "imageUrl"},
    "free_text": {"text", "placeholder"},
    "free_text_upload": {"text"},
}


def test_catalog_registers_every_builtin_type_in_order():
    assert default_catalog.tags() == [member.value for member in QuestionType]
    assert len(default_catalog) == 15


def test_labels_are_unique_and_not_empty():
    labels = [label_for(tag) for tag in default_catalog.tags()]
    assert all(label.strip() for label in labels)
    assert len(set(labels)) == len(labels)


@pytest.mark.parametrize("tag", list(EXPECTED_PAYLOAD_KEYS))
def test_default_content_has_exactly_the_type_fields(tag):
    content = default_content_for(tag)
    assert type(content) is default_catalog.content_model_for(tag)
    assert set(content.to_payload()) == EXPECTED_PAYLOAD_KEYS[tag]


def test_default_content_is_a_fresh_value_each_time():
    first = default_content_for("mcq_single")
    first.options[0].text = "changed"
    first.add_option("extra")

    second = default_content_for("mcq_single")
    assert second.options[0].text == "Option 1"
    assert len(second.options) == 3


def test_mcq_single_default_marks_second_option_correct():
    content = default_content_for(QuestionType.MCQ_SINGLE)
    assert isinstance(content, McqSingleContent)
    assert [option.is_correct for option in content.options] == [False, True, False]
    assert content.to_payload()["options"][1] == {"text": "Option 2", "is_correct": True}


def test_enum_and_string_tags_resolve_to_the_same_entry():
    assert default_catalog.entry(QuestionType.ORDER_WORDS) is default_catalog.entry("order_words")
    assert QuestionType.ORDER_WORDS in default_catalog


def test_unknown_tag_raises():
    with pytest.raises(UnknownQuestionTypeError) as excinfo:
        default_catalog.entry("essay")
    assert isinstance(excinfo.value, KeyError)
    assert "essay" in str(excinfo.value)
    with pytest.raises(UnknownQuestionTypeError):
        default_content_for("essay")


def test_display_label_falls_back_to_raw_tag():
    assert default_catalog.display_label("essay") == "essay"
    assert default_catalog.display_label("free_text") == label_for("free_text")


def test_match_default_is_not_savable_until_pairs_are_filled():
    content = default_content_for("match_image_text")
    result = validate("match_image_text", content)
    assert not result
    assert result.reason == INCOMPLETE_PAIR


def test_match_with_one_pair_is_insufficient():
    content = MatchImageTextContent(text="Match", pairs=[MatchPair(image="/a.png", text="a")])
    result = validate("match_image_text", content)
    assert result.reason == INSUFFICIENT_PAIRS


def test_match_with_blank_text_is_incomplete():
    content = MatchImageTextContent(
        text="Match",
        pairs=[MatchPair(image="/a.png", text="a"), MatchPair(image="/b.png", text="   ")],
    )
    assert validate("match_image_text", content).reason == INCOMPLETE_PAIR


def test_match_with_two_complete_pairs_is_valid():
    content = MatchImageTextContent(
        text="Match",
        pairs=[MatchPair(image="/a.png", text="a"), MatchPair(image="/b.png", text="b")],
    )
    assert validate("match_image_text", content).is_valid


def test_match_with_no_pairs_is_insufficient():
    content = MatchImageTextContent(text="Match", pairs=[])
    assert validate("match_image_text", content).reason == INSUFFICIENT_PAIRS


def test_validate_parses_mapping_content():
    pairs = [{"image": "/a.png", "text": "a"}, {"image": "/b.png", "text": "b"}]
    assert validate("match_image_text", {"pairs": pairs}).is_valid
    assert validate("match_image_text", {"pairs": []}).reason == INSUFFICIENT_PAIRS
    assert validate("match_image_text", {"pairs": pairs[:1] + [{"image": "/b.png"}]}).reason == INCOMPLETE_PAIR


def test_validate_rejects_content_of_another_type():
    with pytest.raises(TypeError):
        validate("match_image_text", default_content_for("mcq_single"))


def test_incomplete_pairs_lists_their_positions():
    content = MatchImageTextContent(
        pairs=[MatchPair(image="/a.png", text="a"), MatchPair(text="b"), MatchPair(image="/c.png")],
    )
    assert content.incomplete_pairs() == [1, 2]


def test_types_without_rules_always_validate():
    assert validate("free_text_upload", default_content_for("free_text_upload")).is_valid


def test_remove_pair_keeps_the_minimum():
    content = default_content_for("match_image_text")
    assert content.remove_pair(0) is False
    content.add_pair("/c.png", "c")
    assert content.remove_pair(0) is True
    assert len(content.pairs) == 2


def test_parse_content_drops_fields_of_other_types():
    content = default_catalog.parse_content(
        "order_words",
        {"text": "Order", "options": [{"text": "x"}], "words": ["b", "a"], "correctOrder": ["a", "b"]},
    )
    assert isinstance(content, OrderWordsContent)
    assert content.to_payload() == {"text": "Order", "words": ["b", "a"], "correctOrder": ["a", "b"]}


def test_parse_content_treats_null_values_as_missing():
    content = default_catalog.parse_content("free_text", {"text": None, "placeholder": None})
    assert content.to_payload() == {"text": "", "placeholder": ""}


def test_register_rejects_duplicates_and_foreign_models():
    catalog = QuestionTypeCatalog()
    entry = QuestionTypeEntry("mcq_single", "Single", McqSingleContent, McqSingleContent)
    catalog.register(entry)
    with pytest.raises(ValueError):
        catalog.register(entry)
    with pytest.raises(ValueError):
        catalog.register(QuestionTypeEntry("mcq_multiple", "Multiple", McqSingleContent, McqSingleContent))


def test_default_factory_must_build_the_registered_model():
    catalog = QuestionTypeCatalog(
        [QuestionTypeEntry("mcq_single", "Single", McqSingleContent, OrderWordsContent)]
    )
    with pytest.raises(TypeError):
        catalog.default_content_for("mcq_single")
