"""Shape-based classification of student answers for display.

Answer records carry no type tag; the fields present decide how an answer is
shown. The rules are evaluated in a fixed order and the first match wins, so an
answer with both ``text`` and ``imageUrl`` is always rendered as text.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable

from assign_app.constants.review_constants import UNKNOWN_ANSWER_PLACEHOLDER


class RenderStrategy(Enum):
    TEXT = auto()
    CHOICE_LIST = auto()
    IMAGE = auto()
    AUDIO = auto()
    MATCH_COUNT = auto()
    ORDERED_WORDS = auto()
    LETTERS = auto()
    UNKNOWN = auto()


def _has_value(value: Any) -> bool:
    """Non-empty scalar: rejects None, False, empty strings, zero and NaN."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == value and value != 0
    return True


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


@dataclass(frozen=True, slots=True)
class AnswerShapeRule:
    field: str
    strategy: RenderStrategy
    predicate: Callable[[Any], bool]

    def matches(self, answer: Mapping[str, Any]) -> bool:
        return self.field in answer and self.predicate(answer[self.field])


ANSWER_SHAPE_RULES: tuple[AnswerShapeRule, ...] = (
    AnswerShapeRule("text", RenderStrategy.TEXT, _has_value),
    AnswerShapeRule("selectedOptions", RenderStrategy.CHOICE_LIST, _is_list),
    AnswerShapeRule("imageUrl", RenderStrategy.IMAGE, _has_value),
    AnswerShapeRule("audioUrl", RenderStrategy.AUDIO, _has_value),
    AnswerShapeRule("matches", RenderStrategy.MATCH_COUNT, _is_list),
    AnswerShapeRule("orderedWords", RenderStrategy.ORDERED_WORDS, _is_list),
    AnswerShapeRule("letters", RenderStrategy.LETTERS, _is_list),
)


def _first_matching_rule(answer: Any) -> AnswerShapeRule | None:
    if not isinstance(answer, Mapping):
        return None
    for rule in ANSWER_SHAPE_RULES:
        if rule.matches(answer):
            return rule
    return None


def classify(answer: Any) -> RenderStrategy:
    """Return the render strategy for ``answer``; never raises."""
    rule = _first_matching_rule(answer)
    return rule.strategy if rule else RenderStrategy.UNKNOWN


@dataclass(frozen=True, slots=True)
class AnswerView:
    """Display-ready form of an answer."""

    strategy: RenderStrategy
    text: str
    media_url: str | None = None


def resolve_media_url(path: str, base_url: str | None) -> str:
    """Turn a stored media path into an absolute URL on the API host."""
    if path.startswith("http") or not base_url:
        return path
    relative = path[1:] if path.startswith("/") else path
    return f"{base_url.rstrip('/')}/{relative}"


def _join(values: Any, separator: str) -> str:
    return separator.join(str(value) for value in values)


def describe_answer(answer: Any, base_url: str | None = None) -> AnswerView:
    """Classify ``answer`` and format it for a table cell or a preview."""
    rule = _first_matching_rule(answer)
    if rule is None:
        return AnswerView(RenderStrategy.UNKNOWN, UNKNOWN_ANSWER_PLACEHOLDER)

    value = answer[rule.field]
    strategy = rule.strategy
    if strategy is RenderStrategy.TEXT:
        return AnswerView(strategy, str(value))
    if strategy is RenderStrategy.CHOICE_LIST:
        return AnswerView(strategy, _join(value, ", "))
    if strategy in (RenderStrategy.IMAGE, RenderStrategy.AUDIO):
        url = resolve_media_url(str(value), base_url)
        return AnswerView(strategy, url, media_url=url)
    if strategy is RenderStrategy.MATCH_COUNT:
        count = len(value)
        return AnswerView(strategy, f"{count} match" if count == 1 else f"{count} matches")
    return AnswerView(strategy, _join(value, " "))
