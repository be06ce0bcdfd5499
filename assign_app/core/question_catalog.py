"""Registry of question types: label, content model, default content and save rules.

The catalog is keyed by plain tag strings so new types can be registered
without touching the editor or the UI. Every lookup of an unregistered tag is
a programming error and raises :class:`UnknownQuestionTypeError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from assign_app.constants.question_constants import MIN_MATCH_PAIRS
from assign_app.core.models import QuestionType
from assign_app.core.question_content import (
    BreakWordContent,
    ChoiceOption,
    ComposeWordContent,
    ContentModel,
    DrawCircleMultipleContent,
    DrawCircleSingleContent,
    FillSentenceContent,
    FreeTextContent,
    FreeTextUploadContent,
    ListenRepeatContent,
    MatchImageTextContent,
    MatchPair,
    McqMultipleContent,
    McqSingleContent,
    OrderWordsContent,
    ReadQuestionContent,
    SelectImageTextContent,
    WriteWordsContent,
)

INSUFFICIENT_PAIRS = "insufficient pairs"
INCOMPLETE_PAIR = "incomplete pair"


class UnknownQuestionTypeError(KeyError):
    """Raised when a tag is not registered in the catalog."""

    def __init__(self, tag: str) -> None:
        super().__init__(tag)
        self.tag = tag

    def __str__(self) -> str:
        return f"Unknown question type: {self.tag!r}"


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of a save-time check; ``reason`` is a stable machine-readable code."""

    is_valid: bool
    reason: str | None = None
    message: str | None = None

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(is_valid=True)

    @classmethod
    def failure(cls, reason: str, message: str) -> ValidationResult:
        return cls(is_valid=False, reason=reason, message=message)

    def __bool__(self) -> bool:
        return self.is_valid


ContentValidator = Callable[[ContentModel], ValidationResult]


@dataclass(frozen=True, slots=True)
class QuestionTypeEntry:
    tag: str
    label: str
    content_model: type[ContentModel]
    default_factory: Callable[[], ContentModel]
    validator: ContentValidator | None = None


def _tag_key(tag: str | QuestionType) -> str:
    return tag.value if isinstance(tag, QuestionType) else str(tag)


class QuestionTypeCatalog:
    """Ordered registry of question types."""

    def __init__(self, entries: list[QuestionTypeEntry] | None = None) -> None:
        self._entries: dict[str, QuestionTypeEntry] = {}
        for entry in entries or []:
            self.register(entry)

    def register(self, entry: QuestionTypeEntry) -> None:
        key = _tag_key(entry.tag)
        if key in self._entries:
            raise ValueError(f"Question type {key!r} is already registered.")
        if entry.content_model.QUESTION_TYPE != key:
            raise ValueError(
                f"Content model {entry.content_model.__name__} belongs to "
                f"{entry.content_model.QUESTION_TYPE!r}, not {key!r}."
            )
        self._entries[key] = entry

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and _tag_key(tag) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def tags(self) -> list[str]:
        return list(self._entries)

    def entry(self, tag: str | QuestionType) -> QuestionTypeEntry:
        key = _tag_key(tag)
        try:
            return self._entries[key]
        except KeyError:
            raise UnknownQuestionTypeError(key) from None

    def label_for(self, tag: str | QuestionType) -> str:
        return self.entry(tag).label

    def display_label(self, tag: str) -> str:
        """Label for display of server data; unknown tags are shown verbatim."""
        if tag in self:
            return self.label_for(tag)
        return tag

    def content_model_for(self, tag: str | QuestionType) -> type[ContentModel]:
        return self.entry(tag).content_model

    def default_content_for(self, tag: str | QuestionType) -> ContentModel:
        """Return a freshly built default content value for ``tag``."""
        entry = self.entry(tag)
        content = entry.default_factory()
        if type(content) is not entry.content_model:
            raise TypeError(
                f"Default factory for {entry.tag!r} returned {type(content).__name__}."
            )
        return content

    def parse_content(self, tag: str | QuestionType, raw: Mapping[str, Any] | None) -> ContentModel:
        """Build typed content from API JSON, keeping only the type's own fields."""
        model = self.content_model_for(tag)
        cleaned = {key: value for key, value in (raw or {}).items() if value is not None}
        return model.model_validate(cleaned)

    def validate(
        self, tag: str | QuestionType, content: ContentModel | Mapping[str, Any]
    ) -> ValidationResult:
        """Check `content` against the type's save rule; mappings are parsed first."""
        entry = self.entry(tag)
        if isinstance(content, Mapping):
            content = self.parse_content(tag, content)
        elif not isinstance(content, entry.content_model):
            raise TypeError(
                f"Expected {entry.content_model.__name__} for {entry.tag!r}, "
                f"got {type(content).__name__}."
            )
        if entry.validator is None:
            return ValidationResult.ok()
        return entry.validator(content)


def validate_match_pairs(content: MatchImageTextContent) -> ValidationResult:
    """Match questions need at least two pairs, each with an image and a text."""
    if len(content.pairs) < MIN_MATCH_PAIRS:
        return ValidationResult.failure(
            INSUFFICIENT_PAIRS,
            f"Add at least {MIN_MATCH_PAIRS} picture/text pairs to a matching question.",
        )
    if content.incomplete_pairs():
        return ValidationResult.failure(
            INCOMPLETE_PAIR,
            "Every pair needs both an image and a text.",
        )
    return ValidationResult.ok()


def _options(*pairs: tuple[str, bool]) -> list[ChoiceOption]:
    return [ChoiceOption(text=text, is_correct=is_correct) for text, is_correct in pairs]


def _builtin_entries() -> list[QuestionTypeEntry]:
    return [
        QuestionTypeEntry(
            tag=QuestionType.MCQ_SINGLE.value,
            label="Choose the correct answer (single answer)",
            content_model=McqSingleContent,
            default_factory=lambda: McqSingleContent(
                text="What is the question?",
                options=_options(("Option 1", False), ("Option 2", True), ("Option 3", False)),
            ),
        ),
        QuestionTypeEntry(
            tag=QuestionType.MCQ_MULTIPLE.value,
            label="Choose the correct answers (two or more)",
            content_model=McqMultipleContent,
            default_factory=lambda: McqMultipleContent(
                text="What is the question?",
                options=_options(("Option 1", False), ("Option 2", True), ("Option 3", True)),
            ),
        ),
        QuestionTypeEntry(
            tag=QuestionType.MATCH_IMAGE_TEXT.value,
            label="Match picture to text",
            content_model=MatchImageTextContent,
            default_factory=lambda: MatchImageTextContent(
                text="Match each picture with the right text",
                pairs=[MatchPair(), MatchPair()],
            ),
            validator=validate_match_pairs,
        ),
        QuestionTypeEntry(
            tag=QuestionType.DRAW_CIRCLE_SINGLE.value,
            label="Circle the correct answer (single answer)",
            content_model=DrawCircleSingleContent,
            default_factory=lambda: DrawCircleSingleContent(
                text="Draw a circle around the correct answer",
                options=_options(("أ", True), ("ب", False), ("ج", False)),
            ),
        ),
        QuestionTypeEntry(
            tag=QuestionType.DRAW_CIRCLE_MULTIPLE.value,
            label="Circle the correct answers (two or more)",
            content_model=DrawCircleMultipleContent,
            default_factory=lambda: DrawCircleMultipleContent(
                text="Draw a circle around the correct answers",
                options=_options(("أ", True), ("ب", True), ("ج", False)),
            ),
        ),
        QuestionTypeEntry(
            tag=QuestionType.LISTEN_REPEAT.value,
            label="Listen and record",
            content_model=ListenRepeatContent,
            default_factory=lambda: ListenRepeatContent(
                text="Listen to the word and repeat it",
                audio_url="",
            ),
        ),
        QuestionTypeEntry(
            tag=QuestionType.BREAK_WORD.value,
            label="Break the word into letters",
            content_model=BreakWordContent,
            default_factory=lambda: BreakWordContent(
                text="Break the word into its letters",
                word="كتاب",
            ),
        ),
        QuestionTypeEntry(
            tag=QuestionType.COMPOSE_WORD.value,
            label="Compose the word",
            content_model=ComposeWordContent,
            default_factory=lambda: ComposeWordContent(
                text="Compose the word from these letters",
                letters=["ك", "ت", "ا", "ب"],
            ),
        ),
        QuestionTypeEntry(
            tag=QuestionType.WRITE_WORDS.value,
            label="Copy the words on paper and upload a photo",
            content_model=WriteWordsContent,
            default_factory=lambda: WriteWordsContent(
                text="Copy these words on paper, take a photo and upload it",
                words=["كتاب", "قلم", "مدرسة"],
            ),
        ),
        QuestionTypeEntry(
            tag=QuestionType.FILL_SENTENCE.value,
            label="Fill in the blank",
            content_model=FillSentenceContent,
            default_factory=lambda: FillSentenceContent(
                text="يذهب الطالب إلى .... كل يوم",
                options=_options(("المدرسة", True), ("الجبل", False), ("الحديقة", False)),
            ),
        ),
        QuestionTypeEntry(
            tag=QuestionType.ORDER_WORDS.value,
            label="Put the words in order to form a sentence",
            content_model=OrderWordsContent,
            default_factory=lambda: OrderWordsContent(
                text="Put the words in order to form a sentence",
                words=["الطالب", "يذهب", "إلى", "المدرسة"],
                correct_order=["الطالب", "يذهب", "إلى", "المدرسة"],
            ),
        ),
        QuestionTypeEntry(
            tag=QuestionType.SELECT_IMAGE_TEXT.value,
            label="Link picture to word",
            content_model=SelectImageTextContent,
            default_factory=lambda: SelectImageTextContent(
                text="Choose the right word for each picture",
                items=[],
                options=[],
            ),
        ),
        QuestionTypeEntry(
            tag=QuestionType.READ_QUESTION.value,
            label="Read the passage",
            content_model=ReadQuestionContent,
            default_factory=lambda: ReadQuestionContent(
                text="Read the following text",
                image_url="",
            ),
        ),
        QuestionTypeEntry(
            tag=QuestionType.FREE_TEXT.value,
            label="Free answer (typed)",
            content_model=FreeTextContent,
            default_factory=lambda: FreeTextContent(
                text="Write your answer here",
                placeholder="Type your answer…",
            ),
        ),
        QuestionTypeEntry(
            tag=QuestionType.FREE_TEXT_UPLOAD.value,
            label="Free answer (photo upload)",
            content_model=FreeTextUploadContent,
            default_factory=lambda: FreeTextUploadContent(
                text="Write the text on paper, take a photo and upload it",
            ),
        ),
    ]


default_catalog = QuestionTypeCatalog(_builtin_entries())


def default_content_for(tag: str | QuestionType) -> ContentModel:
    return default_catalog.default_content_for(tag)


def label_for(tag: str | QuestionType) -> str:
    return default_catalog.label_for(tag)


def validate(tag: str | QuestionType, content: ContentModel | Mapping[str, Any]) -> ValidationResult:
    return default_catalog.validate(tag, content)
