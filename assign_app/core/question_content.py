"""Typed content models for every question type.

Each question type owns exactly one model, so an editor can never hold content
whose shape disagrees with its type. The type tag is a class attribute rather
than a field: the serialized content is exactly what the API stores under
``question.content``.
"""

from __future__ import annotations

from typing import ClassVar, Union

from pydantic import BaseModel, ConfigDict, Field

from assign_app.constants.question_constants import MIN_MATCH_PAIRS


class ContentModel(BaseModel):
    """Base class for question content; every type has a prompt ``text``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", validate_assignment=True)

    QUESTION_TYPE: ClassVar[str] = ""

    text: str = ""

    def to_payload(self) -> dict[str, object]:
        """Serialize using the API's field names."""
        return self.model_dump(by_alias=True, mode="json")


class ChoiceOption(BaseModel):
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    text: str = ""
    is_correct: bool = False


class MatchPair(BaseModel):
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    image: str = ""
    text: str = ""

    def is_complete(self) -> bool:
        return bool(self.image.strip()) and bool(self.text.strip())


class SelectImageItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", validate_assignment=True)

    image: str = ""
    correct_text: str = Field(default="", alias="correctText")


class ChoiceContent(ContentModel):
    """Prompt plus a list of options, any of which may be marked correct."""

    options: list[ChoiceOption] = Field(default_factory=list)

    def add_option(self, text: str = "", is_correct: bool = False) -> ChoiceOption:
        option = ChoiceOption(text=text, is_correct=is_correct)
        self.options.append(option)
        return option

    def remove_option(self, index: int) -> bool:
        if not 0 <= index < len(self.options):
            return False
        self.options.pop(index)
        return True


class McqSingleContent(ChoiceContent):
    QUESTION_TYPE: ClassVar[str] = "mcq_single"


class McqMultipleContent(ChoiceContent):
    QUESTION_TYPE: ClassVar[str] = "mcq_multiple"


class DrawCircleSingleContent(ChoiceContent):
    QUESTION_TYPE: ClassVar[str] = "draw_circle_single"


class DrawCircleMultipleContent(ChoiceContent):
    QUESTION_TYPE: ClassVar[str] = "draw_circle_multiple"


class FillSentenceContent(ChoiceContent):
    QUESTION_TYPE: ClassVar[str] = "fill_sentence"


class MatchImageTextContent(ContentModel):
    """Picture/text pairs the student has to connect."""

    QUESTION_TYPE: ClassVar[str] = "match_image_text"

    pairs: list[MatchPair] = Field(default_factory=list)

    def add_pair(self, image: str = "", text: str = "") -> MatchPair:
        pair = MatchPair(image=image, text=text)
        self.pairs.append(pair)
        return pair

    def remove_pair(self, index: int) -> bool:
        """Remove a pair unless that would leave fewer than the minimum."""
        if len(self.pairs) <= MIN_MATCH_PAIRS or not 0 <= index < len(self.pairs):
            return False
        self.pairs.pop(index)
        return True

    def incomplete_pairs(self) -> list[int]:
        return [index for index, pair in enumerate(self.pairs) if not pair.is_complete()]


class ListenRepeatContent(ContentModel):
    QUESTION_TYPE: ClassVar[str] = "listen_repeat"

    audio_url: str = Field(default="", alias="audioUrl")


class BreakWordContent(ContentModel):
    QUESTION_TYPE: ClassVar[str] = "break_word"

    word: str = ""


class ComposeWordContent(ContentModel):
    QUESTION_TYPE: ClassVar[str] = "compose_word"

    letters: list[str] = Field(default_factory=list)


class WriteWordsContent(ContentModel):
    QUESTION_TYPE: ClassVar[str] = "write_words"

    words: list[str] = Field(default_factory=list)


class OrderWordsContent(ContentModel):
    QUESTION_TYPE: ClassVar[str] = "order_words"

    words: list[str] = Field(default_factory=list)
    correct_order: list[str] = Field(default_factory=list, alias="correctOrder")


class SelectImageTextContent(ContentModel):
    """Pictures with a drop-down of candidate words."""

    QUESTION_TYPE: ClassVar[str] = "select_image_text"

    items: list[SelectImageItem] = Field(default_factory=list)
    options: list[str] = Field(default_factory=list)

    def add_item(self, image: str = "", correct_text: str = "") -> SelectImageItem:
        item = SelectImageItem(image=image, correct_text=correct_text)
        self.items.append(item)
        return item


class ReadQuestionContent(ContentModel):
    QUESTION_TYPE: ClassVar[str] = "read_question"

    image_url: str = Field(default="", alias="imageUrl")


class FreeTextContent(ContentModel):
    QUESTION_TYPE: ClassVar[str] = "free_text"

    placeholder: str = ""


class FreeTextUploadContent(ContentModel):
    QUESTION_TYPE: ClassVar[str] = "free_text_upload"


QuestionContent = Union[
    McqSingleContent,
    McqMultipleContent,
    MatchImageTextContent,
    DrawCircleSingleContent,
    DrawCircleMultipleContent,
    ListenRepeatContent,
    BreakWordContent,
    ComposeWordContent,
    WriteWordsContent,
    FillSentenceContent,
    OrderWordsContent,
    SelectImageTextContent,
    ReadQuestionContent,
    FreeTextContent,
    FreeTextUploadContent,
]
