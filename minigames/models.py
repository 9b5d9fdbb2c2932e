from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class _Model(BaseModel):
    # Definitions are persisted by the authoring tool with camelCase keys.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class UnitKind(StrEnum):
    quiz = "QUIZ"
    matching = "MATCHING"
    true_false = "TRUE_FALSE"
    flashcard = "FLASHCARD"
    sequence = "SEQUENCE"
    cloze = "CLOZE"
    scramble = "SCRAMBLE"
    mixed = "MIXED"


def parse_unit_kind(raw: object) -> UnitKind | None:
    """Return the matching UnitKind, or None for unknown tags."""

    try:
        return UnitKind(str(raw).strip().upper())
    except ValueError:
        return None


class Settings(_Model):
    time_limit_seconds: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("timeLimitSeconds", "timeLimit", "time_limit_seconds"),
    )
    randomize_order: bool = False
    allow_retry: bool = True
    case_sensitive: bool = False


class QuizItem(_Model):
    question: str
    options: list[str] = Field(..., min_length=2, max_length=8)
    correct_answer: str
    explanation: str | None = None

    @model_validator(mode="after")
    def _check_options(self) -> "QuizItem":
        if len(set(self.options)) != len(self.options):
            raise ValueError("quiz options must be unique")
        if self.correct_answer not in self.options:
            raise ValueError("correct answer must be one of the options")
        return self


class MatchingPair(_Model):
    id: str
    item_a: str
    item_b: str


class TrueFalseItem(_Model):
    statement: str
    is_true: bool
    correction: str | None = None


class FlashcardItem(_Model):
    front: str
    back: str


class SequenceItem(_Model):
    id: str
    text: str
    order: int = Field(..., ge=0)


class ClozeContent(_Model):
    text_parts: list[str]
    answers: list[str]

    @model_validator(mode="after")
    def _check_shape(self) -> "ClozeContent":
        if len(self.text_parts) != len(self.answers) + 1:
            raise ValueError("cloze text must have exactly one more text part than answers")
        return self


class ScrambleItem(_Model):
    word: str = Field(..., min_length=1)
    hint: str | None = None


# --- Unit payloads, in the shape the authoring tool stores them ---


class QuizData(_Model):
    items: list[QuizItem] = Field(..., min_length=1)


class MatchingData(_Model):
    pairs: list[MatchingPair] = Field(..., min_length=2)

    @model_validator(mode="after")
    def _check_ids(self) -> "MatchingData":
        ids = [p.id for p in self.pairs]
        if len(set(ids)) != len(ids):
            raise ValueError("matching pair ids must be unique")
        return self


class TrueFalseData(_Model):
    items: list[TrueFalseItem] = Field(..., min_length=1)


class FlashcardData(_Model):
    items: list[FlashcardItem] = Field(..., min_length=1)


class SequenceData(_Model):
    items: list[SequenceItem] = Field(..., min_length=1)
    question: str | None = None

    @model_validator(mode="after")
    def _check_orders(self) -> "SequenceData":
        if sorted(i.order for i in self.items) != list(range(len(self.items))):
            raise ValueError("sequence orders must be a dense 0-based permutation")
        if len({i.id for i in self.items}) != len(self.items):
            raise ValueError("sequence item ids must be unique")
        return self


class ClozeData(_Model):
    data: ClozeContent

    @model_validator(mode="before")
    @classmethod
    def _wrap_flat(cls, raw: Any) -> Any:
        # Accept both {"data": {...}} and a bare {"textParts": ..., "answers": ...}.
        if isinstance(raw, dict) and "data" not in raw:
            return {"data": raw}
        return raw

    @model_validator(mode="after")
    def _check_blanks(self) -> "ClozeData":
        if not self.data.answers:
            raise ValueError("cloze prompt has no blanks")
        return self


class ScrambleData(_Model):
    items: list[ScrambleItem] = Field(..., min_length=1)


class Stage(_Model):
    id: str
    kind: str = Field(..., validation_alias=AliasChoices("kind", "type"))
    title: str = ""
    data: Any = None


class GameDefinition(_Model):
    """What the authoring tool produced; immutable once a session loads it.

    `type` stays a plain string so unknown tags can still be played (as an
    unsupported stage) instead of failing validation up front.
    """

    type: str
    data: Any = None

    @property
    def kind(self) -> UnitKind | None:
        return parse_unit_kind(self.type)


class GameModule(_Model):
    """Catalog record for a published game."""

    id: str
    title: str
    description: str = ""
    category: str = ""
    game_type: str
    data: Any = None
    settings: Settings = Field(default_factory=Settings)
    author: str = ""
    author_id: str | None = None
    plays: int = 0
    likes: int = 0
    is_public: bool = False

    def definition(self) -> GameDefinition:
        return GameDefinition(type=self.game_type, data=self.data)
