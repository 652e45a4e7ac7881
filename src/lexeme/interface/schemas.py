"""
Validating boundary between plain records and domain cards.

Malformed input (unknown statuses, out-of-range ratings, naive timestamps,
learning cards without a step) is rejected here so the scheduler only ever
sees well-formed cards.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from lexeme.domain.constants import INITIAL_EASE
from lexeme.domain.exceptions import InvalidRatingError
from lexeme.domain.models import GRADUATED, AtStep, Card, CardStatus, Rating

_RATING_NAMES = {r.name.lower(): r for r in Rating}


def parse_rating(value: Any) -> Rating:
    """
    Coerce user input into a Rating.

    Accepts 0-3 (as int or digit string) or a case-insensitive name.
    """
    if isinstance(value, Rating):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _RATING_NAMES:
            return _RATING_NAMES[text]
        if text.isdigit():
            value = int(text)
    if isinstance(value, int) and not isinstance(value, bool):
        try:
            return Rating(value)
        except ValueError:
            pass
    raise InvalidRatingError(
        f"Invalid rating {value!r}: expected 0-3 or one of {', '.join(_RATING_NAMES)}"
    )


class RatingRequest(BaseModel):
    card_id: str
    rating: Rating
    reviewed_at: datetime

    @field_validator("rating", mode="before")
    @classmethod
    def coerce_rating(cls, v: Any) -> Rating:
        try:
            return parse_rating(v)
        except InvalidRatingError as e:
            raise ValueError(str(e)) from e

    @field_validator("reviewed_at")
    @classmethod
    def require_timezone(cls, v: datetime) -> datetime:
        return _require_aware(v)


class CardRecord(BaseModel):
    """Card as a plain record, e.g. a row handed over by a storage layer."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)
    source: str
    translation: str
    tags: list[str] = Field(default_factory=list)

    status: CardStatus = CardStatus.NEW
    repetitions: int = Field(default=0, ge=0)
    lapses: int = Field(default=0, ge=0)
    ease: float = Field(default=INITIAL_EASE, gt=0)
    interval: int = Field(default=0, ge=0)
    learning_step: int | None = Field(default=None, ge=0)
    due: datetime
    last_reviewed: datetime | None = None
    correct_count: int = Field(default=0, ge=0)
    incorrect_count: int = Field(default=0, ge=0)
    is_leech: bool = False

    @field_validator("due", "last_reviewed")
    @classmethod
    def require_timezone(cls, v: datetime | None) -> datetime | None:
        if v is None:
            return None
        return _require_aware(v)

    @model_validator(mode="after")
    def check_status_fields(self) -> "CardRecord":
        if self.status.is_learning and self.learning_step is None:
            raise ValueError(f"status '{self.status.value}' requires learning_step")
        if not self.status.is_learning and self.learning_step is not None:
            raise ValueError(f"status '{self.status.value}' must not set learning_step")
        if self.status is CardStatus.NEW and self.repetitions != 0:
            raise ValueError("status 'new' requires repetitions = 0")
        if self.status is CardStatus.REVIEW and self.interval < 1:
            raise ValueError("status 'review' requires interval >= 1")
        return self

    def to_card(self) -> Card:
        progress = AtStep(self.learning_step) if self.learning_step is not None else GRADUATED
        return Card(
            id=self.id,
            source=self.source,
            translation=self.translation,
            tags=tuple(self.tags),
            status=self.status,
            repetitions=self.repetitions,
            lapses=self.lapses,
            ease=self.ease,
            interval=self.interval,
            progress=progress,
            due=self.due,
            last_reviewed=self.last_reviewed,
            correct_count=self.correct_count,
            incorrect_count=self.incorrect_count,
            is_leech=self.is_leech,
        )

    @classmethod
    def from_card(cls, card: Card) -> "CardRecord":
        return cls(
            id=card.id,
            source=card.source,
            translation=card.translation,
            tags=list(card.tags),
            status=card.status,
            repetitions=card.repetitions,
            lapses=card.lapses,
            ease=card.ease,
            interval=card.interval,
            learning_step=card.learning_step,
            due=card.due,
            last_reviewed=card.last_reviewed,
            correct_count=card.correct_count,
            incorrect_count=card.incorrect_count,
            is_leech=card.is_leech,
        )


def _require_aware(v: datetime) -> datetime:
    if v.tzinfo is None or v.utcoffset() is None:
        raise ValueError("timestamp must include a timezone offset")
    return v
