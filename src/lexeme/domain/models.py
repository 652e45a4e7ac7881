"""
Domain models for vocabulary scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Mapping

from .constants import (
    DAILY_NEW,
    DAILY_REVIEWS,
    INITIAL_EASE,
    LEARNING_STEPS_MIN,
    LEECH_SUSPEND_DAYS,
    LEECH_THRESHOLD,
    MIN_EASE,
    R_TARGET,
)
from .exceptions import InvalidCardError, InvalidConfigError


class CardStatus(str, Enum):
    """Which branch of the rating state machine applies to a card."""

    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    RELEARNING = "relearning"

    @property
    def is_learning(self) -> bool:
        return self in (CardStatus.LEARNING, CardStatus.RELEARNING)


class Rating(IntEnum):
    """Self-graded recall rating (0=Again, 1=Hard, 2=Good, 3=Easy)."""

    AGAIN = 0
    HARD = 1
    GOOD = 2
    EASY = 3

    @property
    def quality(self) -> int:
        """Position on the 1-5 SM-2 quality scale."""
        return _QUALITY[self]

    @property
    def is_success(self) -> bool:
        return self is not Rating.AGAIN


_QUALITY = {
    Rating.AGAIN: 1,
    Rating.HARD: 3,
    Rating.GOOD: 4,
    Rating.EASY: 5,
}


@dataclass(frozen=True)
class AtStep:
    """
    Card is inside the learning-step sequence.

    Attributes:
        index: Position in the configured learning steps. One past the end
            means the next successful rating graduates the card.
    """

    index: int

    def __post_init__(self):
        if self.index < 0:
            raise InvalidCardError(f"learning step index must be >= 0, got {self.index}")


@dataclass(frozen=True)
class Graduated:
    """Card is not in a learning-step sequence (New or Review)."""


GRADUATED = Graduated()

LearningProgress = AtStep | Graduated


@dataclass(frozen=True)
class Card:
    """
    A learner's knowledge of one vocabulary item.

    Identity and content are read-only for the scheduler; only the
    scheduling fields are ever replaced by it.

    Attributes:
        id: Opaque stable identifier, assigned once at creation.
        source: Word or phrase being learned.
        translation: Its meaning in the learner's language.
        tags: Free-form labels.
        status: Which branch of the rating state machine applies.
        repetitions: Successful Review ratings since the last lapse.
        lapses: Lifetime count of Review -> Relearning failures.
        ease: SM-2 ease factor.
        interval: Current spacing in whole days (Review only).
        progress: Learning-step position, or GRADUATED outside learning.
        due: When the card is next eligible.
        last_reviewed: Time of the most recent rating (audit only).
        correct_count: Lifetime successful ratings.
        incorrect_count: Lifetime Again ratings.
        is_leech: Sticky flag set once lapses reach the leech threshold.
    """

    id: str
    source: str
    translation: str
    due: datetime
    tags: tuple[str, ...] = ()
    status: CardStatus = CardStatus.NEW
    repetitions: int = 0
    lapses: int = 0
    ease: float = INITIAL_EASE
    interval: int = 0
    progress: LearningProgress = GRADUATED
    last_reviewed: datetime | None = None
    correct_count: int = 0
    incorrect_count: int = 0
    is_leech: bool = False

    def __post_init__(self):
        if self.status.is_learning and not isinstance(self.progress, AtStep):
            raise InvalidCardError(
                f"card {self.id}: status {self.status.value} requires a learning step"
            )
        if not self.status.is_learning and not isinstance(self.progress, Graduated):
            raise InvalidCardError(
                f"card {self.id}: status {self.status.value} cannot carry a learning step"
            )
        for name in ("repetitions", "lapses", "interval", "correct_count", "incorrect_count"):
            if getattr(self, name) < 0:
                raise InvalidCardError(f"card {self.id}: {name} must be >= 0")
        if self.status is CardStatus.NEW and self.repetitions != 0:
            raise InvalidCardError(f"card {self.id}: new cards cannot have repetitions")
        if self.status is CardStatus.REVIEW and self.interval < 1:
            raise InvalidCardError(f"card {self.id}: review cards need an interval of >= 1 day")
        for name in ("due", "last_reviewed"):
            value = getattr(self, name)
            if value is not None and (value.tzinfo is None or value.utcoffset() is None):
                raise InvalidCardError(f"card {self.id}: {name} must be timezone-aware")

    @property
    def learning_step(self) -> int | None:
        if isinstance(self.progress, AtStep):
            return self.progress.index
        return None


@dataclass(frozen=True)
class SchedulerConfig:
    """
    Immutable per-session scheduling configuration.

    `leech_suspend_days` and `retrievability_targets` are carried for
    completeness but are not consumed by the current algorithm.
    """

    daily_new: int = DAILY_NEW
    daily_reviews: int = DAILY_REVIEWS
    learning_steps: tuple[float, ...] = LEARNING_STEPS_MIN  # minutes
    initial_ease: float = INITIAL_EASE
    min_ease: float = MIN_EASE
    leech_threshold: int = LEECH_THRESHOLD
    leech_suspend_days: int = LEECH_SUSPEND_DAYS
    retrievability_targets: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType(dict(R_TARGET)), hash=False
    )

    def __post_init__(self):
        # Accept any sequence of steps but store a tuple
        object.__setattr__(self, "learning_steps", tuple(self.learning_steps))
        object.__setattr__(
            self, "retrievability_targets", MappingProxyType(dict(self.retrievability_targets))
        )

        if not self.learning_steps:
            raise InvalidConfigError("at least one learning step is required")
        if any(step <= 0 for step in self.learning_steps):
            raise InvalidConfigError("learning steps must be positive")
        if self.daily_new < 0 or self.daily_reviews < 0:
            raise InvalidConfigError("daily quotas must be >= 0")
        if self.min_ease <= 0:
            raise InvalidConfigError("min_ease must be positive")
        if self.initial_ease < self.min_ease:
            raise InvalidConfigError("initial_ease must not be below min_ease")
        if self.leech_threshold < 1:
            raise InvalidConfigError("leech_threshold must be >= 1")

    @property
    def first_step_delay(self) -> timedelta:
        return timedelta(minutes=self.learning_steps[0])

    def step_delay(self, index: int) -> timedelta | None:
        """Delay for a learning step, or None once the steps are exhausted."""
        if 0 <= index < len(self.learning_steps):
            return timedelta(minutes=self.learning_steps[index])
        return None
