# Domain Package
from .exceptions import InvalidCardError, InvalidConfigError, InvalidRatingError, LexemeError
from .models import (
    GRADUATED,
    AtStep,
    Card,
    CardStatus,
    Graduated,
    LearningProgress,
    Rating,
    SchedulerConfig,
)
from .ports import RandomSource

__all__ = [
    "AtStep",
    "Card",
    "CardStatus",
    "GRADUATED",
    "Graduated",
    "InvalidCardError",
    "InvalidConfigError",
    "InvalidRatingError",
    "LearningProgress",
    "LexemeError",
    "RandomSource",
    "Rating",
    "SchedulerConfig",
]
