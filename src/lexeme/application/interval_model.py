"""
Interval model for SM-2 style scheduling.

This is a pure computation module with no I/O and no shared state.
"""

import math

from lexeme.domain.constants import (
    EASY_INTERVAL_MODIFIER,
    FIRST_REVIEW_INTERVAL,
    HARD_INTERVAL_MODIFIER,
    JITTER_HIGH,
    JITTER_LOW,
    MIN_DUE_DAYS,
    MIN_EASE,
    SECOND_REVIEW_INTERVAL,
)
from lexeme.domain.models import Rating
from lexeme.domain.ports import RandomSource


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def ease_update(old_ease: float, rating: Rating, min_ease: float = MIN_EASE) -> float:
    """
    Apply the SM-2 ease adjustment for a rating.

    EF' = max(min_ease, EF + (0.1 - (3 - q) * (0.08 + (3 - q) * 0.02)))
    where q is the rating on the 1-5 quality scale.
    """
    q = rating.quality
    return max(min_ease, old_ease + (0.1 - (3 - q) * (0.08 + (3 - q) * 0.02)))


def next_interval(repetitions: int, old_interval: int, ease: float, rating: Rating) -> int:
    """
    Compute the un-jittered Review interval in days.

    First repetition after graduation is 1 day, the second 6 days, and from
    the third on the old interval grows by the ease factor.
    """
    if repetitions == 1:
        return FIRST_REVIEW_INTERVAL
    if repetitions == 2:
        return SECOND_REVIEW_INTERVAL

    modifier = 1.0
    if rating is Rating.HARD:
        modifier = HARD_INTERVAL_MODIFIER
    elif rating is Rating.EASY:
        modifier = EASY_INTERVAL_MODIFIER
    return round_half_up(old_interval * ease * modifier)


def initial_graduation_interval(rating: Rating) -> int:
    """Interval assigned when a card leaves Learning/Relearning."""
    if rating is Rating.HARD:
        return 1
    if rating is Rating.EASY:
        return 4
    return 2


def jitter(days: int, rng: RandomSource) -> int:
    """
    Spread a due date by a uniform factor in [0.85, 1.15].

    The result is floored at one day.
    """
    factor = rng.uniform(JITTER_LOW, JITTER_HIGH)
    return max(MIN_DUE_DAYS, round_half_up(days * factor))
