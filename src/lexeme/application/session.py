"""
Session-level statistics kept by the caller.

The scheduler does not track totals or accuracy; these helpers aggregate
them from the ratings a caller applies during one study session.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable

from lexeme.application.interval_model import round_half_up
from lexeme.domain.models import Card, CardStatus, Rating


@dataclass(frozen=True)
class SessionSummary:
    """
    Totals for one study session.

    Attributes:
        date: Day the session took place.
        total_reviewed: Number of ratings applied.
        correct: Ratings other than Again.
        incorrect: Again ratings.
        new_cards: Ratings applied to cards that were New.
        review_cards: Ratings applied to cards in Review.
        learning_cards: Ratings applied to Learning/Relearning cards.
        accuracy: Percentage of correct ratings, 0 when nothing was reviewed.
    """

    date: date
    total_reviewed: int
    correct: int
    incorrect: int
    new_cards: int
    review_cards: int
    learning_cards: int
    accuracy: int


@dataclass
class SessionTracker:
    """Accumulates ratings as they are applied during a session."""

    ratings: list[tuple[CardStatus, Rating]] = field(default_factory=list)

    def record(self, card_before: Card, rating: Rating) -> None:
        """Record a rating against the card's status *before* it was rated."""
        self.ratings.append((card_before.status, rating))

    def summary(self, day: date) -> SessionSummary:
        correct = sum(1 for _, r in self.ratings if r.is_success)
        total = len(self.ratings)
        accuracy = round_half_up(correct / total * 100) if total else 0

        return SessionSummary(
            date=day,
            total_reviewed=total,
            correct=correct,
            incorrect=total - correct,
            new_cards=sum(1 for s, _ in self.ratings if s is CardStatus.NEW),
            review_cards=sum(1 for s, _ in self.ratings if s is CardStatus.REVIEW),
            learning_cards=sum(1 for s, _ in self.ratings if s.is_learning),
            accuracy=accuracy,
        )


@dataclass(frozen=True)
class QueueBreakdown:
    """Count of queued cards per tier."""

    learning: int
    review: int
    new: int

    @property
    def total(self) -> int:
        return self.learning + self.review + self.new


def queue_breakdown(queue: Iterable[Card]) -> QueueBreakdown:
    learning = review = new = 0
    for card in queue:
        if card.status.is_learning:
            learning += 1
        elif card.status is CardStatus.REVIEW:
            review += 1
        else:
            new += 1
    return QueueBreakdown(learning=learning, review=review, new=new)


def format_due(due: datetime, now: datetime) -> str:
    """
    Human label for a due date relative to now.

    Day differences are floored, so anything due within the next 24 hours
    is "Today".
    """
    diff_days = math.floor((due - now).total_seconds() / 86400)

    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Tomorrow"
    if diff_days == -1:
        return "Yesterday"
    if diff_days < 0:
        return f"{abs(diff_days)}d overdue"
    return f"{diff_days}d"
