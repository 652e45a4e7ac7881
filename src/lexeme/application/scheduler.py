"""
Scheduler for vocabulary study sessions.

Builds the daily session queue and applies recall ratings to cards:
1. Due Learning/Relearning cards, unbounded
2. Due Review cards, most overdue first, capped by the review quota
3. New cards in pool order, capped by the new-card quota

Neither operation reads the clock or mutates its input; callers pass `now`
and persist the returned cards themselves.
"""

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable, assert_never

from lexeme.application.interval_model import (
    ease_update,
    initial_graduation_interval,
    jitter,
    next_interval,
)
from lexeme.domain.models import GRADUATED, AtStep, Card, CardStatus, Rating, SchedulerConfig
from lexeme.domain.ports import RandomSource
from lexeme.infrastructure.random_source import SystemRandomSource

logger = logging.getLogger(__name__)


class Scheduler:
    """
    SM-2 scheduler with learning steps, leech detection and due-date jitter.

    Holds no mutable state of its own, so one instance can serve concurrent
    callers as long as each call works on its own card.
    """

    def __init__(
        self,
        config: SchedulerConfig | None = None,
        rng: RandomSource | None = None,
    ):
        """
        Args:
            config: Quotas, learning steps and ease bounds; defaults if omitted.
            rng: Source for interval jitter; a fresh system generator if omitted.
        """
        self.config = config or SchedulerConfig()
        self._rng = rng or SystemRandomSource()

    def build_queue(self, cards: Iterable[Card], now: datetime) -> list[Card]:
        """
        Build today's ordered session queue.

        Args:
            cards: The full card pool, in storage order.
            now: Current time supplied by the caller.

        Returns:
            Learning cards, then review cards, then new cards.
        """
        pool = list(cards)

        learning_due = [c for c in pool if c.status.is_learning and c.due <= now]

        review_due = [c for c in pool if c.status is CardStatus.REVIEW and c.due <= now]
        # sorted() is stable, so equally overdue cards keep pool order
        review_due = sorted(review_due, key=lambda c: now - c.due, reverse=True)
        review_due = review_due[: self.config.daily_reviews]

        new_cards = [c for c in pool if c.status is CardStatus.NEW]
        new_cards = new_cards[: self.config.daily_new]

        logger.debug(
            f"Queue built: {len(learning_due)} learning, "
            f"{len(review_due)} review, {len(new_cards)} new (pool={len(pool)})"
        )
        return learning_due + review_due + new_cards

    def rate(self, card: Card, rating: Rating, now: datetime) -> Card:
        """
        Apply a recall rating and return the card's next state.

        The input card is left untouched.
        """
        status = card.status
        if status is CardStatus.NEW:
            updated = self._rate_new(card, rating, now)
        elif status is CardStatus.LEARNING or status is CardStatus.RELEARNING:
            updated = self._rate_learning(card, rating, now)
        elif status is CardStatus.REVIEW:
            updated = self._rate_review(card, rating, now)
        else:
            assert_never(status)
        return self._flag_leech(updated)

    def _flag_leech(self, card: Card) -> Card:
        """Set the sticky leech flag whenever lapses have reached the threshold."""
        if card.is_leech or card.lapses < self.config.leech_threshold:
            return card
        logger.info(f"Card {card.id} marked as leech after {card.lapses} lapses")
        return replace(card, is_leech=True)

    def _rate_new(self, card: Card, rating: Rating, now: datetime) -> Card:
        """First exposure: the card enters the first learning step."""
        return replace(
            card,
            status=CardStatus.LEARNING,
            progress=AtStep(0),
            due=now + self.config.first_step_delay,
            last_reviewed=now,
            **self._outcome_counts(card, rating),
        )

    def _rate_learning(self, card: Card, rating: Rating, now: datetime) -> Card:
        if rating is Rating.AGAIN:
            return replace(
                card,
                progress=AtStep(0),
                due=now + self.config.first_step_delay,
                incorrect_count=card.incorrect_count + 1,
                last_reviewed=now,
            )

        current = card.progress.index if isinstance(card.progress, AtStep) else 0
        next_index = current + 1
        delay = self.config.step_delay(next_index)

        if delay is not None:
            return replace(
                card,
                progress=AtStep(next_index),
                due=now + delay,
                correct_count=card.correct_count + 1,
                last_reviewed=now,
            )

        interval = initial_graduation_interval(rating)
        logger.debug(f"Card {card.id} graduated to review with interval {interval}d")
        return replace(
            card,
            status=CardStatus.REVIEW,
            repetitions=0,
            progress=GRADUATED,
            interval=interval,
            ease=self.config.initial_ease,
            due=now + timedelta(days=interval),
            correct_count=card.correct_count + 1,
            last_reviewed=now,
        )

    def _rate_review(self, card: Card, rating: Rating, now: datetime) -> Card:
        if rating is Rating.AGAIN:
            lapses = card.lapses + 1
            logger.debug(f"Card {card.id} lapsed (lapses={lapses})")
            return replace(
                card,
                status=CardStatus.RELEARNING,
                lapses=lapses,
                repetitions=0,
                interval=0,
                progress=AtStep(0),
                due=now + self.config.first_step_delay,
                incorrect_count=card.incorrect_count + 1,
                last_reviewed=now,
            )

        repetitions = card.repetitions + 1
        ease = ease_update(card.ease, rating, self.config.min_ease)
        interval = next_interval(repetitions, card.interval, ease, rating)
        # Only the due date is jittered; the stored interval stays exact
        days_ahead = jitter(interval, self._rng)

        return replace(
            card,
            repetitions=repetitions,
            ease=ease,
            interval=interval,
            due=now + timedelta(days=days_ahead),
            correct_count=card.correct_count + 1,
            last_reviewed=now,
        )

    @staticmethod
    def _outcome_counts(card: Card, rating: Rating) -> dict[str, int]:
        if rating.is_success:
            return {"correct_count": card.correct_count + 1}
        return {"incorrect_count": card.incorrect_count + 1}
