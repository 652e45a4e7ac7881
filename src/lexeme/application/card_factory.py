"""Creation of fresh vocabulary cards with stable ids."""

import logging
from datetime import datetime, timezone
from typing import Iterable

from ulid import ULID

from lexeme.domain.constants import INITIAL_EASE
from lexeme.domain.models import GRADUATED, Card, CardStatus

logger = logging.getLogger(__name__)


def generate_card_id() -> str:
    """Generate a stable card ID using ULID."""
    return f"card_{ULID()}"


def new_card(
    source: str,
    translation: str,
    tags: Iterable[str] = (),
    now: datetime | None = None,
    card_id: str | None = None,
    initial_ease: float = INITIAL_EASE,
) -> Card:
    """
    Build a New card with zeroed scheduling state.

    New cards are due immediately; the daily new-card quota decides when
    they are actually shown. `now` must be timezone-aware.
    """
    created = now or datetime.now(timezone.utc)
    card = Card(
        id=card_id or generate_card_id(),
        source=source,
        translation=translation,
        tags=tuple(tags),
        status=CardStatus.NEW,
        ease=initial_ease,
        interval=0,
        progress=GRADUATED,
        due=created,
    )
    logger.debug(f"Created card {card.id} for {source!r}")
    return card
