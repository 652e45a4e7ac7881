from datetime import datetime, timedelta, timezone

import pytest

from lexeme.application.scheduler import Scheduler
from lexeme.domain.models import GRADUATED, AtStep, Card, CardStatus, SchedulerConfig
from lexeme.infrastructure.random_source import FixedRandomSource

NOW = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def config():
    return SchedulerConfig()


@pytest.fixture
def scheduler(config):
    """Scheduler with jitter disabled."""
    return Scheduler(config, rng=FixedRandomSource(1.0))


@pytest.fixture
def make_card(now):
    """Factory for cards in any state; learning cards default to step 0."""

    def _make(
        card_id: str = "c1",
        status: CardStatus = CardStatus.REVIEW,
        due: datetime | None = None,
        step: int | None = None,
        **fields,
    ) -> Card:
        if status.is_learning:
            progress = AtStep(step if step is not None else 0)
        else:
            progress = GRADUATED
        if status is CardStatus.REVIEW:
            fields.setdefault("interval", 1)
        return Card(
            id=card_id,
            source=f"word-{card_id}",
            translation=f"meaning-{card_id}",
            status=status,
            progress=progress,
            due=due if due is not None else now,
            **fields,
        )

    return _make


@pytest.fixture
def hours_ago(now):
    def _ago(h: float) -> datetime:
        return now - timedelta(hours=h)

    return _ago


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "LEXEME_DAILY_NEW",
        "LEXEME_DAILY_REVIEWS",
        "LEXEME_LEARNING_STEPS",
        "LEXEME_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    return home
