"""Tests for the validating input boundary."""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from lexeme.domain.exceptions import InvalidRatingError
from lexeme.domain.models import GRADUATED, AtStep, CardStatus, Rating
from lexeme.interface.schemas import CardRecord, RatingRequest, parse_rating

DUE = "2024-01-01T10:00:00+00:00"


def _record(**fields):
    data = {"id": "c1", "source": "σπίτι", "translation": "house", "due": DUE}
    data.update(fields)
    return data


# ---------- Ratings ----------


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, Rating.AGAIN),
        (3, Rating.EASY),
        ("2", Rating.GOOD),
        ("Hard", Rating.HARD),
        (" easy ", Rating.EASY),
        (Rating.GOOD, Rating.GOOD),
    ],
)
def test_parse_rating(value, expected):
    assert parse_rating(value) is expected


@pytest.mark.parametrize("value", [4, -1, "5", "meh", None, True, 2.0])
def test_parse_rating_rejects(value):
    with pytest.raises(InvalidRatingError):
        parse_rating(value)


def test_rating_request():
    req = RatingRequest(card_id="c1", rating="good", reviewed_at=DUE)
    assert req.rating is Rating.GOOD


def test_rating_request_out_of_range():
    with pytest.raises(ValidationError):
        RatingRequest(card_id="c1", rating=7, reviewed_at=DUE)


def test_rating_request_naive_timestamp():
    with pytest.raises(ValidationError):
        RatingRequest(card_id="c1", rating=1, reviewed_at="2024-01-01T10:00:00")


# ---------- Cards ----------


def test_new_card_record_to_card():
    card = CardRecord(**_record(tags=["house"])).to_card()

    assert card.status is CardStatus.NEW
    assert card.progress is GRADUATED
    assert card.tags == ("house",)
    assert card.due == datetime(2024, 1, 1, 10, tzinfo=timezone.utc)


def test_learning_record_to_card():
    card = CardRecord(**_record(status="relearning", learning_step=1, lapses=2)).to_card()

    assert card.status is CardStatus.RELEARNING
    assert card.progress == AtStep(1)
    assert card.lapses == 2


@pytest.mark.parametrize(
    "fields",
    [
        {"status": "suspended"},
        {"status": "learning"},
        {"status": "review", "learning_step": 0, "interval": 3},
        {"status": "review", "repetitions": 4, "interval": 0},
        {"status": "new", "repetitions": 5},
        {"learning_step": -1, "status": "learning"},
        {"lapses": -1},
        {"ease": 0},
        {"due": "2024-01-01T10:00:00"},
        {"id": ""},
    ],
)
def test_malformed_records_rejected(fields):
    with pytest.raises(ValidationError):
        CardRecord(**_record(**fields))


def test_review_record_keeps_interval_after_good(scheduler, now):
    card = CardRecord(**_record(status="review", repetitions=4, interval=3)).to_card()

    updated = scheduler.rate(card, Rating.GOOD, now)

    assert updated.status is CardStatus.REVIEW
    assert updated.interval >= 1


def test_record_past_leech_threshold_is_flagged_on_rating(scheduler, now):
    card = CardRecord(**_record(status="review", lapses=8, interval=5, repetitions=2)).to_card()
    assert card.is_leech is False

    updated = scheduler.rate(card, Rating.GOOD, now)

    assert updated.is_leech is True
    assert updated.lapses == 8


def test_extra_fields_ignored():
    record = CardRecord(**_record(owner="someone"))
    assert not hasattr(record, "owner")


def test_from_card_preserves_state(scheduler, make_card, now):
    card = scheduler.rate(make_card(status=CardStatus.REVIEW, interval=5), Rating.AGAIN, now)

    record = CardRecord.from_card(card)

    assert record.status is CardStatus.RELEARNING
    assert record.learning_step == 0
    assert record.last_reviewed == now
    assert record.due == now + timedelta(minutes=1)
    assert record.to_card() == card
