"""lexeme CLI: configuration inspection and scheduling simulations."""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Annotated

import typer
from pydantic import ValidationError

from lexeme.application.card_factory import new_card
from lexeme.application.config import resolve_config
from lexeme.application.interval_model import ease_update, next_interval
from lexeme.application.scheduler import Scheduler
from lexeme.application.session import format_due
from lexeme.domain.exceptions import LexemeError
from lexeme.domain.models import Rating
from lexeme.infrastructure.random_source import FixedRandomSource, SeededRandomSource
from lexeme.interface.schemas import CardRecord, parse_rating

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="lexeme: spaced-repetition scheduling for vocabulary cards.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_VERBOSITY_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]

config_app = typer.Typer(help="Manage lexeme configuration.")
app.add_typer(config_app, name="config")


def humanize_error(error: Exception) -> str:
    """Turn validation failures into a one-line message for the terminal."""
    if isinstance(error, ValidationError):
        parts = []
        for err in error.errors():
            loc = ".".join(str(x) for x in err["loc"]) or "input"
            parts.append(f"{loc}: {err['msg']}")
        return "Invalid configuration: " + "; ".join(parts)
    return str(error)


def _load_settings(**overrides):
    try:
        return resolve_config(overrides)
    except ValidationError as e:
        typer.secho(humanize_error(e), fg="red", err=True)
        raise typer.Exit(2)


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for lexeme."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        level = _VERBOSITY_LEVELS[min(verbose, len(_VERBOSITY_LEVELS) - 1)]
    else:
        level = _load_settings().log_level
    logging.getLogger("lexeme").setLevel(level)


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def simulate(
    ratings: Annotated[
        list[str],
        typer.Argument(help="Ratings to apply in order: again, hard, good, easy (or 0-3)."),
    ],
    seed: Annotated[
        int | None, typer.Option(help="Seed the jitter for a reproducible run.")
    ] = None,
    no_jitter: Annotated[
        bool, typer.Option("--no-jitter", help="Disable due-date jitter.")
    ] = False,
    start: Annotated[
        str | None, typer.Option(help="ISO timestamp of the first review. Defaults to now (UTC).")
    ] = None,
):
    """[bold green]Simulate[/bold green] the schedule of a fresh card.

    Each rating is applied at the card's own due time, and one JSON line is
    printed per rating.
    """
    try:
        parsed = [parse_rating(r) for r in ratings]
        now = _parse_start(start)
    except LexemeError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(2)

    settings = _load_settings()
    config = settings.to_scheduler_config()

    if no_jitter:
        rng = FixedRandomSource(1.0)
    elif seed is not None:
        rng = SeededRandomSource(seed)
    else:
        rng = None
    scheduler = Scheduler(config, rng=rng)

    card = new_card("simulated", "simulated", now=now, card_id="simulated")
    for i, rating in enumerate(parsed, start=1):
        before = card
        card = scheduler.rate(card, rating, now)
        record = CardRecord.from_card(card)
        typer.echo(
            json.dumps(
                {
                    "review": i,
                    "rating": rating.name.lower(),
                    "from": before.status.value,
                    "status": record.status.value,
                    "learning_step": record.learning_step,
                    "interval": record.interval,
                    "ease": round(record.ease, 4),
                    "lapses": record.lapses,
                    "is_leech": record.is_leech,
                    "due": record.due.isoformat(),
                    "due_in": format_due(record.due, now),
                }
            )
        )
        now = card.due


@app.command()
def intervals(
    ease: Annotated[float | None, typer.Option(help="Starting ease factor.")] = None,
    reviews: Annotated[int, typer.Option(min=1, help="Number of successful reviews.")] = 8,
    rating: Annotated[str, typer.Option(help="Rating applied at every review.")] = "good",
):
    """Print the un-jittered Review interval growth for repeated ratings."""
    try:
        parsed = parse_rating(rating)
    except LexemeError as e:
        typer.secho(str(e), fg="red", err=True)
        raise typer.Exit(2)
    if parsed is Rating.AGAIN:
        typer.secho("Again lapses the card; pick hard, good or easy.", fg="yellow", err=True)
        raise typer.Exit(2)

    config = _load_settings().to_scheduler_config()
    current_ease = ease if ease is not None else config.initial_ease
    interval = 0

    typer.echo(f"{'rep':>4} {'ease':>6} {'interval':>9}")
    for rep in range(1, reviews + 1):
        current_ease = ease_update(current_ease, parsed, config.min_ease)
        interval = next_interval(rep, interval, current_ease, parsed)
        typer.echo(f"{rep:>4} {current_ease:>6.2f} {interval:>8}d")


def _parse_start(start: str | None) -> datetime:
    if start is None:
        return datetime.now(timezone.utc)
    try:
        parsed = datetime.fromisoformat(start)
    except ValueError as e:
        raise LexemeError(f"Invalid --start timestamp {start!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = _load_settings()
    typer.echo(json.dumps(config.model_dump(mode="json"), indent=2))


@config_app.command("path")
def config_path():
    """Show which config files are consulted, in priority order."""
    from lexeme.application.config import config_files

    for f in config_files():
        marker = "*" if f.exists() else " "
        typer.echo(f"{marker} {f}")


def main():
    app()


if __name__ == "__main__":
    main()
