# Application Package
from .card_factory import generate_card_id, new_card
from .interval_model import ease_update, initial_graduation_interval, jitter, next_interval
from .scheduler import Scheduler
from .session import QueueBreakdown, SessionSummary, SessionTracker, format_due, queue_breakdown

__all__ = [
    "QueueBreakdown",
    "Scheduler",
    "SessionSummary",
    "SessionTracker",
    "ease_update",
    "format_due",
    "generate_card_id",
    "initial_graduation_interval",
    "jitter",
    "new_card",
    "next_interval",
    "queue_breakdown",
]
