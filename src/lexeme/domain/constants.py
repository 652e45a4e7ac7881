"""Centralized constants for the lexeme scheduler.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Session Quotas ----------
DAILY_NEW = 10
DAILY_REVIEWS = 120

# ---------- Learning Steps ----------
LEARNING_STEPS_MIN = (1, 10)  # minutes

# ---------- Ease Factor ----------
INITIAL_EASE = 2.5
MIN_EASE = 1.3

# ---------- Leeches ----------
LEECH_THRESHOLD = 8
LEECH_SUSPEND_DAYS = 3  # informational, never consumed by the scheduler

# ---------- Retrievability Targets (legacy) ----------
R_TARGET = {
    "again": 0.95,
    "hard": 0.90,
    "good": 0.85,
    "easy": 0.80,
}

# ---------- Interval Model ----------
HARD_INTERVAL_MODIFIER = 0.85
EASY_INTERVAL_MODIFIER = 1.15
FIRST_REVIEW_INTERVAL = 1  # days
SECOND_REVIEW_INTERVAL = 6  # days
JITTER_LOW = 0.85
JITTER_HIGH = 1.15
MIN_DUE_DAYS = 1
