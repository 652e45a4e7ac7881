"""
Error hierarchy for lexeme.

These are raised only at the boundaries (card/config construction and input
validation). The interval model and the scheduler never raise for
well-typed input.
"""


class LexemeError(Exception):
    """Base class for all lexeme errors."""


class InvalidCardError(LexemeError, ValueError):
    """A card's scheduling state violates a domain invariant."""


class InvalidConfigError(LexemeError, ValueError):
    """A scheduler configuration value is out of range."""


class InvalidRatingError(LexemeError, ValueError):
    """A rating is not one of Again, Hard, Good or Easy."""
