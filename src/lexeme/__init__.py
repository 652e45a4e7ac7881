"""lexeme: spaced-repetition scheduling for vocabulary cards."""

from lexeme.consts import VERSION

__version__ = VERSION
