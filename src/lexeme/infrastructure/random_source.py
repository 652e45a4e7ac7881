"""RandomSource adapters backed by the standard library generator."""

import random

from lexeme.domain.ports import RandomSource


class SystemRandomSource(RandomSource):
    """
    Production source.

    Each instance owns its own `random.Random`, so schedulers never share
    generator state through the module-level functions.
    """

    def __init__(self, generator: random.Random | None = None):
        self._generator = generator or random.Random()

    def uniform(self, low: float, high: float) -> float:
        return self._generator.uniform(low, high)


class SeededRandomSource(SystemRandomSource):
    """Reproducible sequence for a given seed."""

    def __init__(self, seed: int):
        super().__init__(random.Random(seed))
        self.seed = seed


class FixedRandomSource(RandomSource):
    """
    Always returns the same factor, clamped into the requested range.

    FixedRandomSource(1.0) disables jitter.
    """

    def __init__(self, factor: float = 1.0):
        self.factor = factor

    def uniform(self, low: float, high: float) -> float:
        return min(high, max(low, self.factor))
