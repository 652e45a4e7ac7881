"""
Ports (interfaces) for collaborators injected into the scheduler.

Application code depends on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod


class RandomSource(ABC):
    """
    Port for the randomness used by interval jitter.

    Implementations:
        - SystemRandomSource: Private `random.Random` instance.
        - SeededRandomSource: Reproducible sequence for a given seed.
        - FixedRandomSource: Constant factor, for deterministic tests.
    """

    @abstractmethod
    def uniform(self, low: float, high: float) -> float:
        """
        Return a float in the closed range [low, high].
        """
        pass
