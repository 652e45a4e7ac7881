# Infrastructure Package
from .random_source import FixedRandomSource, SeededRandomSource, SystemRandomSource

__all__ = ["SystemRandomSource", "SeededRandomSource", "FixedRandomSource"]
