"""Seeded pseudo-random float stream.

Each generation run owns its own instance; nothing here is module-global.
"""
import math


class SeededRandom:
    """Counter-based sine hash: frac(sin(counter) * 10000), counter from seed.

    The same seed always yields the same infinite sequence.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self.counter = seed

    def next(self) -> float:
        """Next float in [0, 1)."""
        x = math.sin(self.counter) * 10000.0
        self.counter += 1
        f = x - math.floor(x)
        return f if f < 1.0 else 0.0

    def choice_index(self, n: int) -> int:
        """Uniform index in range(n)."""
        return int(math.floor(self.next() * n))
