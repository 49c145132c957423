from __future__ import annotations
from typing import Protocol

class RandomSource(Protocol):
    """Anything with ``random() -> float`` in [0, 1); ``random.Random`` fits."""
    def random(self) -> float: ...

def uniform_int(rng: RandomSource, lo: int, hi: int) -> int:
    """Draw from [lo, hi) using a single ``rng.random()`` call."""
    return lo + int(rng.random() * (hi - lo))
