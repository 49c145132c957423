from __future__ import annotations
import random
from dataclasses import dataclass, field
from disk.randomness import RandomSource

@dataclass
class PacingScheduler:
    """Decides how long the driver waits before pulling the next step."""
    min_delay_ms: float = 500.0
    jitter_ms: float = 1000.0
    scale: float = 1.0
    rng: RandomSource = field(default_factory=random.Random)

    def next_delay_ms(self) -> float:
        if self.scale <= 0:
            return 0.0
        return (self.min_delay_ms + self.rng.random()*self.jitter_ms) * self.scale

    def next_delay(self) -> float:
        return self.next_delay_ms() / 1000.0
