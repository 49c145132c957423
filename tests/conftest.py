import random
import sys
from pathlib import Path

# Ensure repo root import for tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from disk.blocks import decode_grid


class ScriptedRandom:
    """Random source that replays a fixed list of ``random()`` values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self.values):
            raise AssertionError(f"random() called more than {len(self.values)} times")
        value = self.values[self.calls]
        self.calls += 1
        return value

    @property
    def exhausted(self) -> bool:
        return self.calls == len(self.values)


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def grid():
    """Build a grid from its symbol encoding."""
    return decode_grid


@pytest.fixture(params=[0, 1, 7, 42, 2024])
def seeded_rng(request):
    return random.Random(request.param)
