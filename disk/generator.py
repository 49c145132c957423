from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Optional, Tuple
from disk.blocks import BLOCK_COUNT, BlockGrid, BlockState
from disk.randomness import RandomSource, uniform_int

Range = Tuple[int, int]   # half-open [lo, hi)

@dataclass(frozen=True)
class GridProfile:
    block_count: int = BLOCK_COUNT
    unmovable_start: Range = (90, 140)
    unmovable_length: Range = (12, 22)
    # (upper position bound, data probability), checked in order
    density_bands: Tuple[Tuple[int, float], ...] = ((80, 0.75), (180, 0.45))
    tail_density: float = 0.2
    fragmented_share: float = 0.75
    fragmented_run: Range = (1, 4)
    contiguous_run: Range = (1, 6)
    gap_split: int = 100
    near_gap: Range = (1, 6)
    far_gap: Range = (1, 16)

    def data_probability(self, pos: int) -> float:
        for bound, p in self.density_bands:
            if pos < bound:
                return p
        return self.tail_density

DEFAULT_PROFILE = GridProfile()

def generate(rng: Optional[RandomSource] = None, profile: GridProfile = DEFAULT_PROFILE) -> BlockGrid:
    """Build one synthetic fragmented disk.

    Data is dense near the start and thins out to the right, with a single
    unmovable cluster somewhere in the middle. All randomness comes from
    ``rng.random()`` so a scripted source pins the output exactly.
    """
    rng = rng if rng is not None else random.Random()
    n = profile.block_count
    grid = [BlockState.FREE] * n

    start = uniform_int(rng, *profile.unmovable_start)
    length = uniform_int(rng, *profile.unmovable_length)
    for i in range(start, min(start + length, n)):
        grid[i] = BlockState.UNMOVABLE

    pos = 0
    while pos < n:
        if grid[pos] is BlockState.UNMOVABLE:
            pos += 1
            continue

        if rng.random() < profile.data_probability(pos):
            if rng.random() < profile.fragmented_share:
                state, run = BlockState.FRAGMENTED, profile.fragmented_run
            else:
                state, run = BlockState.CONTIGUOUS, profile.contiguous_run
            run_len = uniform_int(rng, *run)
            for j in range(pos, min(pos + run_len, n)):
                if grid[j] is BlockState.UNMOVABLE:
                    break
                grid[j] = state
            pos += run_len
        else:
            gap = profile.near_gap if pos < profile.gap_split else profile.far_gap
            pos += uniform_int(rng, *gap)

    return grid
