from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Iterable, List, Optional
from disk.blocks import BlockGrid, BlockState
from disk.randomness import RandomSource

@dataclass(frozen=True)
class Move:
    target: int   # free slot that receives the block
    source: int   # fragmented block that was picked up

    @property
    def distance(self) -> int:
        return self.source - self.target

class DefragStepper:
    """Pull-based defrag: every ``next()`` relocates one fragmented block.

    The stepper works on a private copy of the grid and yields independent
    snapshots. Candidates right of the first free slot are picked at random
    rather than nearest-first, which gives the jumpy seek pattern.
    Abandoning the iterator half way needs no cleanup.
    """
    def __init__(self, grid: Iterable[BlockState], rng: Optional[RandomSource] = None):
        self._grid: List[BlockState] = list(grid)
        self.rng = rng if rng is not None else random.Random()
        self.steps = 0
        self.last_move: Optional[Move] = None
        self._done = False

    @property
    def grid(self) -> BlockGrid:
        return list(self._grid)

    @property
    def done(self) -> bool:
        return self._done

    def __iter__(self) -> DefragStepper:
        return self

    def __next__(self) -> BlockGrid:
        if self._done:
            raise StopIteration
        move = self._next_move()
        if move is None:
            self._done = True
            raise StopIteration
        g = self._grid
        g[move.target] = BlockState.CONTIGUOUS
        g[move.source] = BlockState.FREE
        self.steps += 1
        self.last_move = move
        return list(g)

    def _next_move(self) -> Optional[Move]:
        g = self._grid
        try:
            free_idx = g.index(BlockState.FREE)
        except ValueError:
            return None
        candidates = [i for i in range(free_idx + 1, len(g)) if g[i] is BlockState.FRAGMENTED]
        if not candidates:
            return None
        pick = candidates[int(self.rng.random() * len(candidates))]
        return Move(free_idx, pick)

def stepper(grid: Iterable[BlockState], rng: Optional[RandomSource] = None) -> DefragStepper:
    return DefragStepper(grid, rng)
