from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List
from disk.blocks import BLOCK_COLORS, BlockGrid, BlockState

@dataclass(frozen=True)
class Segment:
    offset: int
    length: int
    color: str
    state: BlockState

def compress(grid: BlockGrid) -> List[Segment]:
    """Run-length encode ``grid`` into maximal same-state segments."""
    segs: List[Segment] = []
    n = len(grid)
    i = 0
    while i < n:
        st = grid[i]
        run = 1
        while i + run < n and grid[i + run] is st:
            run += 1
        segs.append(Segment(i, run, BLOCK_COLORS[st], st))
        i += run
    return segs

def expand(segments: Iterable[Segment]) -> BlockGrid:
    out: BlockGrid = []
    for s in segments:
        out.extend([s.state] * s.length)
    return out
