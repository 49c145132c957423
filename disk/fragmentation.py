from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple
from disk.blocks import BlockGrid, BlockState, count_states
from viz.segments import compress

@dataclass
class FreeSpaceMetrics:
    total_free: int
    lfe: int              # largest free extent
    external_frag: float  # 1 - lfe/total_free
    entropy: float        # bits, over free extent sizes
    hole_count: int

@dataclass
class GridMetrics:
    counts: Dict[BlockState, int]
    fragmented_runs: int
    free: FreeSpaceMetrics

def extents(grid: BlockGrid, state: BlockState) -> List[Tuple[int, int]]:
    """(offset, length) of every maximal run of ``state``."""
    return [(s.offset, s.length) for s in compress(grid) if s.state is state]

def free_space_metrics(hole_sizes: Sequence[int]) -> FreeSpaceMetrics:
    total = sum(hole_sizes)
    if total == 0:
        return FreeSpaceMetrics(0, 0, 0.0, 0.0, 0)
    largest = max(hole_sizes)
    shares = [size / total for size in hole_sizes]
    return FreeSpaceMetrics(
        total_free=total,
        lfe=largest,
        external_frag=1.0 - largest / total,
        entropy=-sum(p * math.log2(p) for p in shares),
        hole_count=len(hole_sizes),
    )

def grid_metrics(grid: BlockGrid) -> GridMetrics:
    segments = compress(grid)
    holes = [s.length for s in segments if s.state is BlockState.FREE]
    return GridMetrics(
        counts=dict(count_states(grid)),
        fragmented_runs=sum(s.state is BlockState.FRAGMENTED for s in segments),
        free=free_space_metrics(holes),
    )
