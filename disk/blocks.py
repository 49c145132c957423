from __future__ import annotations
from collections import Counter
from enum import Enum
from typing import Dict, List

class BlockState(Enum):
    FREE = 'free'
    FRAGMENTED = 'fragmented'
    CONTIGUOUS = 'contiguous'
    UNMOVABLE = 'unmovable'

BlockGrid = List[BlockState]

# Shared by generator, stepper and renderers
BLOCK_COUNT = 290
BLOCK_WIDTH = 2
BAR_HEIGHT = 30

BLOCK_COLORS: Dict[BlockState, str] = {
    BlockState.FREE: '#FFFFFF',
    BlockState.FRAGMENTED: '#E00000',
    BlockState.CONTIGUOUS: '#0000C0',
    BlockState.UNMOVABLE: '#00C000',
}

BLOCK_SYMBOLS: Dict[BlockState, str] = {
    BlockState.FREE: '.',
    BlockState.FRAGMENTED: 'F',
    BlockState.CONTIGUOUS: 'C',
    BlockState.UNMOVABLE: 'U',
}
_BY_SYMBOL = {sym: st for st, sym in BLOCK_SYMBOLS.items()}

def encode_grid(grid: BlockGrid) -> str:
    return ''.join(BLOCK_SYMBOLS[b] for b in grid)

def decode_grid(text: str) -> BlockGrid:
    grid = []
    for i, ch in enumerate(text):
        st = _BY_SYMBOL.get(ch)
        if st is None:
            raise ValueError(f"unknown block symbol {ch!r} at position {i}")
        grid.append(st)
    return grid

def count_states(grid: BlockGrid) -> Counter:
    counts = Counter({st: 0 for st in BlockState})
    counts.update(grid)
    return counts
