from __future__ import annotations
from disk.blocks import BLOCK_SYMBOLS, BlockGrid, BlockState

# When several blocks share one character cell, the first listed wins
_PRIORITY = (BlockState.UNMOVABLE, BlockState.FRAGMENTED, BlockState.CONTIGUOUS, BlockState.FREE)

def render_map(grid: BlockGrid, width: int=80) -> str:
    n=len(grid)
    if n==0:
        return ''
    width=min(width, n)
    buf=[]
    for c in range(width):
        s=int((c/width)*n)
        e=max(s+1, int(((c+1)/width)*n))
        cell=set(grid[s:e])
        st=next(p for p in _PRIORITY if p in cell)
        buf.append(BLOCK_SYMBOLS[st])
    return ''.join(buf)
