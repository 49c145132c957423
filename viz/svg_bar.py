from __future__ import annotations
from disk.blocks import BAR_HEIGHT, BLOCK_WIDTH, BlockGrid
from viz.segments import compress

def render_bar(grid: BlockGrid, y: int=0) -> str:
    """SVG group with one crisp-edged rect per run of equal blocks."""
    rects = [
        f'<rect x="{s.offset*BLOCK_WIDTH}" y="{y}" width="{s.length*BLOCK_WIDTH}" '
        f'height="{BAR_HEIGHT}" fill="{s.color}" shape-rendering="crispEdges"/>'
        for s in compress(grid)
    ]
    return '<g>' + ''.join(rects) + '</g>'

def render_document(*grids: BlockGrid, gap: int=10) -> str:
    """Standalone SVG stacking one bar per grid, top to bottom."""
    width = max((len(g) for g in grids), default=0) * BLOCK_WIDTH
    height = len(grids)*BAR_HEIGHT + max(0, len(grids)-1)*gap
    bars = [render_bar(g, y=i*(BAR_HEIGHT+gap)) for i, g in enumerate(grids)]
    return (f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
            f'viewBox="0 0 {width} {height}">' + ''.join(bars) + '</svg>')
