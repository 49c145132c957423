import random

from disk.blocks import BLOCK_COLORS, BlockState, decode_grid
from disk.generator import generate
from viz.segments import Segment, compress, expand


def test_compress_example():
    segs = compress(decode_grid("..FFFC"))
    assert segs == [
        Segment(0, 2, BLOCK_COLORS[BlockState.FREE], BlockState.FREE),
        Segment(2, 3, BLOCK_COLORS[BlockState.FRAGMENTED], BlockState.FRAGMENTED),
        Segment(5, 1, BLOCK_COLORS[BlockState.CONTIGUOUS], BlockState.CONTIGUOUS),
    ]
    assert [(s.offset, s.length, s.color) for s in segs] == [(0, 2, "#FFFFFF"), (2, 3, "#E00000"), (5, 1, "#0000C0")]


def test_empty_and_single():
    assert compress([]) == []
    assert compress([BlockState.UNMOVABLE]) == [Segment(0, 1, "#00C000", BlockState.UNMOVABLE)]


def test_segments_are_minimal_lossless_partition(seeded_rng):
    grid = generate(seeded_rng)
    copy = list(grid)
    segs = compress(grid)

    assert expand(segs) == grid
    assert compress(grid) == segs
    assert grid == copy

    assert sum(s.length for s in segs) == len(grid)
    offset = 0
    for s in segs:
        assert s.offset == offset
        assert s.color == BLOCK_COLORS[s.state]
        offset += s.length
    assert all(a.state is not b.state for a, b in zip(segs, segs[1:]))
    boundaries = sum(grid[i] is not grid[i + 1] for i in range(len(grid) - 1))
    assert len(segs) == 1 + boundaries


def test_any_length_grid():
    grid = decode_grid("U" * 7 + ".")
    assert [(s.offset, s.length) for s in compress(grid)] == [(0, 7), (7, 1)]
    rng = random.Random(9)
    odd = [rng.choice(list(BlockState)) for _ in range(33)]
    assert expand(compress(odd)) == odd
