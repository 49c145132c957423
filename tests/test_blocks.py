import pytest

from disk.blocks import (
    BLOCK_COLORS,
    BLOCK_COUNT,
    BLOCK_SYMBOLS,
    BlockState,
    count_states,
    decode_grid,
    encode_grid,
)


def test_four_states_with_colors_and_symbols():
    assert {st.value for st in BlockState} == {"free", "fragmented", "contiguous", "unmovable"}
    assert set(BLOCK_COLORS) == set(BlockState)
    assert set(BLOCK_SYMBOLS) == set(BlockState)
    assert BLOCK_COLORS[BlockState.FRAGMENTED] == "#E00000"
    assert BLOCK_COUNT == 290


def test_encode_decode():
    grid = [BlockState.FREE, BlockState.FRAGMENTED, BlockState.CONTIGUOUS, BlockState.UNMOVABLE]
    assert encode_grid(grid) == ".FCU"
    assert decode_grid(".FCU") == grid
    assert decode_grid("") == []


def test_decode_rejects_unknown_symbol():
    with pytest.raises(ValueError, match="position 2"):
        decode_grid("..X")


def test_count_states_reports_zero_counts():
    counts = count_states(decode_grid("..F"))
    assert counts[BlockState.FREE] == 2
    assert counts[BlockState.FRAGMENTED] == 1
    assert counts[BlockState.UNMOVABLE] == 0
