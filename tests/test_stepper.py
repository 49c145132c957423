import random

import pytest

from defrag.stepper import DefragStepper, Move, stepper
from disk.blocks import BlockState, count_states, decode_grid, encode_grid
from disk.generator import generate


def test_two_step_scenario(scripted, grid):
    rng = scripted([0.0, 0.0])
    steps = [encode_grid(g) for g in stepper(grid("..FFU."), rng)]
    assert steps == ["C..FU.", "CC..U."]
    assert rng.exhausted


def test_candidate_is_random_not_nearest(scripted, grid):
    s = DefragStepper(grid("..FFU."), scripted([0.99, 0.0]))
    assert encode_grid(next(s)) == "C.F.U."
    assert s.last_move == Move(target=0, source=3)
    assert s.last_move.distance == 3
    assert encode_grid(next(s)) == "CC..U."
    assert s.steps == 2


@pytest.mark.parametrize("text", ["UUUU", "FFCU", "F.CU", "", "CC..U."])
def test_terminates_without_yield(text, grid):
    s = stepper(grid(text), random.Random(0))
    assert list(s) == []
    assert s.done
    assert s.last_move is None


def test_exhausted_stepper_stays_exhausted(grid):
    s = stepper(grid(".F"), random.Random(0))
    assert encode_grid(next(s)) == "C."
    with pytest.raises(StopIteration):
        next(s)
    with pytest.raises(StopIteration):
        next(s)


def test_does_not_mutate_callers_grid(grid):
    original = grid(".F.FCF")
    before = list(original)
    list(stepper(original, random.Random(1)))
    assert original == before


def test_snapshots_are_independent(grid):
    s = stepper(grid("..FF"), random.Random(2))
    first = next(s)
    first[1] = BlockState.UNMOVABLE
    second = next(s)
    assert second[1] is BlockState.CONTIGUOUS
    assert s.grid == second
    s.grid[0] = BlockState.FREE
    assert s.grid[0] is BlockState.CONTIGUOUS


def test_abandon_midway(grid):
    s = stepper(grid("....FFFF"), random.Random(3))
    next(s)
    assert s.steps == 1
    assert not s.done


def _terminal(g):
    if BlockState.FREE not in g:
        return True
    first = g.index(BlockState.FREE)
    return BlockState.FRAGMENTED not in g[first + 1:]


def test_step_properties_on_generated_grids(seeded_rng):
    initial = generate(seeded_rng)
    unmovable = {i for i, b in enumerate(initial) if b is BlockState.UNMOVABLE}
    prev = initial
    s = stepper(initial, seeded_rng)
    for snap in s:
        assert len(snap) == len(initial)
        assert {i for i, b in enumerate(snap) if b is BlockState.UNMOVABLE} == unmovable
        changed = [i for i in range(len(snap)) if snap[i] is not prev[i]]
        assert len(changed) == 2
        target, source = changed
        assert (prev[target], snap[target]) == (BlockState.FREE, BlockState.CONTIGUOUS)
        assert (prev[source], snap[source]) == (BlockState.FRAGMENTED, BlockState.FREE)
        assert prev.index(BlockState.FREE) == target
        assert s.last_move == Move(target, source)
        assert not _terminal(prev)
        prev = snap
    assert _terminal(prev)

    before, after = count_states(initial), count_states(prev)
    assert after[BlockState.FRAGMENTED] == before[BlockState.FRAGMENTED] - s.steps
    assert after[BlockState.CONTIGUOUS] == before[BlockState.CONTIGUOUS] + s.steps
    assert after[BlockState.FREE] == before[BlockState.FREE]
    assert after[BlockState.UNMOVABLE] == before[BlockState.UNMOVABLE]
