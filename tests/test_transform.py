# tests/test_transform.py
import random

import pytest

from todayku.errors import GridError
from todayku.grid import CANONICAL_SOLUTION, is_filled
from todayku.sudoku import count_solutions
from todayku.transform import (
    relabel_digits, swap_bands, swap_cols, swap_rows, swap_stacks, transform,
)
from todayku.validation import find_conflicts


def assert_solved(grid):
    assert is_filled(grid)
    assert find_conflicts(grid) == []


def test_primitives_preserve_validity(canonical):
    mapping = {d: 10 - d for d in range(1, 10)}
    for grid in (
        relabel_digits(canonical, mapping),
        swap_rows(canonical, 3, 5),
        swap_cols(canonical, 6, 8),
        swap_bands(canonical, 0, 2),
        swap_stacks(canonical, 1, 2),
    ):
        assert_solved(grid)
        assert grid != canonical
    assert canonical == CANONICAL_SOLUTION


def test_swaps_across_boxes_are_refused(canonical):
    with pytest.raises(ValueError):
        swap_rows(canonical, 2, 3)
    with pytest.raises(ValueError):
        swap_cols(canonical, 0, 8)


def test_relabel_needs_a_permutation(canonical):
    with pytest.raises(ValueError):
        relabel_digits(canonical, {d: 1 for d in range(1, 10)})


def test_relabel_keeps_empty_cells(canonical):
    canonical[4][4] = 0
    out = relabel_digits(canonical, {d: d % 9 + 1 for d in range(1, 10)})
    assert out[4][4] == 0
    assert out[0][0] == 2


@pytest.mark.parametrize("seed", [0, 1, 2, 42, 2024])
def test_transform_yields_another_valid_solution(seed):
    grid = transform(CANONICAL_SOLUTION, random.Random(seed))
    assert_solved(grid)
    assert count_solutions(grid) == 1


def test_transform_is_reproducible_for_a_seed():
    a = transform(CANONICAL_SOLUTION, random.Random(99))
    b = transform(CANONICAL_SOLUTION, random.Random(99))
    c = transform(CANONICAL_SOLUTION, random.Random(100))
    assert a == b
    assert a != c


def test_transform_refuses_unsolved_grids(canonical):
    holey = [row[:] for row in canonical]
    holey[3][3] = 0
    with pytest.raises(GridError):
        transform(holey, random.Random(0))

    clash = [row[:] for row in canonical]
    clash[0][0] = clash[0][1]
    with pytest.raises(GridError):
        transform(clash, random.Random(0))
