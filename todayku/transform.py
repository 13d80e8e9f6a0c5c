# todayku/transform.py
"""
Validity preserving transformations of a solved grid.

Each primitive is a bijection on valid grids, so any composition of them
turns one solved grid into another without running the solver.
"""
from .errors import GridError
from .grid import SIZE, BOX, copy_grid, is_filled, validate_grid
from .sudoku import count_solutions


def relabel_digits(grid, mapping):
    """
    Apply a digit permutation. mapping[d] is the new digit for d (1..9).
    Empty cells stay empty.
    """
    if sorted(mapping[d] for d in range(1, SIZE + 1)) != list(range(1, SIZE + 1)):
        raise ValueError("mapping must be a permutation of 1..9")
    return [[mapping[val] if val else 0 for val in row] for row in grid]


def swap_rows(grid, r1, r2):
    """Swap two rows of the same band."""
    if r1 // BOX != r2 // BOX:
        raise ValueError(f"rows {r1} and {r2} are in different bands")
    new = copy_grid(grid)
    new[r1], new[r2] = new[r2], new[r1]
    return new


def swap_cols(grid, c1, c2):
    """Swap two columns of the same stack."""
    if c1 // BOX != c2 // BOX:
        raise ValueError(f"columns {c1} and {c2} are in different stacks")
    new = copy_grid(grid)
    for row in new:
        row[c1], row[c2] = row[c2], row[c1]
    return new


def swap_bands(grid, b1, b2):
    """Swap two horizontal bands of three rows."""
    new = copy_grid(grid)
    for i in range(BOX):
        new[b1 * BOX + i], new[b2 * BOX + i] = new[b2 * BOX + i], new[b1 * BOX + i]
    return new


def swap_stacks(grid, s1, s2):
    """Swap two vertical stacks of three columns."""
    new = copy_grid(grid)
    for row in new:
        for i in range(BOX):
            a, b = s1 * BOX + i, s2 * BOX + i
            row[a], row[b] = row[b], row[a]
    return new


def _line_order(rng):
    # Random band order, then a random order inside each band
    bands = list(range(BOX))
    rng.shuffle(bands)
    order = []
    for band in bands:
        lines = [band * BOX + i for i in range(BOX)]
        rng.shuffle(lines)
        order.extend(lines)
    return order


def transform(solution, rng):
    """
    Produce a fresh-looking solved grid from solution.

    Composes a random relabeling of the digits with random row order inside
    each band, column order inside each stack, band order and stack order.
    """
    validate_grid(solution)
    if not is_filled(solution) or count_solutions(solution, limit=1) != 1:
        raise GridError("solution must be a complete, valid grid")
    digits = list(range(1, SIZE + 1))
    rng.shuffle(digits)
    mapping = dict(zip(range(1, SIZE + 1), digits))

    rows = _line_order(rng)
    cols = _line_order(rng)
    return [[mapping[solution[r][c]] for c in cols] for r in rows]
