# todayku/grid.py
from .errors import GridError

SIZE = 9
BOX = 3
EMPTY = 0

CANONICAL_SOLUTION = [
    [1, 2, 3, 4, 5, 6, 7, 8, 9],
    [4, 5, 6, 7, 8, 9, 1, 2, 3],
    [7, 8, 9, 1, 2, 3, 4, 5, 6],
    [2, 3, 1, 5, 6, 4, 8, 9, 7],
    [5, 6, 4, 8, 9, 7, 2, 3, 1],
    [8, 9, 7, 2, 3, 1, 5, 6, 4],
    [3, 1, 2, 6, 4, 5, 9, 7, 8],
    [6, 4, 5, 9, 7, 8, 3, 1, 2],
    [9, 7, 8, 3, 1, 2, 6, 4, 5],
]


def validate_grid(grid):
    """
    Make sure grid is a 9x9 list of ints in 0..9.
    Raises GridError otherwise.
    """
    if not isinstance(grid, (list, tuple)) or len(grid) != SIZE:
        raise GridError(f"Grid must have {SIZE} rows")
    for r, row in enumerate(grid):
        if not isinstance(row, (list, tuple)) or len(row) != SIZE:
            raise GridError(f"Row {r} must have {SIZE} cells")
        for c, val in enumerate(row):
            if isinstance(val, bool) or not isinstance(val, int):
                raise GridError(f"Cell ({r},{c}) is not an integer: {val!r}")
            if val < 0 or val > 9:
                raise GridError(f"Cell ({r},{c}) out of range: {val}")
    return grid


def validate_cell(row, col, digit=None):
    """Check row/col indices and, if given, a digit in 1..9."""
    for name, idx in (('row', row), ('col', col)):
        if isinstance(idx, bool) or not isinstance(idx, int) or not 0 <= idx < SIZE:
            raise GridError(f"{name} must be in 0..8, got {idx!r}")
    if digit is not None:
        if isinstance(digit, bool) or not isinstance(digit, int) or not 1 <= digit <= 9:
            raise GridError(f"digit must be in 1..9, got {digit!r}")


def empty_grid():
    return [[EMPTY] * SIZE for _ in range(SIZE)]


def copy_grid(grid):
    return [list(row) for row in grid]


def count_clues(grid):
    """Number of non-empty cells."""
    return sum(1 for row in grid for val in row if val != EMPTY)


def is_filled(grid):
    return all(val != EMPTY for row in grid for val in row)


def grid_to_string(grid):
    """
    Serialize a grid to 81 characters, '.' for empty cells.
    """
    validate_grid(grid)
    return ''.join(str(val) if val else '.' for row in grid for val in row)


def grid_from_string(text):
    """
    Parse an 81 character string ('.' or '0' for empty) into a grid.
    Whitespace is ignored so multi-line boards can be pasted in.
    """
    if not isinstance(text, str):
        raise GridError("Grid string must be a str")
    chars = [ch for ch in text if not ch.isspace()]
    if len(chars) != SIZE * SIZE:
        raise GridError(f"Grid string must have {SIZE * SIZE} cells, got {len(chars)}")
    cells = []
    for i, ch in enumerate(chars):
        if ch in '.0':
            cells.append(EMPTY)
        elif ch in '123456789':
            cells.append(int(ch))
        else:
            raise GridError(f"Invalid character {ch!r} at position {i}")
    return [cells[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)]


def coerce_grid(value):
    """Accept either the list form or the string form and return a list grid."""
    if isinstance(value, str):
        return grid_from_string(value)
    return copy_grid(validate_grid(value))


def format_grid(grid):
    """
    Render the board as text with box separators.
    """
    lines = []
    for i in range(SIZE):
        if i % BOX == 0 and i != 0:
            lines.append("- - - - - - - - - - -")
        parts = []
        for j in range(SIZE):
            if j % BOX == 0 and j != 0:
                parts.append("|")
            parts.append(str(grid[i][j]) if grid[i][j] else ".")
        lines.append(" ".join(parts))
    return "\n".join(lines)
