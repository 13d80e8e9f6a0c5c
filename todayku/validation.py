# todayku/validation.py
from .grid import SIZE, EMPTY, copy_grid, validate_grid, validate_cell
from .sudoku import is_valid_placement


def validate_solution(candidate, solution):
    """True iff every cell of candidate equals the same cell of solution."""
    validate_grid(candidate)
    validate_grid(solution)
    for row in range(SIZE):
        for col in range(SIZE):
            if candidate[row][col] != solution[row][col]:
                return False
    return True


def is_complete(grid, solution):
    """
    Check if the board is filled in and matches the solution.
    """
    validate_grid(grid)
    if any(val == EMPTY for row in grid for val in row):
        return False
    return validate_solution(grid, solution)


def diff_cells(candidate, solution):
    """Cells where candidate disagrees with solution, as (row, col) pairs."""
    validate_grid(candidate)
    validate_grid(solution)
    return [(r, c) for r in range(SIZE) for c in range(SIZE)
            if candidate[r][c] != solution[r][c]]


def has_conflict(grid, row, col, digit):
    """
    Check if digit at (row, col) clashes with another digit in its row,
    column or box. The cell's own current value is ignored, and 0 never
    conflicts.
    """
    validate_grid(grid)
    if digit == EMPTY:
        validate_cell(row, col)
        return False
    validate_cell(row, col, digit)

    board = copy_grid(grid)
    board[row][col] = EMPTY
    return not is_valid_placement(board, row, col, digit)


def find_conflicts(grid):
    """All filled cells that clash with some other filled cell."""
    validate_grid(grid)
    return [(r, c) for r in range(SIZE) for c in range(SIZE)
            if grid[r][c] != EMPTY and has_conflict(grid, r, c, grid[r][c])]
