# todayku/sudoku.py
from .grid import SIZE, BOX, EMPTY, copy_grid, empty_grid, validate_grid, validate_cell

DIGITS = tuple(range(1, SIZE + 1))


def is_valid_placement(board, row, col, num):
    """
    Check if placing num at (row, col) is legal.
    The cell itself is not skipped, so a filled cell rejects any digit it shares.
    """
    validate_cell(row, col, num)
    return _fits(board, row, col, num)


def _fits(board, row, col, num):
    # Check row and column
    for i in range(SIZE):
        if board[row][i] == num or board[i][col] == num:
            return False

    # Check 3x3 box
    start_row, start_col = row - row % BOX, col - col % BOX
    for i in range(start_row, start_row + BOX):
        for j in range(start_col, start_col + BOX):
            if board[i][j] == num:
                return False

    return True


def find_empty(board):
    """
    Find the first empty cell in row-major order.
    Returns (row, col) or None if no empty cells.
    """
    for i in range(SIZE):
        for j in range(SIZE):
            if board[i][j] == EMPTY:
                return i, j
    return None


def _is_consistent(board):
    # A filled cell that clashes with another can never lead to a solution
    for i in range(SIZE):
        for j in range(SIZE):
            num = board[i][j]
            if num == EMPTY:
                continue
            board[i][j] = EMPTY
            ok = _fits(board, i, j, num)
            board[i][j] = num
            if not ok:
                return False
    return True


def solve_sudoku(board, rng=None):
    """
    Solve the board in place using backtracking.
    Digits are tried in an rng-shuffled order when rng is given, which is
    how full random grids are produced from an empty board.
    Returns True if solved, False otherwise (board left unchanged).
    """
    validate_grid(board)
    if not _is_consistent(board):
        return False
    return _solve(board, rng)


def _solve(board, rng):
    empty = find_empty(board)
    if not empty:
        return True

    row, col = empty
    numbers = list(DIGITS)
    if rng is not None:
        rng.shuffle(numbers)

    for num in numbers:
        if _fits(board, row, col, num):
            board[row][col] = num
            if _solve(board, rng):
                return True
            board[row][col] = EMPTY

    return False


def solve(grid):
    """
    Return a solved copy of grid, or None when it has no completion.
    """
    board = copy_grid(validate_grid(grid))
    if solve_sudoku(board):
        return board
    return None


def count_solutions(grid, limit=2):
    """
    Count completions of grid, stopping once limit is reached.
    The caller's grid is never modified.
    """
    validate_grid(grid)
    if limit < 1:
        raise ValueError("limit must be at least 1")
    board = copy_grid(grid)
    if not _is_consistent(board):
        return 0
    return _count(board, 0, limit)


def _count(board, count, limit):
    empty = find_empty(board)
    if not empty:
        return count + 1

    row, col = empty
    for num in DIGITS:
        if _fits(board, row, col, num):
            board[row][col] = num
            count = _count(board, count, limit)
            board[row][col] = EMPTY
            if count >= limit:
                break

    return count


def has_unique_solution(grid):
    """
    Check if the puzzle has exactly one solution.
    """
    return count_solutions(grid, limit=2) == 1


def fill_grid(rng):
    """Build a complete random solution by solving an empty board."""
    board = empty_grid()
    _solve(board, rng)
    return board
