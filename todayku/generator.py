# todayku/generator.py
import logging
import time
from collections import namedtuple

from .difficulty import DEFAULT_THRESHOLDS, classify, clue_target, parse_difficulty
from .errors import GenerationError, GenerationTimeout, GridError
from .grid import SIZE, CANONICAL_SOLUTION, copy_grid, count_clues, is_filled, validate_grid
from .rng import daily_rng, system_rng
from .sudoku import count_solutions, fill_grid
from .transform import transform

logger = logging.getLogger(__name__)

# No 9x9 puzzle with fewer clues has a unique solution
MIN_CLUES = 17

STRATEGIES = ('transform', 'backtrack')

Puzzle = namedtuple('Puzzle', ['puzzle', 'solution', 'difficulty', 'clues'])


def remove_if_unique(puzzle, row, col):
    """
    Empty (row, col) and keep it empty only if the puzzle still has exactly
    one solution. Returns True when the removal was kept.
    """
    backup = puzzle[row][col]
    if not backup:
        return False

    puzzle[row][col] = 0
    if count_solutions(puzzle, limit=2) == 1:
        return True

    puzzle[row][col] = backup
    return False


def reduce_puzzle(solution, target_clues, rng, time_limit=None):
    """
    Remove digits from a solved grid, in rng order, down to target_clues.

    Every position is tried at most once; a removal that makes the puzzle
    ambiguous is undone. The result may keep more clues than requested when
    no further cell can go without breaking uniqueness.
    """
    validate_grid(solution)
    if not is_filled(solution) or count_solutions(solution, limit=1) != 1:
        raise GridError("solution must be a complete, valid grid")

    target = max(MIN_CLUES, min(SIZE * SIZE, int(target_clues)))
    deadline = time.monotonic() + time_limit if time_limit else None

    positions = [(r, c) for r in range(SIZE) for c in range(SIZE)]
    rng.shuffle(positions)

    puzzle = copy_grid(solution)
    removed = 0
    for row, col in positions:
        if SIZE * SIZE - removed <= target:
            break
        if deadline is not None and time.monotonic() > deadline:
            raise GenerationTimeout(f"Reduction exceeded {time_limit}s after removing {removed} cells")
        if remove_if_unique(puzzle, row, col):
            removed += 1

    clues = count_clues(puzzle)
    if clues < MIN_CLUES:
        raise GenerationError(f"Reduced below {MIN_CLUES} clues ({clues})")
    if clues > target:
        logger.warning(f"Clue target {target} unreachable, stopped at {clues} clues")
    return puzzle


def generate_sudoku(difficulty='medium', rng=None, strategy='transform',
                    clue_targets=None, thresholds=DEFAULT_THRESHOLDS, time_limit=None):
    """
    Generate a uniquely solvable puzzle.

    strategy 'transform' shuffles the canonical grid, 'backtrack' solves an
    empty board with randomized digit order. The returned difficulty is the
    classifier's label for the clue count actually reached.
    """
    requested = parse_difficulty(difficulty)
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown generation strategy: {strategy!r}")
    if rng is None:
        rng = system_rng()

    if strategy == 'transform':
        solution = transform(CANONICAL_SOLUTION, rng)
    else:
        solution = fill_grid(rng)

    target = clue_target(requested, clue_targets)
    puzzle = reduce_puzzle(solution, target, rng, time_limit=time_limit)

    if count_solutions(puzzle, limit=2) != 1:
        raise GenerationError("Generated puzzle does not have a unique solution")

    clues = count_clues(puzzle)
    label = classify(puzzle, thresholds)
    if label is not requested:
        logger.warning(f"Requested {requested.value} puzzle labelled {label.value} ({clues} clues)")
    logger.info(f"Generated {label.value} puzzle with {clues} clues (target {target}, {strategy})")
    return Puzzle(puzzle, solution, label, clues)


def generate_puzzle(difficulty='medium', rng=None, **kwargs):
    """Return {'puzzle': ..., 'solution': ...} for a difficulty."""
    result = generate_sudoku(difficulty, rng=rng, **kwargs)
    return {'puzzle': result.puzzle, 'solution': result.solution}


def generate_daily(day=None, difficulty='medium', **kwargs):
    """
    Generate the puzzle for a calendar day from its date seed.
    Every caller on the same UTC day gets the same grid.
    """
    return generate_sudoku(difficulty, rng=daily_rng(day), **kwargs)


def generate_with_retry(difficulty='medium', attempts=3, rng_factory=system_rng, **kwargs):
    """
    Run generate_sudoku up to attempts times, each with a fresh rng.
    Re-raises the last GenerationError when every attempt fails.
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")
    last_error = None
    for attempt in range(1, attempts + 1):
        try:
            return generate_sudoku(difficulty, rng=rng_factory(), **kwargs)
        except GenerationError as e:
            last_error = e
            logger.error(f"Generation attempt {attempt}/{attempts} failed: {e}")
    raise last_error
