# todayku/__init__.py
from .difficulty import Difficulty, classify
from .errors import GenerationError, GenerationTimeout, GridError
from .generator import generate_daily, generate_puzzle, generate_sudoku, generate_with_retry, reduce_puzzle
from .grid import grid_from_string, grid_to_string
from .sudoku import count_solutions, has_unique_solution, is_valid_placement, solve
from .validation import has_conflict, is_complete, validate_solution

__all__ = [
    'Difficulty', 'classify',
    'GenerationError', 'GenerationTimeout', 'GridError',
    'generate_daily', 'generate_puzzle', 'generate_sudoku', 'generate_with_retry', 'reduce_puzzle',
    'grid_from_string', 'grid_to_string',
    'count_solutions', 'has_unique_solution', 'is_valid_placement', 'solve',
    'has_conflict', 'is_complete', 'validate_solution',
]
