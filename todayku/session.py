# todayku/session.py
"""
Per-player game state: the board being filled in, pencil notes, the
selected cell and the solve timer. One GameSession is created when a puzzle
is loaded and replaced when the next one is.
"""
import time
from collections import namedtuple

from .errors import GridError
from .grid import SIZE, EMPTY, copy_grid, is_filled, validate_grid, validate_cell
from .validation import find_conflicts, has_conflict, is_complete

MoveResult = namedtuple('MoveResult', ['row', 'col', 'value', 'accepted', 'conflict', 'complete'])

# (max seconds, stars)
PERFORMANCE_TIERS = ((90, 5), (120, 4), (180, 3), (300, 2))


def performance_rating(seconds):
    """1-5 stars for a solve time."""
    for limit, stars in PERFORMANCE_TIERS:
        if seconds <= limit:
            return stars
    return 1


def format_time(seconds):
    """MM:SS"""
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class GameSession:

    def __init__(self, puzzle, solution=None, started_at=None, puzzle_id=None,
                 board=None, notes=None, selected=None, finished_at=None):
        self.puzzle = copy_grid(validate_grid(puzzle))
        self.solution = copy_grid(validate_grid(solution)) if solution is not None else None
        self.board = copy_grid(validate_grid(board)) if board is not None else copy_grid(self.puzzle)
        self.notes = [[sorted(cell) for cell in row] for row in notes] if notes \
            else [[[] for _ in range(SIZE)] for _ in range(SIZE)]
        self.selected = tuple(selected) if selected else None
        self.puzzle_id = puzzle_id
        self.started_at = time.time() if started_at is None else started_at
        self.finished_at = finished_at

    def is_given(self, row, col):
        return self.puzzle[row][col] != EMPTY

    def select(self, row, col):
        """Select a cell for input. Givens cannot be selected."""
        validate_cell(row, col)
        if self.is_given(row, col):
            return False
        self.selected = (row, col)
        return True

    def _target(self, row, col):
        if row is None or col is None:
            if self.selected is None:
                raise GridError("No cell selected")
            return self.selected
        validate_cell(row, col)
        return row, col

    def place(self, digit, row=None, col=None):
        """
        Write digit (0 clears) into a cell, the selected one by default.
        A digit that clashes with its row, column or box is refused and the
        cell keeps its old value.
        """
        row, col = self._target(row, col)
        if digit != EMPTY:
            validate_cell(row, col, digit)

        current = self.board[row][col]
        if self.is_given(row, col) or self.finished_at is not None:
            return MoveResult(row, col, current, False, False, self.complete)

        if has_conflict(self.board, row, col, digit):
            return MoveResult(row, col, current, False, True, False)

        self.board[row][col] = digit
        if digit != EMPTY:
            self.notes[row][col] = []
        done = self.complete
        if done:
            self.stop()
        return MoveResult(row, col, digit, True, False, done)

    def toggle_note(self, row, col, digit):
        """Flip a pencil mark. Only allowed on empty cells."""
        validate_cell(row, col, digit)
        if self.board[row][col] != EMPTY:
            return False
        marks = self.notes[row][col]
        if digit in marks:
            marks.remove(digit)
        else:
            marks.append(digit)
            marks.sort()
        return True

    def same_value_cells(self, row, col):
        validate_cell(row, col)
        value = self.board[row][col]
        if value == EMPTY:
            return []
        return [(r, c) for r in range(SIZE) for c in range(SIZE)
                if self.board[r][c] == value and (r, c) != (row, col)]

    @property
    def complete(self):
        if self.solution is not None:
            return is_complete(self.board, self.solution)
        return is_filled(self.board) and not find_conflicts(self.board)

    def elapsed_seconds(self, now=None):
        end = self.finished_at
        if end is None:
            end = time.time() if now is None else now
        return max(0, int(end - self.started_at))

    def stop(self, now=None):
        if self.finished_at is None:
            self.finished_at = time.time() if now is None else now
        return self.elapsed_seconds()

    def to_dict(self):
        return {
            'puzzle_id': self.puzzle_id,
            'puzzle': self.puzzle,
            'solution': self.solution,
            'board': self.board,
            'notes': self.notes,
            'selected': list(self.selected) if self.selected else None,
            'started_at': self.started_at,
            'finished_at': self.finished_at,
        }

    @classmethod
    def from_dict(cls, data):
        return cls(data['puzzle'],
                   solution=data.get('solution'),
                   started_at=data.get('started_at'),
                   puzzle_id=data.get('puzzle_id'),
                   board=data.get('board'),
                   notes=data.get('notes'),
                   selected=data.get('selected'),
                   finished_at=data.get('finished_at'))
