# tests/test_generator.py
import random
from datetime import date

import pytest

from todayku import generator
from todayku.difficulty import Difficulty, classify
from todayku.errors import GenerationError, GenerationTimeout, GridError
from todayku.generator import (
    MIN_CLUES, generate_daily, generate_puzzle, generate_sudoku,
    generate_with_retry, reduce_puzzle, remove_if_unique,
)
from todayku.grid import CANONICAL_SOLUTION, count_clues, empty_grid
from todayku.sudoku import count_solutions, solve
from todayku.validation import find_conflicts

from test_sudoku import DEADLY_CELLS


def assert_sound(puzzle, solution):
    assert count_solutions(puzzle, limit=2) == 1
    assert solve(puzzle) == solution
    for r in range(9):
        for c in range(9):
            if puzzle[r][c]:
                assert puzzle[r][c] == solution[r][c]


def test_reduce_canonical_to_easy_target(canonical):
    puzzle = reduce_puzzle(canonical, 46, random.Random(7))
    assert 46 <= count_clues(puzzle) <= 81
    assert_sound(puzzle, CANONICAL_SOLUTION)
    assert canonical == CANONICAL_SOLUTION


def test_reduce_rejects_incomplete_solution(canonical, rng):
    canonical[0][0] = 0
    with pytest.raises(GridError):
        reduce_puzzle(canonical, 46, rng)
    with pytest.raises(GridError):
        reduce_puzzle(empty_grid(), 46, rng)


def test_removal_that_breaks_uniqueness_is_refused(canonical):
    # Five of the six cells gone still leaves a single completion
    for r, c in DEADLY_CELLS[:-1]:
        canonical[r][c] = 0
    assert count_solutions(canonical) == 1

    row, col = DEADLY_CELLS[-1]
    assert not remove_if_unique(canonical, row, col)
    assert canonical[row][col] == CANONICAL_SOLUTION[row][col]

    assert remove_if_unique(canonical, 8, 8)
    assert canonical[8][8] == 0
    assert not remove_if_unique(canonical, 8, 8)


@pytest.mark.parametrize("difficulty", ["easy", "medium"])
def test_generated_puzzles_are_sound(difficulty):
    result = generate_sudoku(difficulty, rng=random.Random(11))
    assert_sound(result.puzzle, result.solution)
    assert find_conflicts(result.solution) == []
    assert result.clues == count_clues(result.puzzle)
    assert result.difficulty is classify(result.puzzle)
    assert result.difficulty is Difficulty(difficulty)


def test_hard_puzzle_never_goes_below_floor():
    result = generate_sudoku("hard", rng=random.Random(3))
    assert_sound(result.puzzle, result.solution)
    assert result.clues >= MIN_CLUES
    # Unreachable targets are allowed, the label follows the real clue count
    assert result.difficulty is classify(result.puzzle)
    assert result.difficulty in (Difficulty.HARD, Difficulty.MEDIUM)


def test_backtrack_strategy(rng):
    result = generate_sudoku("easy", rng=rng, strategy="backtrack")
    assert_sound(result.puzzle, result.solution)
    assert result.clues == 46


def test_custom_clue_targets(rng):
    result = generate_sudoku("easy", rng=rng, clue_targets={"easy": 60})
    assert result.clues == 60
    assert result.difficulty is Difficulty.EASY


def test_unknown_inputs_raise(rng):
    with pytest.raises(ValueError):
        generate_sudoku("extreme", rng=rng)
    with pytest.raises(ValueError):
        generate_sudoku("easy", rng=rng, strategy="magic")


def test_generate_puzzle_entry_point(rng):
    out = generate_puzzle("easy", rng=rng)
    assert set(out) == {"puzzle", "solution"}
    assert_sound(out["puzzle"], out["solution"])


def test_daily_puzzle_is_shared_by_everyone_on_the_same_day():
    day = date(2024, 5, 1)
    first = generate_daily(day, "easy")
    second = generate_daily(day, "easy")
    other = generate_daily(date(2024, 5, 2), "easy")
    assert first.puzzle == second.puzzle
    assert first.solution == second.solution
    assert other.puzzle != first.puzzle


class FakeClock:

    def __init__(self, step):
        self.now = 0.0
        self.step = step

    def monotonic(self):
        self.now += self.step
        return self.now


def test_time_limit_raises_timeout(monkeypatch, canonical, rng):
    monkeypatch.setattr(generator, "time", FakeClock(step=10.0))
    with pytest.raises(GenerationTimeout):
        reduce_puzzle(canonical, 46, rng, time_limit=5)


def test_retry_uses_fresh_rng_after_failure(monkeypatch):
    calls = []
    real = generator.generate_sudoku

    def flaky(difficulty, rng=None, **kwargs):
        calls.append(rng)
        if len(calls) < 3:
            raise GenerationTimeout("too slow")
        return real(difficulty, rng=rng, **kwargs)

    monkeypatch.setattr(generator, "generate_sudoku", flaky)
    seeds = iter(range(100))
    result = generate_with_retry("easy", attempts=3, rng_factory=lambda: random.Random(next(seeds)))
    assert len(calls) == 3
    assert len({id(r) for r in calls}) == 3
    assert_sound(result.puzzle, result.solution)


def test_retry_gives_up_with_last_error(monkeypatch):
    def always_fails(difficulty, rng=None, **kwargs):
        raise GenerationError("nope")

    monkeypatch.setattr(generator, "generate_sudoku", always_fails)
    with pytest.raises(GenerationError, match="nope"):
        generate_with_retry("easy", attempts=2)
    with pytest.raises(ValueError):
        generate_with_retry("easy", attempts=0)


def test_thresholds_label_a_lowered_easy_target(rng):
    result = generate_sudoku("easy", rng=rng, clue_targets={"easy": 38}, thresholds=(36, 28))
    assert result.clues == 38
    assert result.difficulty is Difficulty.EASY

    result = generate_sudoku("easy", rng=random.Random(1), clue_targets={"easy": 38})
    assert result.difficulty is Difficulty.MEDIUM
