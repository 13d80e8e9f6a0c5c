# todayku/difficulty.py
from enum import Enum

from .grid import count_clues


class Difficulty(str, Enum):
    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'


# Clues left on the board per difficulty (35 / 45 / 55 cells removed)
DEFAULT_CLUE_TARGETS = {
    Difficulty.EASY: 46,
    Difficulty.MEDIUM: 36,
    Difficulty.HARD: 26,
}

# Minimum clue counts for easy and medium; anything below is hard
DEFAULT_THRESHOLDS = (40, 30)


def parse_difficulty(value):
    """Turn 'easy' / Difficulty.EASY into a Difficulty, ValueError otherwise."""
    if isinstance(value, Difficulty):
        return value
    try:
        return Difficulty(str(value).strip().lower())
    except ValueError:
        raise ValueError(f"Unknown difficulty: {value!r}") from None


def clue_target(difficulty, targets=None):
    """Target clue count for a difficulty, from targets or the default table."""
    difficulty = parse_difficulty(difficulty)
    table = DEFAULT_CLUE_TARGETS if targets is None else targets
    for key, value in table.items():
        if parse_difficulty(key) is difficulty:
            return int(value)
    return DEFAULT_CLUE_TARGETS[difficulty]


def classify_clues(clues, thresholds=DEFAULT_THRESHOLDS):
    easy_min, medium_min = thresholds
    if clues >= easy_min:
        return Difficulty.EASY
    if clues >= medium_min:
        return Difficulty.MEDIUM
    return Difficulty.HARD


def classify(puzzle, thresholds=DEFAULT_THRESHOLDS):
    """
    Label a puzzle by its number of clues.
    >=40 easy, 30-39 medium, <30 hard with the default thresholds.
    """
    return classify_clues(count_clues(puzzle), thresholds)
