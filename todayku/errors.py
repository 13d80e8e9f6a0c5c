# todayku/errors.py


class GridError(ValueError):
    """Raised when a grid or cell argument is malformed."""


class GenerationError(RuntimeError):
    """Raised when puzzle generation cannot produce a valid puzzle."""


class GenerationTimeout(GenerationError):
    """Raised when reduction runs past its wall-clock budget."""
