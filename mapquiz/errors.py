"""
Quiz error taxonomy
"""


class QuizError(Exception):
    """Base class for quiz errors"""


class UnknownModeError(QuizError, KeyError):
    """Requested mode key is not in the catalog"""

    def __init__(self, mode_key: str):
        super().__init__(mode_key)
        self.mode_key = mode_key

    def __str__(self) -> str:
        return f"Unknown mode: {self.mode_key}"


class EmptyPoolError(QuizError):
    """A mode's filtered target set is empty"""


class DataLoadError(QuizError):
    """A dataset file could not be read or parsed"""


class InvalidPoolSizeError(QuizError, ValueError):
    """Pool size must be -1 (all) or a positive integer"""


class RoundStateError(QuizError):
    """Operation not allowed in the current round state"""
