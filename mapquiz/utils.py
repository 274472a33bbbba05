"""
Utility functions shared by the routers
"""
from fastapi import HTTPException

from mapquiz import state
from mapquiz.core.game import QuizGame
from mapquiz.errors import (
    EmptyPoolError,
    InvalidPoolSizeError,
    QuizError,
    RoundStateError,
    UnknownModeError,
)


# Domain error -> HTTP status
STATUS_CODES = [
    (UnknownModeError, 404),
    (InvalidPoolSizeError, 400),
    (EmptyPoolError, 409),
    (RoundStateError, 409),
]


def get_game() -> QuizGame:
    """
    Raises:
        HTTPException: 503 if the game has not been initialized
    """
    if state.GAME is None:
        raise HTTPException(status_code=503, detail="Game is not loaded")
    return state.GAME


def to_http_exception(error: QuizError) -> HTTPException:
    """
    Translate a domain error into an HTTPException

    Example:
        >>> to_http_exception(UnknownModeError("lakes")).status_code
        404
    """
    for error_type, status_code in STATUS_CODES:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=400, detail=str(error))
