"""
Game endpoints - start a mode, guess, retry, advance
"""
from fastapi import APIRouter, HTTPException
import logging

from mapquiz.errors import QuizError
from mapquiz.models import Point
from mapquiz.services.results import present_outcome, present_round
from mapquiz.utils import get_game, to_http_exception


router = APIRouter(prefix="/game", tags=["game"])
logger = logging.getLogger(__name__)


def _round_response(game) -> dict:
    round_state = game.engine.round
    session = game.session.state
    return {
        "success": True,
        "round": present_round(round_state, game.mode),
        "streak": session.streak,
        "high_score": session.high_score,
    }


@router.post("/start")
async def start_mode(request: dict):
    """
    Start a game mode at round 1

    Request:
        {"mode": "cities"}
    """
    mode_key = request.get("mode")
    if not mode_key:
        raise HTTPException(status_code=400, detail="mode required")
    if not isinstance(mode_key, str):
        raise HTTPException(status_code=400, detail="mode must be a string")

    game = get_game()
    try:
        game.start_mode(mode_key)
    except QuizError as e:
        logger.warning(f"❌ Cannot start mode '{mode_key}': {e}")
        raise to_http_exception(e)

    return _round_response(game)


@router.post("/guess")
async def submit_guess(request: dict):
    """
    Submit a map click

    Request:
        {"lat": 42.33, "lng": -83.04}

    Response:
        {
            "success": true,
            "message": "🎯 Excellent! Very close!",
            "distance_text": "You were 1.20 miles away!",
            "target": {...},
            "details": {...},
            "streak": 3,
            "high_score": 5
        }
    """
    game = get_game()
    try:
        point = Point(lat=float(request["lat"]), lng=float(request["lng"]))
    except (KeyError, TypeError, ValueError):
        raise HTTPException(status_code=400, detail="lat and lng are required numbers")

    try:
        outcome = game.submit_guess(point)
        session = game.session.state
        return present_outcome(
            outcome,
            game.engine.round,
            game.mode,
            streak=session.streak,
            high_score=session.high_score,
        )
    except QuizError as e:
        raise to_http_exception(e)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(
            f"❌ ERROR in /game/guess\n"
            f"Request Body: {request}\n"
            f"Error: {str(e)}\n"
            f"Error Type: {type(e).__name__}",
            exc_info=True
        )
        raise HTTPException(status_code=500, detail=f"Internal server error: {str(e)}")


@router.post("/retry")
async def retry():
    """Guess the same target again (does not affect the streak)"""
    game = get_game()
    try:
        game.retry()
    except QuizError as e:
        raise to_http_exception(e)
    return _round_response(game)


@router.post("/next")
async def next_round():
    """Draw the next target in the current mode"""
    game = get_game()
    try:
        game.next_round()
    except QuizError as e:
        raise to_http_exception(e)
    return _round_response(game)


@router.post("/change-mode")
async def change_mode():
    """Return to mode selection"""
    game = get_game()
    game.change_mode()
    return {"success": True, "message": "Choose a mode to play."}


@router.get("/state")
async def get_state():
    """Current phase, round, outcome and session"""
    return get_game().snapshot()
