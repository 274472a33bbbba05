"""
Player preference endpoints
"""
from fastapi import APIRouter, HTTPException
import logging

from mapquiz.errors import QuizError
from mapquiz.services.results import present_round
from mapquiz.utils import get_game, to_http_exception


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("")
async def get_settings():
    """Persisted preferences and current stats"""
    return get_game().session.state.model_dump(mode="json")


@router.post("/pool-size")
async def set_pool_size(request: dict):
    """
    Set how many of the largest cities are in play

    Request:
        {"pool_size": 50}    # -1 = all cities
    """
    pool_size = request.get("pool_size")
    if pool_size is None:
        raise HTTPException(status_code=400, detail="pool_size required")

    game = get_game()
    try:
        restarted = game.set_pool_size(pool_size)
    except QuizError as e:
        raise to_http_exception(e)

    return {
        "success": True,
        "pool_size": game.session.state.cities_pool_size,
        "round": present_round(restarted, game.mode) if restarted else None,
    }


@router.post("/counties-visible")
async def set_counties_visible(request: dict):
    """
    Toggle the county boundary layer

    Request:
        {"visible": true}
    """
    visible = request.get("visible")
    if not isinstance(visible, bool):
        raise HTTPException(status_code=400, detail="visible must be true or false")

    game = get_game()
    game.set_counties_visible(visible)
    return {"success": True, "counties_visible": visible}
