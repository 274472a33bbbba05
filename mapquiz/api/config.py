"""
Configuration endpoints
"""
from fastapi import APIRouter

from mapquiz import state
from mapquiz.core.modes import list_modes, records_for


router = APIRouter(tags=["config"])


def _mode_info(mode) -> dict:
    info = mode.model_dump(mode="json")
    info["available"] = bool(state.GAME and records_for(mode.key, state.GAME.datasets))
    return info


@router.get("/config")
async def get_config():
    """Map view settings and the mode catalog"""
    return {
        "map": state.CONFIG.map.model_dump(),
        "default_pool_size": state.CONFIG.default_pool_size,
        "modes": [_mode_info(mode) for mode in list_modes()],
    }


@router.get("/modes")
async def get_modes():
    """Mode catalog"""
    return {"modes": [_mode_info(mode) for mode in list_modes()]}
