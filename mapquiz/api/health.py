"""
Health check and system status endpoints
"""
from fastapi import APIRouter
from mapquiz import state


router = APIRouter(tags=["health"])


@router.get("/")
async def health_check():
    """Health check endpoint"""
    datasets = state.GAME.datasets if state.GAME else None
    return {
        "status": "ok" if state.GAME else "loading",
        "message": "Map Quiz Server",
        "version": "1.0.0",
        "datasets": {
            "cities": len(datasets.cities),
            "counties": len(datasets.counties),
            "parks": len(datasets.parks),
            "districts": len(datasets.districts),
        } if datasets else {},
        "load_errors": state.LOAD_ERRORS,
    }
