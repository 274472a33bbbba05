"""
FastAPI main application
Map Quiz - scoring server for a click-the-map geography game

Modular architecture with separated API routers in mapquiz/api/:
- health.py: Health check and dataset status
- config.py: Map view settings and mode catalog
- game.py: Start mode, guess, retry, next round, change mode
- settings.py: Pool size and counties layer preferences

All routers access the single QuizGame via the mapquiz.state module.
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
import logging
import os

from mapquiz import state
from mapquiz.config import load_config
from mapquiz.core.game import QuizGame
from mapquiz.loader import load_datasets
from mapquiz.storage import YamlFileStore

# Import all API routers
from mapquiz.api import health, game, settings
from mapquiz.api import config as config_router


# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup: load config and datasets, build the game
    try:
        state.CONFIG = load_config()
    except Exception as e:
        logger.error(f"❌ Failed to load config: {e}")
        raise

    datasets, errors = load_datasets(state.CONFIG)
    state.LOAD_ERRORS = errors
    state.GAME = QuizGame(
        datasets,
        YamlFileStore(state.CONFIG.storage_path),
        default_pool_size=state.CONFIG.default_pool_size,
    )
    if errors:
        logger.warning(f"⚠️ Started with {len(errors)} dataset(s) unavailable: {', '.join(errors)}")
    logger.info(f"✅ Server started, high score {state.GAME.session.state.high_score}")

    yield

    # Shutdown
    state.GAME.session.save()
    logger.info("🛑 Server shutting down")


# Create FastAPI app
app = FastAPI(
    title="Map Quiz Server",
    description="Find places on the map: distance and boundary scoring with streaks",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware (allow all origins for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ==================== INCLUDE ROUTERS ====================

# Health check (GET /)
app.include_router(health.router)

# Config endpoints (GET /config, /modes)
app.include_router(config_router.router)

# Game endpoints (POST /game/start, /game/guess, ...)
app.include_router(game.router)

# Preference endpoints (GET /settings, POST /settings/...)
app.include_router(settings.router)


# ==================== STATIC FILES ====================

# Mount static files directory for the browser client
if os.path.exists("static"):
    app.mount("/static", StaticFiles(directory="static"), name="static")


# ==================== RUN SERVER ====================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
