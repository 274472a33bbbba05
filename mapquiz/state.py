"""
Global application state
Shared resources accessible across all routers
"""
from typing import Dict, Optional

from mapquiz.core.game import QuizGame
from mapquiz.models import QuizConfig

# Loaded at startup
CONFIG: QuizConfig = QuizConfig()

# The single game instance, built in the lifespan hook
GAME: Optional[QuizGame] = None

# Data source key -> load error message, for sources that failed to load
LOAD_ERRORS: Dict[str, str] = {}
