"""
Session tracking - streak, high score and persisted preferences

Persisted keys (each read and written independently):
  countiesVisible  "true" | "false"
  citiesPoolSize   "-1" | "<N>"
  highScore        "<N>"
  lastMode         "<mode key>"
The streak lives only in memory.
"""
import logging
from typing import Optional

from mapquiz.core.modes import MODE_CATALOG
from mapquiz.core.pool import validate_pool_size
from mapquiz.errors import InvalidPoolSizeError
from mapquiz.models import RoundOutcome, SessionState
from mapquiz.storage import KeyValueStore


logger = logging.getLogger(__name__)


KEY_COUNTIES_VISIBLE = "countiesVisible"
KEY_POOL_SIZE = "citiesPoolSize"
KEY_HIGH_SCORE = "highScore"
KEY_LAST_MODE = "lastMode"


class SessionTracker:
    """Owns SessionState and writes every change through to the store"""

    def __init__(self, store: KeyValueStore, default_pool_size: int = 20):
        self.store = store
        self.state = SessionState(cities_pool_size=default_pool_size)

    def load(self) -> SessionState:
        """
        Read persisted fields; missing or unparsable ones keep their defaults
        """
        raw = self.store.get(KEY_HIGH_SCORE)
        if raw is not None:
            try:
                value = int(raw)
                if value < 0:
                    raise ValueError(value)
                self.state.high_score = value
            except ValueError:
                logger.warning(f"⚠️ Ignoring stored {KEY_HIGH_SCORE}={raw!r}")

        raw = self.store.get(KEY_POOL_SIZE)
        if raw is not None:
            try:
                self.state.cities_pool_size = validate_pool_size(int(raw))
            except (ValueError, InvalidPoolSizeError):
                logger.warning(f"⚠️ Ignoring stored {KEY_POOL_SIZE}={raw!r}")

        raw = self.store.get(KEY_COUNTIES_VISIBLE)
        if raw is not None:
            if raw.strip().lower() in ("true", "false"):
                self.state.counties_visible = raw.strip().lower() == "true"
            else:
                logger.warning(f"⚠️ Ignoring stored {KEY_COUNTIES_VISIBLE}={raw!r}")

        raw = self.store.get(KEY_LAST_MODE)
        if raw is not None:
            if raw in MODE_CATALOG:
                self.state.last_mode = raw
            else:
                logger.warning(f"⚠️ Ignoring stored {KEY_LAST_MODE}={raw!r}")

        return self.state

    def save(self) -> None:
        """Write all persisted fields"""
        self.store.set(KEY_HIGH_SCORE, str(self.state.high_score))
        self.store.set(KEY_POOL_SIZE, str(self.state.cities_pool_size))
        self.store.set(KEY_COUNTIES_VISIBLE, "true" if self.state.counties_visible else "false")
        if self.state.last_mode is not None:
            self.store.set(KEY_LAST_MODE, self.state.last_mode)

    def record_outcome(self, outcome: RoundOutcome) -> SessionState:
        """
        Update the streak; raise and persist the high score when beaten

        Returns:
            Updated SessionState
        """
        if outcome.success:
            self.state.streak += 1
        else:
            self.state.streak = 0

        if self.state.streak > self.state.high_score:
            self.state.high_score = self.state.streak
            self.store.set(KEY_HIGH_SCORE, str(self.state.high_score))
            logger.info(f"🏆 New high score: {self.state.high_score}")

        return self.state

    def set_pool_size(self, pool_size: int) -> None:
        """
        Raises:
            InvalidPoolSizeError: If pool_size is not -1 or positive
        """
        self.state.cities_pool_size = validate_pool_size(pool_size)
        self.store.set(KEY_POOL_SIZE, str(pool_size))
        logger.info(f"Pool size set to {'all' if pool_size == -1 else pool_size}")

    def set_counties_visible(self, visible: bool) -> None:
        self.state.counties_visible = bool(visible)
        self.store.set(KEY_COUNTIES_VISIBLE, "true" if visible else "false")

    def set_last_mode(self, mode_key: Optional[str]) -> None:
        self.state.last_mode = mode_key
        if mode_key is not None:
            self.store.set(KEY_LAST_MODE, mode_key)
