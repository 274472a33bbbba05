"""
Quiz game facade

One instance per process. Wires the mode catalog, target pool, round engine
and session tracker together and exposes the operations the renderer calls.
"""
import logging
import random
from typing import Dict, List, Optional

from mapquiz.core.modes import get_mode, records_for
from mapquiz.core.pool import build_pool, ALL_TARGETS
from mapquiz.core.round import RoundEngine, RoundPhase
from mapquiz.core.session import SessionTracker
from mapquiz.errors import RoundStateError
from mapquiz.models import Datasets, ModeDefinition, Point, RoundOutcome, RoundState, Target
from mapquiz.storage import KeyValueStore


logger = logging.getLogger(__name__)


class QuizGame:
    """Game state owned explicitly instead of living in module globals"""

    def __init__(
        self,
        datasets: Datasets,
        store: KeyValueStore,
        rng: Optional[random.Random] = None,
        default_pool_size: int = 20,
    ):
        self.datasets = datasets
        self.engine = RoundEngine(rng)
        self.session = SessionTracker(store, default_pool_size=default_pool_size)
        self.session.load()

        self.mode: Optional[ModeDefinition] = None
        self.pool: List[Target] = []
        self.round_number = 0

    def _pool_for(self, mode: ModeDefinition) -> List[Target]:
        records = records_for(mode.key, self.datasets)
        pool_size = self.session.state.cities_pool_size if mode.has_pool_size_control else ALL_TARGETS
        return build_pool(mode, records, pool_size)

    def start_mode(self, mode_key: str) -> RoundState:
        """
        Start a mode at round 1

        Raises:
            UnknownModeError: If mode_key is not registered
            EmptyPoolError: If the mode has no targets
        Game state is unchanged when either is raised.
        """
        mode = get_mode(mode_key)
        pool = self._pool_for(mode)
        round_state = self.engine.new_round(mode, pool, round_number=1)

        self.mode = mode
        self.pool = pool
        self.round_number = 1
        self.session.set_last_mode(mode.key)

        logger.info(f"✅ Started {mode.key} mode with {len(pool)} targets")
        return round_state

    def submit_guess(self, point: Point) -> RoundOutcome:
        """
        Score a guess and update the streak

        Only the first guess on a target feeds the streak; guesses after a
        retry are scored but not counted.

        Raises:
            RoundStateError: If no round is active
        """
        if self.engine.phase == RoundPhase.IDLE:
            raise RoundStateError("No active round. Start a mode first.")

        if self.engine.phase == RoundPhase.RESOLVED:
            return self.engine.outcome

        counted = self.engine.round.attempt == 1
        outcome = self.engine.evaluate(point, counted=counted)
        if counted:
            self.session.record_outcome(outcome)
        return outcome

    def retry(self) -> RoundState:
        return self.engine.retry()

    def next_round(self) -> RoundState:
        """
        Raises:
            RoundStateError: If no mode is active
        """
        if self.mode is None:
            raise RoundStateError("No active mode. Start a mode first.")

        round_state = self.engine.new_round(self.mode, self.pool, round_number=self.round_number + 1)
        self.round_number += 1
        return round_state

    def change_mode(self) -> None:
        """Leave the current mode; session stats are kept"""
        if self.mode is not None:
            logger.info(f"🛑 Leaving {self.mode.key} mode after {self.round_number} rounds")
        self.engine.reset()
        self.mode = None
        self.pool = []
        self.round_number = 0

    def set_pool_size(self, pool_size: int) -> Optional[RoundState]:
        """
        Persist the pool size; restart the active mode if it uses pool sizing

        Returns:
            The restarted round, or None when no restart was needed
        """
        self.session.set_pool_size(pool_size)

        if self.mode is not None and self.mode.has_pool_size_control:
            return self.start_mode(self.mode.key)
        return None

    def set_counties_visible(self, visible: bool) -> None:
        self.session.set_counties_visible(visible)

    def snapshot(self) -> Dict:
        """Serializable view for the renderer"""
        round_state = self.engine.round
        outcome = self.engine.outcome
        return {
            "phase": self.engine.phase.value,
            "mode": self.mode.key if self.mode else None,
            "pool_size": len(self.pool),
            "round": round_state.model_dump(mode="json") if round_state else None,
            "outcome": outcome.model_dump(mode="json") if outcome else None,
            "session": self.session.state.model_dump(mode="json"),
        }
