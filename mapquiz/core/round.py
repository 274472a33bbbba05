"""
Round engine - one target, one guess

States: IDLE → AWAITING_GUESS → RESOLVED
  - new_round: any state → AWAITING_GUESS (fresh target)
  - evaluate:  AWAITING_GUESS → RESOLVED; RESOLVED returns the stored outcome
  - retry:     RESOLVED → AWAITING_GUESS (same target)

Message tiers (distance in miles, ascending bands):
  <5 excellent, <15 great, <30 warm, <50 keep practicing, else try again
Containment modes report perfect_inside on success and fall back to the
distance bands (measured to the centroid) on a miss.
"""
import logging
import random
from enum import Enum
from typing import List, Optional

from mapquiz.core.geometry import distance_miles, point_in_polygon
from mapquiz.core.pool import pick_random
from mapquiz.errors import EmptyPoolError, RoundStateError
from mapquiz.models import (
    MessageTier,
    ModeDefinition,
    Point,
    RoundOutcome,
    RoundState,
    Target,
)


logger = logging.getLogger(__name__)


# (upper bound in miles, tier), checked in order
DISTANCE_BANDS = [
    (5, MessageTier.EXCELLENT),
    (15, MessageTier.GREAT),
    (30, MessageTier.WARM),
    (50, MessageTier.KEEP_PRACTICING),
]


class RoundPhase(str, Enum):
    IDLE = "idle"
    AWAITING_GUESS = "awaiting_guess"
    RESOLVED = "resolved"


def classify_distance(miles: float) -> MessageTier:
    """Map a distance onto its message band"""
    for upper, tier in DISTANCE_BANDS:
        if miles < upper:
            return tier
    return MessageTier.TRY_AGAIN


def meets_threshold(miles: float, threshold_miles: float) -> bool:
    """Strict comparison: exactly on the threshold is a miss"""
    return miles < threshold_miles


def score_guess(mode: ModeDefinition, target: Target, point: Point) -> RoundOutcome:
    """
    Evaluate a guess against a target under the mode's scoring rule

    Args:
        mode: Mode definition (decides distance vs containment)
        target: Round target
        point: Guess coordinate

    Returns:
        RoundOutcome with success flag, distance and message tier
    """
    miles = distance_miles(point, target.location)

    if mode.scoring.kind == "containment":
        # No geometry means nothing to be inside of
        inside = point_in_polygon(point, target.geometry) if target.geometry else False
        tier = MessageTier.PERFECT_INSIDE if inside else classify_distance(miles)
        return RoundOutcome(
            success=inside,
            distance_miles=miles,
            message_tier=tier,
            inside=inside,
        )

    return RoundOutcome(
        success=meets_threshold(miles, mode.scoring.threshold_miles),
        distance_miles=miles,
        message_tier=classify_distance(miles),
    )


class RoundEngine:
    """Holds the live round and its outcome"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.mode: Optional[ModeDefinition] = None
        self.round: Optional[RoundState] = None
        self.outcome: Optional[RoundOutcome] = None

    @property
    def phase(self) -> RoundPhase:
        if self.round is None:
            return RoundPhase.IDLE
        if self.round.guessed:
            return RoundPhase.RESOLVED
        return RoundPhase.AWAITING_GUESS

    def new_round(self, mode: ModeDefinition, pool: List[Target], round_number: int = 1) -> RoundState:
        """
        Draw a target and wait for a guess

        Raises:
            EmptyPoolError: If pool is empty (engine state untouched)
        """
        if not pool:
            raise EmptyPoolError(f"No targets available for mode '{mode.key}'")

        target = pick_random(pool, self.rng)
        self.mode = mode
        self.round = RoundState(mode=mode.key, target=target, round_number=round_number)
        self.outcome = None

        logger.info(f"🎯 Round {round_number} ({mode.key}): find {target.name}")
        return self.round

    def evaluate(self, point: Point, counted: bool = True) -> RoundOutcome:
        """
        Score a guess for the live round

        Only the first guess of an attempt counts; later calls return the
        stored outcome unchanged.

        Raises:
            RoundStateError: If no round is active
        """
        if self.round is None or self.mode is None:
            raise RoundStateError("No active round. Start a mode first.")

        if self.round.guessed and self.outcome is not None:
            return self.outcome

        outcome = score_guess(self.mode, self.round.target, point)
        if not counted:
            outcome = outcome.model_copy(update={"counted": False})

        self.round.guessed = True
        self.outcome = outcome

        logger.info(
            f"{'✅' if outcome.success else '❌'} {self.round.target.name} | "
            f"{outcome.distance_miles:.2f} mi | {outcome.message_tier.value}"
        )
        return outcome

    def retry(self) -> RoundState:
        """
        Guess the same target again

        Raises:
            RoundStateError: If the round has not been guessed yet
        """
        if self.phase != RoundPhase.RESOLVED:
            raise RoundStateError("Retry is only allowed after a guess")

        self.round.guessed = False
        self.round.attempt += 1
        self.outcome = None
        return self.round

    def reset(self) -> None:
        """Back to idle"""
        self.mode = None
        self.round = None
        self.outcome = None
