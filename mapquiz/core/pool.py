"""
Target pool - per-mode candidate selection
"""
import random
from typing import List, Optional

from mapquiz.errors import EmptyPoolError, InvalidPoolSizeError
from mapquiz.models import ModeDefinition, Target


ALL_TARGETS = -1


def validate_pool_size(pool_size: int) -> int:
    """Pool size must be -1 (all) or > 0"""
    if isinstance(pool_size, bool) or not isinstance(pool_size, int):
        raise InvalidPoolSizeError(f"Pool size must be an integer, got {pool_size!r}")
    if pool_size != ALL_TARGETS and pool_size <= 0:
        raise InvalidPoolSizeError(f"Pool size must be -1 or positive, got {pool_size}")
    return pool_size


def build_pool(mode: ModeDefinition, records: List[Target], pool_size: int = ALL_TARGETS) -> List[Target]:
    """
    Build the ordered candidate list for a mode

    Rules:
      - cities: population descending (stable), first pool_size (-1 = all)
      - county-seats: records flagged as county seats
      - others: all records unchanged

    Args:
        mode: Mode definition
        records: Records from the mode's data source
        pool_size: Size limit for modes with pool size control

    Returns:
        Non-empty list of targets

    Raises:
        InvalidPoolSizeError: If pool_size is not -1 or positive
        EmptyPoolError: If no targets remain
    """
    validate_pool_size(pool_size)

    if mode.key == "cities":
        # sorted() is stable, so equal populations keep source order
        pool = sorted(records, key=lambda t: t.population or 0, reverse=True)
        if pool_size != ALL_TARGETS:
            pool = pool[:pool_size]
    elif mode.key == "county-seats":
        pool = [t for t in records if t.is_county_seat is True]
    else:
        pool = list(records)

    if not pool:
        raise EmptyPoolError(f"No targets available for mode '{mode.key}'")

    return pool


def pick_random(pool: List[Target], rng: Optional[random.Random] = None) -> Target:
    """
    Uniform random pick with replacement

    Args:
        pool: Candidate targets
        rng: Random source (defaults to the module-level generator)
    """
    if not pool:
        raise EmptyPoolError("Cannot pick from an empty pool")
    rng = rng or random
    return pool[rng.randrange(len(pool))]
