"""
Tests for the QuizGame facade
"""
import pytest

from mapquiz.core.game import QuizGame
from mapquiz.core.round import RoundPhase
from mapquiz.errors import EmptyPoolError, InvalidPoolSizeError, RoundStateError, UnknownModeError
from mapquiz.models import Point

from conftest import SequenceRng


DETROIT = Point(lat=42.3314, lng=-83.0458)
MARQUETTE = Point(lat=46.5436, lng=-87.3954)


def test_start_mode(game):
    round_state = game.start_mode("cities")
    assert round_state.target.name == "Detroit"
    assert round_state.round_number == 1
    assert game.mode.key == "cities"
    assert game.engine.phase == RoundPhase.AWAITING_GUESS
    assert game.session.state.last_mode == "cities"


def test_start_unknown_mode_keeps_state(game):
    game.start_mode("cities")
    with pytest.raises(UnknownModeError):
        game.start_mode("lakes")
    assert game.mode.key == "cities"
    assert game.session.state.last_mode == "cities"


def test_start_empty_mode_keeps_state(game):
    """Parks has no data: EmptyPoolError and no transition"""
    with pytest.raises(EmptyPoolError):
        game.start_mode("parks")
    assert game.mode is None
    assert game.engine.phase == RoundPhase.IDLE


def test_guess_before_start(game):
    with pytest.raises(RoundStateError):
        game.submit_guess(DETROIT)


def test_guess_counts_once(game):
    """Re-submitting in the same round does not touch the streak again"""
    game.start_mode("cities")
    first = game.submit_guess(DETROIT)
    second = game.submit_guess(MARQUETTE)

    assert second is first
    assert first.success is True
    assert first.counted is True
    assert game.session.state.streak == 1


def test_streak_across_rounds(game):
    game.start_mode("cities")
    for _ in range(3):
        game.submit_guess(DETROIT)
        game.next_round()
    assert game.session.state.streak == 3
    assert game.round_number == 4

    game.submit_guess(MARQUETTE)
    assert game.session.state.streak == 0
    assert game.session.state.high_score == 3


def test_retry_is_practice(game):
    """Guesses after a retry are scored but leave the streak alone"""
    game.start_mode("cities")
    game.submit_guess(MARQUETTE)
    assert game.session.state.streak == 0

    round_state = game.retry()
    assert round_state.target.name == "Detroit"
    assert round_state.attempt == 2

    outcome = game.submit_guess(DETROIT)
    assert outcome.success is True
    assert outcome.counted is False
    assert game.session.state.streak == 0


def test_next_round_requires_mode(game):
    with pytest.raises(RoundStateError):
        game.next_round()


def test_change_mode(game):
    game.start_mode("counties")
    game.submit_guess(DETROIT)
    game.change_mode()

    assert game.mode is None
    assert game.pool == []
    assert game.engine.phase == RoundPhase.IDLE
    assert game.session.state.streak == 1


def test_counties_containment(game):
    game.start_mode("counties")
    outcome = game.submit_guess(DETROIT)
    assert outcome.inside is True
    assert outcome.success is True


def test_pool_size_applies_to_cities(game):
    game.set_pool_size(3)
    game.start_mode("cities")
    assert [t.name for t in game.pool] == ["Detroit", "Grand Rapids", "Warren"]


def test_pool_size_restarts_cities_mode(game):
    game.start_mode("cities")
    game.next_round()
    restarted = game.set_pool_size(2)

    assert restarted is not None
    assert restarted.round_number == 1
    assert len(game.pool) == 2


def test_pool_size_ignored_by_other_modes(game):
    game.start_mode("county-seats")
    assert game.set_pool_size(1) is None
    assert len(game.pool) == 4
    assert game.session.state.cities_pool_size == 1


def test_invalid_pool_size(game):
    with pytest.raises(InvalidPoolSizeError):
        game.set_pool_size(0)


def test_preferences_survive_restart(datasets, store):
    """High score, pool size, counties flag and last mode reload from the store"""
    game = QuizGame(datasets, store, rng=SequenceRng([]))
    game.set_pool_size(5)
    game.set_counties_visible(True)
    game.start_mode("cities")
    game.submit_guess(DETROIT)

    reloaded = QuizGame(datasets, store)
    state = reloaded.session.state
    assert state.high_score == 1
    assert state.streak == 0
    assert state.cities_pool_size == 5
    assert state.counties_visible is True
    assert state.last_mode == "cities"


def test_snapshot(game):
    assert game.snapshot()["phase"] == "idle"

    game.start_mode("cities")
    game.submit_guess(DETROIT)
    snap = game.snapshot()
    assert snap["phase"] == "resolved"
    assert snap["mode"] == "cities"
    assert snap["round"]["target"]["name"] == "Detroit"
    assert snap["outcome"]["message_tier"] == "excellent"
    assert snap["session"]["streak"] == 1
