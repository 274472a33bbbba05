"""
Result presenter - assemble renderer-facing round data
"""
from typing import Dict, Optional
from urllib.parse import quote

from mapquiz.models import MessageTier, ModeDefinition, RoundOutcome, RoundState, Target


MESSAGES = {
    MessageTier.PERFECT_INSIDE: "🎯 Perfect! You found it!",
    MessageTier.EXCELLENT: "🎯 Excellent! Very close!",
    MessageTier.GREAT: "👍 Great job! Pretty close!",
    MessageTier.WARM: "✓ Not bad! Getting warmer!",
    MessageTier.KEEP_PRACTICING: "📍 Keep practicing!",
    MessageTier.TRY_AGAIN: "🗺️ Try again next time!",
}

WIKI_BASE_URL = "https://en.wikipedia.org/wiki/"


def wiki_url(target: Target, mode: ModeDefinition) -> str:
    """Wikipedia link: spaces become underscores, then the mode suffix"""
    title = target.name.strip().replace(" ", "_") + mode.wiki_suffix
    return WIKI_BASE_URL + quote(title, safe="_,().'")


def distance_text(outcome: RoundOutcome, target: Target, mode: ModeDefinition) -> str:
    if mode.is_polygon_mode:
        if outcome.inside:
            return f"You clicked inside {target.name}!"
        return f"You were outside {target.name}, {outcome.distance_miles:.2f} miles from its center."
    return f"You were {outcome.distance_miles:.2f} miles away!"


def present_round(round_state: RoundState, mode: ModeDefinition) -> Dict:
    """
    Data needed to show a new round (the answer stays hidden)
    """
    return {
        "mode": mode.key,
        "mode_label": mode.label,
        "round_number": round_state.round_number,
        "attempt": round_state.attempt,
        "target_name": round_state.target.name,
        "district_label": round_state.target.district_label,
    }


def present_outcome(
    outcome: RoundOutcome,
    round_state: RoundState,
    mode: ModeDefinition,
    streak: Optional[int] = None,
    high_score: Optional[int] = None,
) -> Dict:
    """
    Format a round outcome for display

    Returns:
        Dictionary with message, distance text, target details and answer
        geometry for drawing markers
    """
    target = round_state.target

    details = {"fun_fact": target.fun_fact, "wiki_url": wiki_url(target, mode)}
    if mode.shows_population and target.population is not None:
        details["population"] = f"{target.population:,}"
    if mode.shows_date_founded and target.date_founded:
        details["date_founded"] = target.date_founded

    return {
        "success": outcome.success,
        "counted": outcome.counted,
        "message_tier": outcome.message_tier.value,
        "message": MESSAGES[outcome.message_tier],
        "distance_miles": outcome.distance_miles,
        "distance_text": distance_text(outcome, target, mode),
        "result_label": mode.result_label,
        "next_action_label": mode.next_action_label,
        "target": {
            "name": target.name,
            "category": target.category.value,
            "location": target.location.model_dump(),
            "geometry": target.geometry.model_dump() if target.geometry else None,
        },
        "details": details,
        "streak": streak,
        "high_score": high_score,
    }
