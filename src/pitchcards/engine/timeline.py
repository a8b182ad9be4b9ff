from __future__ import annotations

import math
from collections.abc import Sequence

from .rng import seeded_rng
from .types import MatchEvent, MatchResult, Momentum, ScorerEntry

EVENT_PRIORITY: dict[str, int] = {
    "kickoff": 0,
    "goal": 1,
    "moment": 2,
    "half": 3,
    "full": 4,
}

MOMENT_TEXTS: tuple[str, ...] = (
    "A brilliant save keeps the score level!",
    "What a tackle in midfield!",
    "The crowd roars as a shot flies just wide.",
    "A clever one-two cuts through the defense.",
    "The ball rattles the crossbar!",
    "A lightning-fast counter attack!",
    "The keeper rushes out to clear the danger.",
    "A long pass switches the play beautifully.",
    "Corner kick! Everyone crowds the box.",
    "A free kick curls just over the bar.",
)

MOMENT_MINUTES = (4, 87)
MIN_MOMENTS = 3
EXTRA_MOMENTS = 3
HALF_TIME = 45
FULL_TIME = 90
MOMENTUM_MARGIN = 3


def _goal_text(scorer: ScorerEntry, side: str) -> str:
    return f"GOAL! {scorer.name} scores for {side}!"


def build_match_timeline(
    home_name: str,
    away_name: str,
    scorers_home: Sequence[ScorerEntry],
    scorers_away: Sequence[ScorerEntry],
    seed: int,
) -> tuple[MatchEvent, ...]:
    """Expand scorers and flavor moments into a minute-ordered event list.

    Same-minute events always follow kickoff < goal < moment < half < full.
    """
    rng = seeded_rng(seed)
    events: list[MatchEvent] = [
        MatchEvent(minute=1, kind="kickoff", text=f"Kick-off! {home_name} vs {away_name}.")
    ]

    for scorer in scorers_home:
        events.append(MatchEvent(minute=scorer.minute, kind="goal", text=_goal_text(scorer, home_name)))
    for scorer in scorers_away:
        events.append(MatchEvent(minute=scorer.minute, kind="goal", text=_goal_text(scorer, away_name)))

    lo, hi = MOMENT_MINUTES
    moment_count = MIN_MOMENTS + math.floor(rng.random() * EXTRA_MOMENTS)
    for _ in range(moment_count):
        minute = lo + math.floor(rng.random() * (hi - lo + 1))
        text = MOMENT_TEXTS[math.floor(rng.random() * len(MOMENT_TEXTS))]
        events.append(MatchEvent(minute=minute, kind="moment", text=text))

    events.append(MatchEvent(minute=HALF_TIME, kind="half", text="Half-time whistle."))
    events.append(MatchEvent(minute=FULL_TIME, kind="full", text="Full-time! The referee ends the match."))

    events.sort(key=lambda e: (e.minute, EVENT_PRIORITY[e.kind]))
    return tuple(events)


def momentum(result: MatchResult) -> Momentum:
    diff = result.home_strength - result.away_strength
    if diff > MOMENTUM_MARGIN:
        return "home"
    if -diff > MOMENTUM_MARGIN:
        return "away"
    return "even"


def _venue(stadium_name: str | None) -> str:
    return stadium_name or "the stadium"


def build_summary(
    home_name: str,
    away_name: str,
    result: MatchResult,
    stadium_name: str | None = None,
) -> str:
    hg, ag = result.home_goals, result.away_goals
    if hg > ag:
        return f"{home_name} were on fire at {_venue(stadium_name)}! They won {hg}-{ag}."
    if ag > hg:
        return f"{away_name} surprised everyone and won {ag}-{hg}!"
    return f"It was a super close game at {_venue(stadium_name)}. {home_name} and {away_name} drew {hg}-{ag}."


def _scorer_line(team_name: str, scorers: Sequence[ScorerEntry]) -> str | None:
    if not scorers:
        return None
    ordered = sorted(scorers, key=lambda s: s.minute)
    parts = ", ".join(f"{s.name} ({s.minute}')" for s in ordered)
    return f"Goals for {team_name}: {parts}."


def build_commentary(
    home_name: str,
    away_name: str,
    result: MatchResult,
    scorers_home: Sequence[ScorerEntry],
    scorers_away: Sequence[ScorerEntry],
    stadium_name: str | None = None,
) -> list[str]:
    """Line-by-line match report. Pure: no randomness, no state."""
    hg, ag = result.home_goals, result.away_goals
    lines: list[str] = []

    if hg > ag:
        lines.append(f"{home_name} beat {away_name} {hg}-{ag} in front of the home crowd.")
    elif ag > hg:
        lines.append(f"{away_name} won {ag}-{hg} away from home against {home_name}.")
    else:
        lines.append(f"{home_name} and {away_name} shared the points, {hg}-{ag}.")

    if result.formation_boost > 0:
        lines.append(f"{home_name}'s formation had the upper hand (+{result.formation_boost:g}).")
    elif result.formation_boost < 0:
        lines.append(f"{away_name}'s formation had the upper hand (+{-result.formation_boost:g}).")
    if result.stadium_boost:
        lines.append(f"Home advantage at {_venue(stadium_name)} was worth {result.stadium_boost:+g}.")
    if result.capacity_boost:
        lines.append(f"The packed stands added {result.capacity_boost:+g}.")
    if result.weather_boost:
        lines.append(f"The rain slowed {home_name} down ({result.weather_boost:+g}).")

    mood = momentum(result)
    if mood == "home":
        lines.append(f"Momentum: {home_name} controlled the game.")
    elif mood == "away":
        lines.append(f"Momentum: {away_name} controlled the game.")
    else:
        lines.append("Momentum: it was an even contest.")

    for team_name, scorers in ((home_name, scorers_home), (away_name, scorers_away)):
        line = _scorer_line(team_name, scorers)
        if line:
            lines.append(line)
    return lines
