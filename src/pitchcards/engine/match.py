from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass

from .rng import clamp, round_half_up, round_to_tenth, seeded_rng
from .strength import compute_team_rating
from .types import Card, Formation, MatchResult, ScorerEntry, Team, VenueModifiers

# Each formation counters exactly one other.
FORMATION_ADVANTAGE: dict[str, str] = {
    "4-4-2": "3-5-2",
    "3-5-2": "4-3-3",
    "4-3-3": "4-4-2",
}

SCORING_POSITIONS = frozenset({"ATT", "MID"})
MATCH_MINUTES = 90
CAPACITY_BONUS_RANGE = (0.0, 2.0)


@dataclass(frozen=True)
class MatchConfig:
    home_goal_offset: float = 1.2
    away_goal_offset: float = 1.1
    noise_scale: float = 4.0
    goal_divisor: float = 12.0
    max_expected_goals: float = 6.0
    rain_penalty: float = -0.8
    formation_edge: float = 2.5


def formation_advantage(home_id: str, away_id: str, config: MatchConfig | None = None) -> float:
    """Formation match-up bonus from the home side's point of view."""
    cfg = config or MatchConfig()
    if home_id == away_id:
        return 0.0
    if FORMATION_ADVANTAGE.get(home_id) == away_id:
        return cfg.formation_edge
    if FORMATION_ADVANTAGE.get(away_id) == home_id:
        return -cfg.formation_edge
    return 0.0


def weather_boost(weather: str, config: MatchConfig | None = None) -> float:
    cfg = config or MatchConfig()
    if weather == "rain":
        return cfg.rain_penalty
    return 0.0


def simulate_match(
    home_team: Team,
    away_team: Team,
    formation_home: Formation,
    formation_away: Formation,
    cards: Mapping[str, Card],
    venue: VenueModifiers | None,
    seed: int,
    config: MatchConfig | None = None,
) -> MatchResult:
    """Play one match and return the score line with every term that built it.

    Draw order on the seeded stream is fixed: home noise, away noise, home
    expected-goal draw, away expected-goal draw.
    """
    cfg = config or MatchConfig()
    venue = venue or VenueModifiers()
    rng = seeded_rng(seed)

    rating_home = compute_team_rating(home_team, cards, formation_home)
    rating_away = compute_team_rating(away_team, cards, formation_away)

    formation_bonus = formation_advantage(formation_home.id, formation_away.id, cfg)
    stadium_bonus = float(venue.home_advantage)
    capacity_bonus = float(clamp(venue.capacity_bonus, *CAPACITY_BONUS_RANGE))
    weather_bonus = weather_boost(venue.weather, cfg)

    home_strength = (
        rating_home
        + formation_bonus
        + stadium_bonus
        + capacity_bonus
        + weather_bonus
        + rng.random() * cfg.noise_scale
    )
    away_strength = rating_away + rng.random() * cfg.noise_scale

    expected_home = clamp(
        (home_strength - away_strength) / cfg.goal_divisor + cfg.home_goal_offset + rng.random(),
        0,
        cfg.max_expected_goals,
    )
    expected_away = clamp(
        (away_strength - home_strength) / cfg.goal_divisor + cfg.away_goal_offset + rng.random(),
        0,
        cfg.max_expected_goals,
    )

    return MatchResult(
        rating_home=rating_home,
        rating_away=rating_away,
        home_goals=max(0, round_half_up(expected_home)),
        away_goals=max(0, round_half_up(expected_away)),
        formation_boost=formation_bonus,
        stadium_boost=stadium_bonus,
        capacity_boost=capacity_bonus,
        weather_boost=weather_bonus,
        home_strength=round_to_tenth(home_strength),
        away_strength=round_to_tenth(away_strength),
    )


def _scoring_pool(team: Team, cards: Mapping[str, Card]) -> list[Card]:
    resolved: list[Card] = []
    for card_id in team.lineup.values():
        if not card_id:
            continue
        card = cards.get(card_id)
        if card is not None:
            resolved.append(card)
    attackers = [c for c in resolved if c.position in SCORING_POSITIONS]
    return attackers or resolved


def pick_scorers(team: Team, goal_count: int, cards: Mapping[str, Card], seed: int) -> list[ScorerEntry]:
    """Pick who scored each goal and when.

    Attackers and midfielders are preferred; the whole fielded XI is used when
    neither is on the pitch. An empty lineup yields no entries.
    """
    if goal_count < 0:
        raise ValueError(f"goal_count must be >= 0, got {goal_count}")

    pool = _scoring_pool(team, cards)
    if not pool:
        return []

    rng = seeded_rng(seed)
    scorers: list[ScorerEntry] = []
    for _ in range(goal_count):
        pick = pool[math.floor(rng.random() * len(pool))]
        minute = math.floor(rng.random() * MATCH_MINUTES) + 1
        scorers.append(ScorerEntry(card_id=pick.id, name=pick.name, minute=minute))
    return scorers
