from __future__ import annotations

from collections.abc import Mapping

from .formations import check_formation, get_formation
from .match import MatchConfig, pick_scorers, simulate_match
from .rng import derive_seed
from .timeline import build_commentary, build_match_timeline, build_summary, momentum
from .types import Card, Formation, MatchReport, Stadium, Team


def play_match(
    home_team: Team,
    away_team: Team,
    catalog: Mapping[str, Formation],
    cards: Mapping[str, Card],
    stadium: Stadium | None,
    seed: int,
    config: MatchConfig | None = None,
) -> MatchReport:
    """Run the whole pipeline for one fixture from a single seed.

    Each stage gets its own stream derived from `seed`, so replaying with the
    same seed reproduces the report exactly.
    """
    formation_home = check_formation(get_formation(home_team.formation_id, catalog))
    formation_away = check_formation(get_formation(away_team.formation_id, catalog))
    venue = stadium.modifiers if stadium is not None else None
    stadium_name = stadium.name if stadium is not None else None

    result = simulate_match(
        home_team,
        away_team,
        formation_home,
        formation_away,
        cards,
        venue,
        derive_seed(seed, "match"),
        config,
    )
    scorers_home = pick_scorers(home_team, result.home_goals, cards, derive_seed(seed, "scorers-home"))
    scorers_away = pick_scorers(away_team, result.away_goals, cards, derive_seed(seed, "scorers-away"))
    timeline = build_match_timeline(
        home_team.name,
        away_team.name,
        scorers_home,
        scorers_away,
        derive_seed(seed, "timeline"),
    )

    return MatchReport(
        seed=seed,
        home_name=home_team.name,
        away_name=away_team.name,
        result=result,
        scorers_home=tuple(scorers_home),
        scorers_away=tuple(scorers_away),
        timeline=timeline,
        summary=build_summary(home_team.name, away_team.name, result, stadium_name),
        commentary=tuple(
            build_commentary(home_team.name, away_team.name, result, scorers_home, scorers_away, stadium_name)
        ),
        momentum=momentum(result),
    )
