from __future__ import annotations


from .types import Card, MatchEvent, MatchReport, MatchResult, ScorerEntry


def card_to_dict(c: Card) -> dict[str, object]:
    return {
        "id": c.id,
        "name": c.name,
        "position": c.position,
        "stats": c.attributes.as_dict(),
        "overall": c.overall,
        "club": c.club,
        "league": c.league,
        "image_url": c.image_url,
        "player_id": c.player_id,
    }


def result_to_dict(r: MatchResult) -> dict[str, object]:
    return {
        "score": {"home": r.home_goals, "away": r.away_goals},
        "rating_home": r.rating_home,
        "rating_away": r.rating_away,
        "boosts": {
            "formation": r.formation_boost,
            "stadium": r.stadium_boost,
            "capacity": r.capacity_boost,
            "weather": r.weather_boost,
        },
        "home_strength": r.home_strength,
        "away_strength": r.away_strength,
    }


def scorer_to_dict(s: ScorerEntry) -> dict[str, object]:
    return {"card_id": s.card_id, "name": s.name, "minute": s.minute}


def event_to_dict(e: MatchEvent) -> dict[str, object]:
    return {"minute": e.minute, "kind": e.kind, "text": e.text}


def snapshot(report: MatchReport) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of a played match."""
    return {
        "seed": report.seed,
        "home": report.home_name,
        "away": report.away_name,
        "result": result_to_dict(report.result),
        "momentum": report.momentum,
        "scorers": {
            "home": [scorer_to_dict(s) for s in report.scorers_home],
            "away": [scorer_to_dict(s) for s in report.scorers_away],
        },
        "timeline": [event_to_dict(e) for e in report.timeline],
        "summary": report.summary,
        "commentary": list(report.commentary),
    }
