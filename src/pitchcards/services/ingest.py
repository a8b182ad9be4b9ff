"""Map external player/venue records onto engine cards and venues.

Records follow the shape of the public football stats APIs (a `player` block
plus a list of `statistics` blocks; venues with `capacity`). Fetching them is
the caller's business: this module only maps what it is handed and falls back
to the static dataset when there is nothing usable.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping

from pitchcards.engine.ratings import make_card, synthesize_attributes
from pitchcards.engine.rng import clamp, round_half_up, round_to_tenth
from pitchcards.engine.types import Card, CardDatabase, Position, Stadium, VenueModifiers, Weather

_log = logging.getLogger("pitchcards.ingest")

FULL_CAPACITY = 50000
WEATHER_BY_VENUE: tuple[Weather, ...] = ("rain", "sun", "wind")


def _block(obj: object, key: str) -> Mapping[str, object]:
    if isinstance(obj, Mapping):
        v = obj.get(key)
        if isinstance(v, Mapping):
            return v
    return {}


def _number(obj: Mapping[str, object], key: str, default: float = 0.0) -> float:
    v = obj.get(key)
    if isinstance(v, bool):
        return default
    if isinstance(v, (int, float)):
        return float(v)
    return default


def map_position(raw: object) -> Position:
    if not isinstance(raw, str) or not raw:
        return "MID"
    normalized = raw.upper()
    if "GOALKEEPER" in normalized or "GK" in normalized:
        return "GK"
    if "DEF" in normalized:
        return "DEF"
    if "MID" in normalized:
        return "MID"
    if "ATT" in normalized or "FOR" in normalized:
        return "ATT"
    return "MID"


def rating_from_stats(stats: Mapping[str, object]) -> int:
    """Coarse base rating for one statistics block.

    A match rating (0-10 scale) wins when present; otherwise the rating is
    built up from counting stats.
    """
    games = _block(stats, "games")
    try:
        match_rating = float(games.get("rating"))  # type: ignore[arg-type]
    except (TypeError, ValueError):
        match_rating = float("nan")
    if math.isfinite(match_rating):
        return int(clamp(round_half_up(match_rating * 10), 55, 94))

    goals = _block(stats, "goals")
    base = (
        60
        + _number(goals, "total") * 2
        + _number(goals, "assists") * 1.5
        + _number(_block(stats, "passes"), "total") / 120
        + _number(_block(stats, "tackles"), "total") / 40
        + _number(_block(stats, "duels"), "won") / 50
    )
    return int(clamp(round_half_up(base), 50, 90))


def card_from_record(item: Mapping[str, object], index: int) -> Card | None:
    player = _block(item, "player")
    player_id = player.get("id")
    name = player.get("name")
    if not isinstance(player_id, int) or isinstance(player_id, bool) or not isinstance(name, str):
        return None

    raw_stats = item.get("statistics")
    stats: Mapping[str, object] = {}
    if isinstance(raw_stats, list) and raw_stats and isinstance(raw_stats[0], Mapping):
        stats = raw_stats[0]

    position = map_position(_block(stats, "games").get("position"))
    attributes = synthesize_attributes(rating_from_stats(stats), position, seed=player_id + index)
    club = _block(stats, "team").get("name")
    league = _block(stats, "league").get("name")
    photo = player.get("photo")
    return make_card(
        f"card-{player_id}-{index}",
        name,
        position,
        attributes,
        club=club if isinstance(club, str) else "Unknown Club",
        league=league if isinstance(league, str) else "Unknown League",
        image_url=photo if isinstance(photo, str) else "",
        player_id=player_id,
    )


def venue_modifiers_from_capacity(capacity: int, venue_id: int) -> VenueModifiers:
    capacity_bonus = clamp(round_to_tenth(capacity / FULL_CAPACITY * 2), 0.0, 2.0)
    return VenueModifiers(
        home_advantage=1 + capacity_bonus * 0.4,
        capacity_bonus=capacity_bonus,
        weather=WEATHER_BY_VENUE[venue_id % len(WEATHER_BY_VENUE)],
    )


def stadium_from_record(item: Mapping[str, object]) -> Stadium | None:
    venue_id = item.get("id")
    name = item.get("name")
    if not isinstance(venue_id, int) or isinstance(venue_id, bool) or not isinstance(name, str):
        return None
    capacity = int(_number(item, "capacity"))
    city = item.get("city")
    image = item.get("image")
    return Stadium(
        id=venue_id,
        name=name,
        city=city if isinstance(city, str) else "",
        capacity=capacity,
        image_url=image if isinstance(image, str) else "",
        modifiers=venue_modifiers_from_capacity(capacity, venue_id),
    )


def load_cards(records: Iterable[Mapping[str, object]] | None, fallback: CardDatabase) -> CardDatabase:
    """Cards from external records, or the fallback dataset when none map."""
    cards: dict[str, Card] = {}
    for index, item in enumerate(records or ()):
        card = card_from_record(item, index)
        if card is None:
            _log.debug("Skipping malformed player record at index %d", index)
            continue
        cards[card.id] = card
    if not cards:
        _log.warning("No usable external player records; using %d fallback cards", len(fallback.cards))
        return fallback
    _log.info("Mapped %d external player records", len(cards))
    return CardDatabase(cards=cards)


def load_stadiums(
    records: Iterable[Mapping[str, object]] | None, fallback: Mapping[int, Stadium]
) -> dict[int, Stadium]:
    stadiums: dict[int, Stadium] = {}
    for item in records or ():
        stadium = stadium_from_record(item)
        if stadium is None:
            _log.debug("Skipping malformed venue record")
            continue
        stadiums[stadium.id] = stadium
    if not stadiums:
        _log.warning("No usable external venue records; using %d fallback stadiums", len(fallback))
        return dict(fallback)
    _log.info("Mapped %d external venue records", len(stadiums))
    return stadiums
