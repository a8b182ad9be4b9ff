from __future__ import annotations

import logging

import pytest

from pitchcards.engine.ratings import synthesize_attributes
from pitchcards.paths import get_paths
from pitchcards.services.content import ContentService
from pitchcards.services.ingest import (
    card_from_record,
    load_cards,
    load_stadiums,
    map_position,
    rating_from_stats,
    stadium_from_record,
    venue_modifiers_from_capacity,
)


def _fallback():
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    return content.load_players(), content.load_stadiums()


def _record(player_id: int = 276, position: str = "Attacker", rating: object = "7.2") -> dict[str, object]:
    return {
        "player": {"id": player_id, "name": "Test Striker", "photo": "https://example.invalid/p.png"},
        "statistics": [
            {
                "team": {"name": "Harbor City"},
                "league": {"name": "Premier League"},
                "games": {"position": position, "rating": rating},
                "goals": {"total": 2, "assists": 2},
            }
        ],
    }


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Goalkeeper", "GK"),
        ("gk", "GK"),
        ("Defender", "DEF"),
        ("Midfielder", "MID"),
        ("Attacker", "ATT"),
        ("Forward", "ATT"),
        ("Winger", "MID"),
        ("", "MID"),
        (None, "MID"),
    ],
)
def test_map_position(raw: object, expected: str) -> None:
    assert map_position(raw) == expected


def test_rating_prefers_match_rating() -> None:
    assert rating_from_stats({"games": {"rating": "7.2"}}) == 72
    assert rating_from_stats({"games": {"rating": "9.9"}}) == 94
    assert rating_from_stats({"games": {"rating": "3.0"}}) == 55


def test_rating_from_counting_stats() -> None:
    assert rating_from_stats({}) == 60
    assert rating_from_stats({"games": {"rating": None}, "goals": {"total": 2, "assists": 2}}) == 67
    busy = {
        "goals": {"total": 10, "assists": 4},
        "passes": {"total": 1200},
        "tackles": {"total": 40},
        "duels": {"won": 100},
    }
    assert rating_from_stats(busy) == 90


def test_card_from_record_is_stable() -> None:
    card = card_from_record(_record(), index=3)
    assert card is not None
    assert card.id == "card-276-3"
    assert card.position == "ATT"
    assert card.club == "Harbor City"
    assert card.league == "Premier League"
    assert card.attributes == synthesize_attributes(72, "ATT", seed=279)
    assert card_from_record(_record(), index=3) == card


def test_card_from_record_defaults() -> None:
    card = card_from_record({"player": {"id": 5, "name": "No Stats"}}, index=0)
    assert card is not None
    assert card.position == "MID"
    assert card.club == "Unknown Club"
    assert card.league == "Unknown League"
    assert card.attributes == synthesize_attributes(60, "MID", seed=5)


def test_malformed_records_are_skipped() -> None:
    assert card_from_record({}, 0) is None
    assert card_from_record({"player": {"id": "x", "name": "Bad"}}, 0) is None
    assert stadium_from_record({"name": "No Id"}) is None


def test_venue_modifiers_from_capacity() -> None:
    full = venue_modifiers_from_capacity(50000, venue_id=3)
    assert full.capacity_bonus == 2.0
    assert full.home_advantage == pytest.approx(1.8)
    assert full.weather == "rain"

    empty = venue_modifiers_from_capacity(0, venue_id=4)
    assert empty.capacity_bonus == 0.0
    assert empty.home_advantage == 1.0
    assert empty.weather == "sun"

    huge = venue_modifiers_from_capacity(200000, venue_id=5)
    assert huge.capacity_bonus == 2.0
    assert huge.weather == "wind"

    assert venue_modifiers_from_capacity(42000, venue_id=1).capacity_bonus == pytest.approx(1.7)


def test_stadium_from_record() -> None:
    stadium = stadium_from_record({"id": 556, "name": "Old Trafford", "city": "Manchester", "capacity": 76212})
    assert stadium is not None
    assert stadium.capacity == 76212
    assert stadium.modifiers.capacity_bonus == 2.0
    assert stadium.modifiers.weather == "sun"


def test_load_cards_uses_records() -> None:
    fallback, _ = _fallback()
    db = load_cards([_record(1), _record(2, "Defender")], fallback)
    assert db.all_ids() == ["card-1-0", "card-2-1"]
    assert db.cards["card-2-1"].position == "DEF"


def test_load_cards_falls_back(caplog: pytest.LogCaptureFixture) -> None:
    fallback, _ = _fallback()
    with caplog.at_level(logging.WARNING, logger="pitchcards.ingest"):
        assert load_cards(None, fallback) is fallback
        assert load_cards([], fallback) is fallback
        assert load_cards([{"junk": True}], fallback) is fallback
    assert "fallback" in caplog.text


def test_load_stadiums_falls_back() -> None:
    _, fallback = _fallback()
    assert load_stadiums(None, fallback) == fallback
    mapped = load_stadiums([{"id": 9, "name": "New Ground", "capacity": 10000}], fallback)
    assert list(mapped) == [9]
