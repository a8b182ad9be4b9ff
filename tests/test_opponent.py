from __future__ import annotations

import pytest

from pitchcards.engine.opponent import build_opponent, pick_opponent_formation
from pitchcards.engine.strength import compute_team_rating
from pitchcards.engine.types import AttributeSet, Card, Formation
from pitchcards.paths import get_paths
from pitchcards.services.content import ContentService


def _formations() -> dict[str, Formation]:
    paths = get_paths()
    return ContentService(paths.data_dir, paths.schema_dir).load_formations()


def _card(card_id: str, position: str, overall: int) -> Card:
    attrs = AttributeSet(overall, overall, overall, overall, overall)
    return Card(id=card_id, name=card_id, position=position, attributes=attrs, overall=overall)  # type: ignore[arg-type]


def test_pick_opponent_formation_differs() -> None:
    assert pick_opponent_formation("4-4-2", _formations()).id == "4-3-3"
    assert pick_opponent_formation("4-3-3", _formations()).id == "4-4-2"
    only = {"4-4-2": _formations()["4-4-2"]}
    assert pick_opponent_formation("4-4-2", only).id == "4-4-2"
    with pytest.raises(ValueError):
        pick_opponent_formation("4-4-2", {})


def test_build_opponent_prefers_natural_positions() -> None:
    formation = _formations()["4-4-2"]
    pool = [_card(f"gk{i}", "GK", 70) for i in range(2)]
    pool += [_card(f"d{i}", "DEF", 75) for i in range(4)]
    pool += [_card(f"m{i}", "MID", 78) for i in range(4)]
    pool += [_card(f"a{i}", "ATT", 80) for i in range(2)]

    team = build_opponent("Robo Strikers", formation, pool)
    cards = {c.id: c for c in pool}

    assert team.formation_id == "4-4-2"
    assert list(team.lineup) == formation.slot_keys()
    assert team.lineup["GK"] == "gk0"
    for slot in formation.slots:
        card_id = team.lineup[slot.key]
        assert card_id is not None
        assert cards[card_id].position == slot.role
    assert compute_team_rating(team, cards, formation) == 77


def test_build_opponent_never_reuses_cards() -> None:
    pool = [_card(f"c{i}", "MID", 60 + i) for i in range(20)]
    team = build_opponent("Mids", _formations()["3-5-2"], pool)
    picked = [c for c in team.lineup.values() if c]
    assert len(picked) == 11
    assert len(set(picked)) == 11


def test_build_opponent_respects_exclusions_and_short_pool() -> None:
    pool = [_card(f"c{i}", "ATT", 70) for i in range(5)]
    team = build_opponent("Few", _formations()["4-3-3"], pool, exclude=["c0", "c1"])
    picked = [c for c in team.lineup.values() if c]
    assert sorted(picked) == ["c2", "c3", "c4"]
    assert list(team.lineup.values()).count(None) == 8
