from __future__ import annotations

from collections.abc import Mapping

from .ratings import position_suitability
from .rng import clamp, round_half_up
from .types import Card, Formation, Slot, Team

UNFIELDED_RATING = 45
RATING_RANGE = (30, 99)


def fielded_cards(team: Team, cards: Mapping[str, Card], formation: Formation) -> list[tuple[Slot, Card]]:
    """Resolved (slot, card) pairs in formation order; unknown ids are skipped."""
    out: list[tuple[Slot, Card]] = []
    for slot in formation.slots:
        card_id = team.lineup.get(slot.key)
        if not card_id:
            continue
        card = cards.get(card_id)
        if card is None:
            continue
        out.append((slot, card))
    return out


def compute_team_rating(team: Team, cards: Mapping[str, Card], formation: Formation) -> int:
    fielded = fielded_cards(team, cards, formation)
    if not fielded:
        return UNFIELDED_RATING

    total = 0
    suitability = 0.0
    for slot, card in fielded:
        total += card.overall
        suitability += position_suitability(card.position, slot.role)

    count = len(fielded)
    rating = round_half_up((total / count) * (suitability / count))
    return int(clamp(rating, *RATING_RANGE))
