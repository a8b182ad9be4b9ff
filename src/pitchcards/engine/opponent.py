from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from .ratings import position_suitability
from .types import Card, Formation, Team


def pick_opponent_formation(home_formation_id: str, catalog: Mapping[str, Formation]) -> Formation:
    """First catalog formation that differs from the home side's."""
    formations = list(catalog.values())
    if not formations:
        raise ValueError("Formation catalog is empty.")
    for formation in formations:
        if formation.id != home_formation_id:
            return formation
    return formations[0]


def _slot_value(card: Card, role: str) -> float:
    return card.overall * position_suitability(card.position, role)


def build_opponent(
    name: str,
    formation: Formation,
    pool: Sequence[Card],
    exclude: Iterable[str] = (),
) -> Team:
    """Field a computer XI greedily, slot by slot.

    Each slot takes the unused card with the best overall x suitability; ties
    keep pool order. Slots stay empty once the pool runs dry.
    """
    used = set(exclude)
    lineup: dict[str, str | None] = {}
    for slot in formation.slots:
        best: tuple[float, Card] | None = None
        for card in pool:
            if card.id in used:
                continue
            value = _slot_value(card, slot.role)
            if best is None or value > best[0]:
                best = (value, card)
        if best is None:
            lineup[slot.key] = None
            continue
        used.add(best[1].id)
        lineup[slot.key] = best[1].id
    return Team(name=name, formation_id=formation.id, lineup=lineup)
