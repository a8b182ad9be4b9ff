"""Formation checks and catalog lookup.

Formations are content: the catalog is loaded from ``formations.json`` by the
content service and passed into the engine.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .types import POSITIONS, Formation

SLOTS_PER_FORMATION = 11


class FormationError(ValueError):
    pass


def check_formation(formation: Formation) -> Formation:
    if len(formation.slots) != SLOTS_PER_FORMATION:
        raise FormationError(
            f"Formation {formation.id} has {len(formation.slots)} slots, expected {SLOTS_PER_FORMATION}."
        )
    seen: set[str] = set()
    for slot in formation.slots:
        if slot.role not in POSITIONS:
            raise FormationError(f"Formation {formation.id}: slot {slot.key} has invalid role {slot.role!r}.")
        if slot.key in seen:
            raise FormationError(f"Formation {formation.id}: duplicate slot key {slot.key}.")
        seen.add(slot.key)
    return formation


def build_catalog(formations: Iterable[Formation]) -> dict[str, Formation]:
    return {f.id: check_formation(f) for f in formations}


def get_formation(formation_id: str, catalog: Mapping[str, Formation]) -> Formation:
    try:
        return catalog[formation_id]
    except KeyError as e:
        raise FormationError(f"Unknown formation: {formation_id}") from e
