from __future__ import annotations

from collections.abc import Mapping

from .rng import clamp, round_half_up, seeded_rng
from .types import ATTRIBUTE_NAMES, AttributeSet, Card, Position

POSITION_WEIGHTS: dict[str, dict[str, float]] = {
    "GK": {"pace": 0.10, "shooting": 0.05, "passing": 0.15, "defense": 0.45, "physical": 0.25},
    "DEF": {"pace": 0.15, "shooting": 0.05, "passing": 0.15, "defense": 0.40, "physical": 0.25},
    "MID": {"pace": 0.20, "shooting": 0.20, "passing": 0.30, "defense": 0.20, "physical": 0.10},
    "ATT": {"pace": 0.25, "shooting": 0.40, "passing": 0.15, "defense": 0.10, "physical": 0.10},
}

# Per-role baselines, centred on a base rating of 70.
ATTRIBUTE_TEMPLATES: dict[str, dict[str, int]] = {
    "GK": {"pace": 50, "shooting": 30, "passing": 55, "defense": 82, "physical": 78},
    "DEF": {"pace": 60, "shooting": 40, "passing": 55, "defense": 78, "physical": 75},
    "MID": {"pace": 70, "shooting": 65, "passing": 78, "defense": 60, "physical": 65},
    "ATT": {"pace": 78, "shooting": 82, "passing": 62, "defense": 45, "physical": 68},
}

# (card position, slot role) -> suitability for the adjacent-role cases.
POSITION_SUITABILITY: dict[tuple[str, str], float] = {
    ("MID", "DEF"): 0.92,
    ("DEF", "MID"): 0.90,
    ("ATT", "MID"): 0.92,
    ("MID", "ATT"): 0.90,
}
GK_SLOT_SUITABILITY = 0.75
DEFAULT_SUITABILITY = 0.85

BASE_RATING_RANGE = (40, 92)
DEFAULT_BASE_RATING = 70
ATTRIBUTE_RANGE = (25, 99)
JITTER_SPAN = 12


def _attr_values(attributes: AttributeSet | Mapping[str, int]) -> dict[str, int]:
    if isinstance(attributes, AttributeSet):
        return attributes.as_dict()
    return {name: int(attributes[name]) for name in ATTRIBUTE_NAMES}


def compute_overall(attributes: AttributeSet | Mapping[str, int], role: str) -> int:
    """Position-weighted overall in [0, 99]. Unknown roles use MID weights."""
    weights = POSITION_WEIGHTS.get(role, POSITION_WEIGHTS["MID"])
    values = _attr_values(attributes)
    raw = sum(values[name] * weights[name] for name in ATTRIBUTE_NAMES)
    return round_half_up(clamp(raw, 0, 99))


def synthesize_attributes(base_rating: float | None, role: str, seed: int) -> AttributeSet:
    """Build a full attribute set from a coarse quality scalar.

    The same (base_rating, role, seed) triple always yields the same set, so an
    external player maps to the same card on every fetch.
    """
    rng = seeded_rng(seed)
    base = clamp(DEFAULT_BASE_RATING if base_rating is None else base_rating, *BASE_RATING_RANGE)
    template = ATTRIBUTE_TEMPLATES.get(role, ATTRIBUTE_TEMPLATES["MID"])

    values: dict[str, int] = {}
    for name in ATTRIBUTE_NAMES:
        jitter = round_half_up((rng.random() - 0.5) * JITTER_SPAN)
        raw = template[name] + (base - DEFAULT_BASE_RATING) + jitter
        values[name] = int(clamp(round_half_up(raw), *ATTRIBUTE_RANGE))
    return AttributeSet(**values)


def position_suitability(card_position: str, slot_role: str) -> float:
    if card_position == slot_role:
        return 1.0
    pair = POSITION_SUITABILITY.get((card_position, slot_role))
    if pair is not None:
        return pair
    if slot_role == "GK":
        return GK_SLOT_SUITABILITY
    return DEFAULT_SUITABILITY


def make_card(
    card_id: str,
    name: str,
    position: Position,
    attributes: AttributeSet,
    *,
    club: str = "",
    league: str = "",
    image_url: str = "",
    player_id: int | None = None,
) -> Card:
    return Card(
        id=card_id,
        name=name,
        position=position,
        attributes=attributes,
        overall=compute_overall(attributes, position),
        club=club,
        league=league,
        image_url=image_url,
        player_id=player_id,
    )
