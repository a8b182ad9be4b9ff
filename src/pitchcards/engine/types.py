from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal

Position = Literal["GK", "DEF", "MID", "ATT"]
Weather = Literal["sun", "rain", "wind"]
EventKind = Literal["kickoff", "goal", "moment", "half", "full"]
Momentum = Literal["home", "away", "even"]

POSITIONS: tuple[Position, ...] = ("GK", "DEF", "MID", "ATT")
ATTRIBUTE_NAMES = ("pace", "shooting", "passing", "defense", "physical")


@dataclass(frozen=True)
class AttributeSet:
    pace: int
    shooting: int
    passing: int
    defense: int
    physical: int

    def as_dict(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in ATTRIBUTE_NAMES}


@dataclass(frozen=True)
class Card:
    id: str
    name: str
    position: Position
    attributes: AttributeSet
    overall: int
    club: str = ""
    league: str = ""
    image_url: str = ""
    player_id: int | None = None


@dataclass(frozen=True)
class CardDatabase:
    """Identity -> Card lookup handed to the engine by the caller."""

    cards: dict[str, Card]

    def get(self, card_id: str | None) -> Card | None:
        if card_id is None:
            return None
        return self.cards.get(card_id)

    def all_ids(self) -> Sequence[str]:
        return list(self.cards.keys())


@dataclass(frozen=True)
class Slot:
    key: str
    role: Position
    x: float = 50.0  # pitch coordinates in percent, rendering only
    y: float = 50.0


@dataclass(frozen=True)
class Formation:
    id: str
    slots: tuple[Slot, ...]

    def slot_keys(self) -> list[str]:
        return [s.key for s in self.slots]


Lineup = Mapping[str, str | None]


@dataclass(frozen=True)
class Team:
    name: str
    formation_id: str
    lineup: Lineup = field(default_factory=dict)

    @staticmethod
    def empty(name: str, formation: Formation) -> "Team":
        return Team(
            name=name,
            formation_id=formation.id,
            lineup={key: None for key in formation.slot_keys()},
        )


@dataclass(frozen=True)
class VenueModifiers:
    home_advantage: float = 0.0
    capacity_bonus: float = 0.0
    weather: Weather = "sun"


@dataclass(frozen=True)
class Stadium:
    id: int
    name: str
    city: str
    capacity: int
    modifiers: VenueModifiers
    image_url: str = ""


@dataclass(frozen=True)
class MatchResult:
    rating_home: int
    rating_away: int
    home_goals: int
    away_goals: int
    formation_boost: float
    stadium_boost: float
    capacity_boost: float
    weather_boost: float
    home_strength: float
    away_strength: float


@dataclass(frozen=True)
class ScorerEntry:
    card_id: str
    name: str
    minute: int


@dataclass(frozen=True)
class MatchEvent:
    minute: int
    kind: EventKind
    text: str


@dataclass(frozen=True)
class MatchReport:
    seed: int
    home_name: str
    away_name: str
    result: MatchResult
    scorers_home: tuple[ScorerEntry, ...]
    scorers_away: tuple[ScorerEntry, ...]
    timeline: tuple[MatchEvent, ...]
    summary: str
    commentary: tuple[str, ...]
    momentum: Momentum
