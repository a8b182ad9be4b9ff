"""Deterministic, headless match engine for pitchcards.

IMPORTANT: This package must stay free of I/O; every random draw comes from a
generator built from an explicit seed.
"""

from .formations import FormationError, build_catalog, check_formation, get_formation
from .match import MatchConfig, formation_advantage, pick_scorers, simulate_match
from .play import play_match
from .ratings import compute_overall, position_suitability, synthesize_attributes
from .rng import derive_seed, seeded_rng
from .strength import compute_team_rating
from .timeline import build_commentary, build_match_timeline, build_summary, momentum
from .types import (
    AttributeSet,
    Card,
    CardDatabase,
    Formation,
    MatchEvent,
    MatchReport,
    MatchResult,
    ScorerEntry,
    Slot,
    Stadium,
    Team,
    VenueModifiers,
)

__all__ = [
    "AttributeSet",
    "Card",
    "CardDatabase",
    "Formation",
    "FormationError",
    "MatchConfig",
    "MatchEvent",
    "MatchReport",
    "MatchResult",
    "ScorerEntry",
    "Slot",
    "Stadium",
    "Team",
    "VenueModifiers",
    "build_catalog",
    "build_commentary",
    "build_match_timeline",
    "build_summary",
    "check_formation",
    "compute_overall",
    "compute_team_rating",
    "derive_seed",
    "formation_advantage",
    "get_formation",
    "momentum",
    "pick_scorers",
    "play_match",
    "position_suitability",
    "seeded_rng",
    "simulate_match",
    "synthesize_attributes",
]
