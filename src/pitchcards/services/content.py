from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from pitchcards.engine.formations import FormationError, build_catalog
from pitchcards.engine.ratings import make_card, synthesize_attributes
from pitchcards.engine.types import Card, CardDatabase, Formation, Slot, Stadium, VenueModifiers

_log = logging.getLogger("pitchcards.content")


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def _load_schema(path: Path) -> object:
    return _load_json(path)


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContentError(f"Expected int for {key}")
    return v


def _require_number(obj: Mapping[str, object], key: str) -> float:
    v = obj.get(key)
    if not isinstance(v, (int, float)) or isinstance(v, bool):
        raise ContentError(f"Expected number for {key}")
    return float(v)


def _require_list(obj: Mapping[str, object], key: str) -> list[object]:
    v = obj.get(key)
    if not isinstance(v, list):
        raise ContentError(f"Expected list for {key}")
    return v


def _optional_str(obj: Mapping[str, object], key: str, default: str = "") -> str:
    v = obj.get(key)
    if v is None:
        return default
    if not isinstance(v, str):
        raise ContentError(f"Expected string for {key}")
    return v


def parse_player(raw: Mapping[str, object]) -> Card:
    """Fallback player record -> card; attributes are seeded by player_id."""
    player_id = _require_int(raw, "player_id")
    position = _require_str(raw, "position")
    base_rating = _require_number(raw, "base_rating")
    attributes = synthesize_attributes(base_rating, position, seed=player_id)
    return make_card(
        f"mock-{player_id}",
        _require_str(raw, "name"),
        position,  # type: ignore[arg-type]
        attributes,
        club=_optional_str(raw, "club"),
        league=_optional_str(raw, "league"),
        image_url=_optional_str(raw, "image_url"),
        player_id=player_id,
    )


def parse_stadium(raw: Mapping[str, object]) -> Stadium:
    mods = raw.get("modifiers")
    if not isinstance(mods, dict):
        raise ContentError("stadium.modifiers must be an object")
    return Stadium(
        id=_require_int(raw, "id"),
        name=_require_str(raw, "name"),
        city=_require_str(raw, "city"),
        capacity=_require_int(raw, "capacity"),
        image_url=_optional_str(raw, "image_url"),
        modifiers=VenueModifiers(
            home_advantage=_require_number(mods, "home_advantage"),
            capacity_bonus=_require_number(mods, "capacity_bonus"),
            weather=_optional_str(mods, "weather", "sun"),  # type: ignore[arg-type]
        ),
    )


def parse_formation(raw: Mapping[str, object]) -> Formation:
    slots: list[Slot] = []
    for s in _require_list(raw, "slots"):
        if not isinstance(s, dict):
            raise ContentError("formation slot must be an object")
        slots.append(
            Slot(
                key=_require_str(s, "key"),
                role=_require_str(s, "role"),  # type: ignore[arg-type]
                x=float(s.get("x", 50.0)),
                y=float(s.get("y", 50.0)),
            )
        )
    return Formation(id=_require_str(raw, "id"), slots=tuple(slots))


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def _load_validated(self, name: str) -> dict[str, object]:
        path = self._data_dir / f"{name}.json"
        raw = _load_json(path)
        schema = _load_schema(self._schema_dir / f"{name}.schema.json")
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError(f"{name}.json must be an object")
        return raw

    def load_formations(self) -> dict[str, Formation]:
        raw = self._load_validated("formations")
        formations = [
            parse_formation(item) for item in _require_list(raw, "formations") if isinstance(item, dict)
        ]
        try:
            catalog = build_catalog(formations)
        except FormationError as e:
            raise ContentError(str(e)) from e
        _log.info("Loaded %d formations", len(catalog))
        return catalog

    def load_players(self) -> CardDatabase:
        raw = self._load_validated("players")
        cards: dict[str, Card] = {}
        for item in _require_list(raw, "players"):
            if not isinstance(item, dict):
                continue
            card = parse_player(item)
            if card.id in cards:
                raise ContentError(f"Duplicate player_id in players.json: {card.player_id}")
            cards[card.id] = card
        _log.info("Loaded %d fallback players", len(cards))
        return CardDatabase(cards=cards)

    def load_stadiums(self) -> dict[int, Stadium]:
        raw = self._load_validated("stadiums")
        stadiums: dict[int, Stadium] = {}
        for item in _require_list(raw, "stadiums"):
            if not isinstance(item, dict):
                continue
            stadium = parse_stadium(item)
            stadiums[stadium.id] = stadium
        _log.info("Loaded %d fallback stadiums", len(stadiums))
        return stadiums

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_formations()
        _ = self.load_players()
        _ = self.load_stadiums()
