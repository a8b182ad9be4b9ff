from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from pitchcards.engine.types import Formation, MatchReport

MATCH_PLAYED = "match_played"


@dataclass
class TelemetryService:
    """Append-only JSONL log of played fixtures (one record per line)."""

    path: Path

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")

    def log_match(self, report: MatchReport, formation_home: Formation, formation_away: Formation) -> None:
        """Record the facts needed to replay and audit one fixture."""
        result = report.result
        self.log(
            MATCH_PLAYED,
            {
                "seed": report.seed,
                "home": {
                    "name": report.home_name,
                    "formation": formation_home.id,
                    "rating": result.rating_home,
                    "goals": result.home_goals,
                    "scorers": [s.card_id for s in report.scorers_home],
                },
                "away": {
                    "name": report.away_name,
                    "formation": formation_away.id,
                    "rating": result.rating_away,
                    "goals": result.away_goals,
                    "scorers": [s.card_id for s in report.scorers_away],
                },
                "boosts": {
                    "formation": result.formation_boost,
                    "stadium": result.stadium_boost,
                    "capacity": result.capacity_boost,
                    "weather": result.weather_boost,
                },
                "momentum": report.momentum,
            },
        )

    def read_all(self) -> list[dict[str, object]]:
        if not self.path.exists():
            return []
        out: list[dict[str, object]] = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            if line.strip():
                out.append(json.loads(line))
        return out
