from __future__ import annotations

import argparse
import json
import logging
import secrets
import sys
from pathlib import Path

from pitchcards.engine.formations import FormationError, get_formation
from pitchcards.engine.opponent import build_opponent, pick_opponent_formation
from pitchcards.engine.play import play_match
from pitchcards.engine.serialize import card_to_dict, snapshot
from pitchcards.paths import get_paths
from pitchcards.services.content import ContentError, ContentService
from pitchcards.services.telemetry import TelemetryService


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pitchcards", description="Simulate one card-team fixture.")
    parser.add_argument("--seed", type=int, default=None, help="match seed (random when omitted)")
    parser.add_argument("--home-formation", default="4-4-2")
    parser.add_argument(
        "--away-formation", default=None, help="CPU formation; first one differing from the home side when omitted"
    )
    parser.add_argument("--home-name", default="Dream Team")
    parser.add_argument("--away-name", default="Robo Strikers")
    parser.add_argument("--stadium", type=int, default=None, help="stadium id; neutral venue when omitted")
    parser.add_argument("--json", action="store_true", help="print the match snapshot as JSON")
    parser.add_argument("--list-cards", action="store_true", help="print the fallback roster as JSON and exit")
    parser.add_argument("--telemetry", type=Path, default=None, help="append a JSONL record to this file")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    try:
        catalog = content.load_formations()
        cards = content.load_players()
        stadiums = content.load_stadiums()
        formation_home = get_formation(args.home_formation, catalog)
        if args.away_formation is None:
            formation_away = pick_opponent_formation(formation_home.id, catalog)
        else:
            formation_away = get_formation(args.away_formation, catalog)
    except (ContentError, FormationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if args.list_cards:
        print(json.dumps([card_to_dict(c) for c in cards.cards.values()], ensure_ascii=False, indent=2))
        return 0

    stadium = None
    if args.stadium is not None:
        stadium = stadiums.get(args.stadium)
        if stadium is None:
            print(f"error: unknown stadium {args.stadium}", file=sys.stderr)
            return 2

    pool = list(cards.cards.values())
    home = build_opponent(args.home_name, formation_home, pool)
    away = build_opponent(args.away_name, formation_away, pool, exclude=[c for c in home.lineup.values() if c])

    seed = args.seed if args.seed is not None else secrets.randbelow(2**31)
    report = play_match(home, away, catalog, cards.cards, stadium, seed)

    if args.telemetry is not None:
        TelemetryService(args.telemetry).log_match(report, formation_home, formation_away)

    if args.json:
        print(json.dumps(snapshot(report), ensure_ascii=False, indent=2))
        return 0

    result = report.result
    print(f"{report.home_name} {result.home_goals} - {result.away_goals} {report.away_name}  (seed {seed})")
    print(report.summary)
    print()
    for line in report.commentary:
        print(f"  {line}")
    print()
    for event in report.timeline:
        print(f"{event.minute:>3}'  {event.text}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
