from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from typing import Optional, Sequence

from taskrank.config import SETTINGS
from taskrank.domain.entities import ScoredTask
from taskrank.domain.enums import SortKey
from taskrank.infra.logging import setup_logging
from taskrank.infra.task_source import JsonTaskSource, TaskSourceError, load_weights
from taskrank.services.ranking_service import RankingService

logger = logging.getLogger("taskrank.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="taskrank",
        description="Rank tasks by urgency, importance, impact and effort.",
    )
    parser.add_argument("tasks", help="Path to a JSON file with task records")
    parser.add_argument("--weights", help="Path to a JSON file overriding weights")
    parser.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        default=SETTINGS.default_sort.value,
        help=f"Ordering (default: {SETTINGS.default_sort.value})",
    )
    parser.add_argument("--top", type=int, help="Only show the first N tasks")
    parser.add_argument("--now", help="Reference time as ISO datetime (default: current time)")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of a table")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _parse_now(parser: argparse.ArgumentParser, value: Optional[str]) -> datetime:
    if not value:
        return datetime.now().astimezone()
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        parser.error(f"--now must be an ISO datetime, got {value!r}")


def format_table(ranked: Sequence[ScoredTask]) -> str:
    lines = [f"{'#':>3}  {'score':>5}  {'urg':>4} {'imp':>4} {'eff':>4}  title"]
    for position, item in enumerate(ranked, start=1):
        c = item.components
        flags = ""
        if item.task.blocked:
            flags += " [blocked]"
        if item.task.favorite:
            flags += " [*]"
        lines.append(
            f"{position:>3}  {item.score:5.2f}  {c.urgency:4.2f} {c.importance:4.2f} "
            f"{c.effort_score:4.2f}  {item.title}{flags}"
        )
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    now = _parse_now(parser, args.now)
    setup_logging(verbose=args.verbose)

    try:
        weights = SETTINGS.weights
        if args.weights:
            weights = load_weights(args.weights, base=weights)
        service = RankingService(JsonTaskSource(args.tasks), weights)
        ranked = service.rank(now, args.sort)
    except TaskSourceError as exc:
        logger.error("%s", exc)
        return 1

    if args.top is not None:
        ranked = ranked[:max(args.top, 0)]

    if args.json:
        print(json.dumps([item.to_dict() for item in ranked], indent=2))
    else:
        print(format_table(ranked))
    return 0


if __name__ == "__main__":
    sys.exit(main())
