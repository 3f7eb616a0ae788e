"""
Command-line entry point: score a group snapshot stored as JSON.

Example: python -m dayscore.main snapshot.json --top 3
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from dayscore.core.config import settings
from dayscore.core.errors import DayScoreError
from dayscore.schemas.scoring import ScoringRequest
from dayscore.services.day_score_service import compute_day_scores
from dayscore.services.ranking_service import top_n

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    if settings.env != "production":
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(
            level=logging.INFO,
            format='{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}',
        )


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dayscore",
        description="Rank candidate meeting dates for a group from its members' availability.",
    )
    parser.add_argument("snapshot", type=Path, help="JSON file with group_id, members and availabilities")
    parser.add_argument("--top", type=int, default=None, help=f"Number of dates to print (default: {settings.top_n})")
    parser.add_argument("--all", action="store_true", help="Print every scored date instead of the top N")
    parser.add_argument("--attendance-weight", type=float, default=None)
    parser.add_argument("--overlap-weight", type=float, default=None)
    parser.add_argument(
        "--fallback-defaults",
        action="store_true",
        help="Use default weights instead of failing when the supplied ones are invalid",
    )
    return parser


def _config_from_args(args: argparse.Namespace) -> dict:
    weights = {}
    if args.attendance_weight is not None:
        weights["attendance"] = args.attendance_weight
    if args.overlap_weight is not None:
        weights["overlap"] = args.overlap_weight
    config: dict = {"scoreWeights": weights}
    if args.top is not None:
        config["topN"] = args.top
    return config


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    args = create_parser().parse_args(argv)

    try:
        request = ScoringRequest.model_validate_json(args.snapshot.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.error("Snapshot file not found: %s", args.snapshot)
        return 1
    except PydanticValidationError as e:
        logger.error("Invalid snapshot %s: %s", args.snapshot, e)
        return 1

    config = _config_from_args(args)
    try:
        ranked = compute_day_scores(
            request.group_id,
            request.members,
            request.availabilities,
            config=config,
            fallback_to_defaults=args.fallback_defaults,
        )
        if not args.all:
            ranked = top_n(ranked, args.top)
    except DayScoreError as e:
        logger.error("Scoring failed: %s", e)
        return 1

    output = [s.model_dump(mode="json", by_alias=True) for s in ranked]
    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
