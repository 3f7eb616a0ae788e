"""
Entry points consumed by the host application.

Each call works on the snapshot it is given: inputs are never mutated and no
state is shared between calls, so groups can be scored concurrently.
"""

import logging
from collections import defaultdict
from collections.abc import Sequence
from datetime import date
from typing import Any

from dayscore.core.config import ScoringConfig, resolve_config
from dayscore.models.availability import Availability
from dayscore.models.coverage import NormalizedCoverage
from dayscore.models.day_score import DayScore
from dayscore.models.group import GroupMember
from dayscore.services.availability_service import (
    check_input_limits,
    filter_for_roster,
    latest_per_member_date,
    roster_join_dates,
)
from dayscore.services.normalizer import normalize_availability
from dayscore.services.overlap_service import compute_overlap
from dayscore.services.ranking_service import rank_day_scores, top_n
from dayscore.services.scoring_service import score_day

logger = logging.getLogger(__name__)


def compute_day_scores(
    group_id: str,
    members: Sequence[GroupMember],
    availabilities: Sequence[Availability],
    config: ScoringConfig | dict[str, Any] | None = None,
    fallback_to_defaults: bool = False,
) -> list[DayScore]:
    """Score every date that appears in the group's availabilities and return them ranked.

    Raises ValidationError for the first inconsistent record (whole call fails),
    ConfigurationError for bad options and InputLimitError for oversized input.
    """
    resolved = resolve_config(config, fallback_to_defaults=fallback_to_defaults)
    roster = roster_join_dates(group_id, members)
    records = filter_for_roster(group_id, roster, latest_per_member_date(availabilities))

    check_input_limits(len(roster), len({record.date for record in records}))

    by_date: dict[date, dict[str, NormalizedCoverage]] = defaultdict(dict)
    for record in records:
        by_date[record.date][record.user_id] = normalize_availability(record)

    scores = [
        score_day(day, len(roster), compute_overlap(coverage), resolved.score_weights)
        for day, coverage in by_date.items()
    ]
    logger.debug(
        "Scored %d date(s) for group %s (%d member(s), %d record(s))",
        len(scores), group_id, len(roster), len(records),
    )
    return rank_day_scores(scores)


def top_dates(
    group_id: str,
    members: Sequence[GroupMember],
    availabilities: Sequence[Availability],
    n: int | None = None,
    config: ScoringConfig | dict[str, Any] | None = None,
    fallback_to_defaults: bool = False,
) -> list[DayScore]:
    """Best n dates; n falls back to the configured topN."""
    resolved = resolve_config(config, fallback_to_defaults=fallback_to_defaults)
    ranked = compute_day_scores(group_id, members, availabilities, resolved)
    return top_n(ranked, resolved.top_n if n is None else n)
