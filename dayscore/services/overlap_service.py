"""
Stacked coverage for one date via a sweep over interval boundary events.

Each member contributes +1 at every interval start and -1 at every end
(full day = [0, 1440)). Events are sorted by time with ends before starts
at the same instant, so touching intervals never count as concurrent.
"""

import logging
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field

from dayscore.core.errors import InternalConsistencyError
from dayscore.models.coverage import Interval, NormalizedCoverage

logger = logging.getLogger(__name__)

_END = -1
_START = 1


@dataclass(frozen=True)
class OverlapResult:
    covered_minutes: dict[str, int]
    # k -> minutes during which at least k members are free, for k in 1..len(members)
    stacked: dict[int, int]
    # Windows during which every present member is free
    full_overlap_windows: tuple[Interval, ...] = field(default=())

    @property
    def member_count(self) -> int:
        return len(self.covered_minutes)

    def minutes_with_at_least(self, k: int) -> int:
        return self.stacked.get(k, 0)


def _events(coverage_by_member: Mapping[str, NormalizedCoverage]) -> list[tuple[int, int]]:
    events: list[tuple[int, int]] = []
    for coverage in coverage_by_member.values():
        for interval in coverage.as_intervals():
            events.append((interval.start, _START))
            events.append((interval.end, _END))
    # (time, delta) ordering puts -1 (end) before +1 (start) on ties
    events.sort()
    return events


def sweep(events: list[tuple[int, int]], member_count: int) -> tuple[Counter, list[Interval]]:
    """Run the sweep over pre-sorted events.

    Returns minutes spent at each exact concurrency level and the windows at
    full concurrency (member_count). Raises InternalConsistencyError if the
    running count goes negative or does not return to zero.
    """
    exact: Counter = Counter()
    windows: list[Interval] = []
    active = 0
    previous: int | None = None
    window_start: int | None = None

    for instant, delta in events:
        if previous is not None and instant > previous and active > 0:
            exact[active] += instant - previous
        active += delta
        if active < 0:
            raise InternalConsistencyError(f"More interval ends than starts at minute {instant}")
        if active > member_count:
            raise InternalConsistencyError(
                f"Concurrency {active} exceeds member count {member_count} at minute {instant}"
            )
        if member_count and active == member_count and window_start is None:
            window_start = instant
        elif active < member_count and window_start is not None:
            if instant > window_start:
                windows.append(Interval(start=window_start, end=instant))
            window_start = None
        previous = instant

    if active != 0:
        raise InternalConsistencyError(f"Unbalanced event stream: {active} interval(s) never closed")
    return exact, windows


def compute_overlap(coverage_by_member: Mapping[str, NormalizedCoverage]) -> OverlapResult:
    """Per-member covered minutes and stacked coverage for a single date.

    Members without a record for the date are simply absent from the mapping.
    """
    covered = {member: coverage.covered_minutes for member, coverage in coverage_by_member.items()}
    member_count = len(covered)
    exact, windows = sweep(_events(coverage_by_member), member_count)

    stacked: dict[int, int] = {}
    running = 0
    for k in range(member_count, 0, -1):
        running += exact.get(k, 0)
        stacked[k] = running
    stacked = dict(sorted(stacked.items()))

    logger.debug("Overlap for %d member(s): stacked=%s", member_count, stacked)
    return OverlapResult(covered_minutes=covered, stacked=stacked, full_overlap_windows=tuple(windows))
