import re
from collections.abc import Iterable

from dayscore.models.availability import TimeSlot
from dayscore.models.coverage import MINUTES_PER_DAY, Interval

# Canonical day-parts (08-14, 14-20, 20-24). Static; not user-editable.
SLOT_INTERVALS: dict[TimeSlot, Interval] = {
    TimeSlot.MORNING: Interval(start=8 * 60, end=14 * 60),
    TimeSlot.AFTERNOON: Interval(start=14 * 60, end=20 * 60),
    TimeSlot.EVENING: Interval(start=20 * 60, end=MINUTES_PER_DAY),
}

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def slot_to_interval(slot: TimeSlot) -> Interval:
    return SLOT_INTERVALS[slot]


def parse_clock(value: str) -> int:
    """Parse "HH:MM" into minutes since midnight. "24:00" is accepted as end of day."""
    match = _CLOCK_RE.match(value.strip())
    if not match:
        raise ValueError(f"Expected HH:MM, got {value!r}")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes >= 60 or hours > 24 or (hours == 24 and minutes):
        raise ValueError(f"Time of day out of range: {value!r}")
    return hours * 60 + minutes


def format_clock(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def intervals_overlap(a: Interval, b: Interval) -> Interval | None:
    """Intersection of two intervals, or None when disjoint. Touching endpoints do not overlap."""
    start = max(a.start, b.start)
    end = min(a.end, b.end)
    if start >= end:
        return None
    return Interval(start=start, end=end)


def merge_intervals(intervals: Iterable[Interval]) -> list[Interval]:
    """Sort and merge overlapping or adjacent intervals into a minimal sequence."""
    ordered = sorted(intervals, key=lambda i: (i.start, i.end))
    if not ordered:
        return []
    merged: list[Interval] = [ordered[0]]
    for current in ordered[1:]:
        last = merged[-1]
        if current.start <= last.end:
            if current.end > last.end:
                merged[-1] = Interval(start=last.start, end=current.end)
        else:
            merged.append(current)
    return merged


def union_length(intervals: Iterable[Interval]) -> int:
    """Covered minutes of the union, counting overlapping parts once."""
    return sum(i.length for i in merge_intervals(intervals))
