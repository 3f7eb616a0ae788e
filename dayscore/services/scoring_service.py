from datetime import date

from dayscore.core.config import ScoreWeights
from dayscore.models.coverage import MINUTES_PER_DAY
from dayscore.models.day_score import DayScore
from dayscore.services.overlap_service import OverlapResult


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def attendance_ratio(available_count: int, total_members: int) -> float:
    if total_members <= 0:
        return 0.0
    return available_count / total_members


def overlap_quality(overlap: OverlapResult, available_count: int) -> float:
    """Fraction of the day during which all available members are free at once.

    Counts every minute at full concurrency, so two separate shared windows add up;
    the windows themselves are kept on OverlapResult for callers proposing a time.
    """
    if available_count <= 0:
        return 0.0
    return overlap.minutes_with_at_least(available_count) / MINUTES_PER_DAY


def score_day(day: date, total_members: int, overlap: OverlapResult, weights: ScoreWeights) -> DayScore:
    """Weighted blend of attendance and overlap, normalized by the weight sum and clamped to [0, 1].
    Dates nobody can attend still get a DayScore with score 0."""
    available_count = sum(1 for minutes in overlap.covered_minutes.values() if minutes > 0)
    if total_members <= 0:
        return DayScore(date=day, score=0.0, available_count=0, total_members=0)

    ratio = attendance_ratio(available_count, total_members)
    quality = overlap_quality(overlap, available_count)
    score = (weights.attendance * ratio + weights.overlap * quality) / weights.total
    return DayScore(
        date=day,
        score=_clamp(score),
        available_count=available_count,
        total_members=total_members,
    )
