from collections.abc import Iterable

from dayscore.core.config import settings
from dayscore.core.errors import ConfigurationError
from dayscore.models.day_score import DayScore


def _rank_key(day_score: DayScore) -> tuple:
    # score desc, then available_count desc, then earliest date
    return (-day_score.score, -day_score.available_count, day_score.date)


def rank_day_scores(day_scores: Iterable[DayScore]) -> list[DayScore]:
    return sorted(day_scores, key=_rank_key)


def top_n(ranked: list[DayScore], n: int | None = None) -> list[DayScore]:
    """Prefix of an already ranked list. n defaults to the configured topN."""
    if n is None:
        n = settings.top_n
    if n < 0:
        raise ConfigurationError(f"n must be non-negative, got {n}")
    return ranked[:n]
