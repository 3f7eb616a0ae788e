from datetime import date

from pydantic import BaseModel, ConfigDict, model_validator

MINUTES_PER_DAY = 24 * 60


class Interval(BaseModel):
    """Half-open [start, end) in minutes since midnight, within one date."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int

    @model_validator(mode="after")
    def _check_bounds(self) -> "Interval":
        if not 0 <= self.start < self.end <= MINUTES_PER_DAY:
            raise ValueError(f"Interval must satisfy 0 <= start < end <= {MINUTES_PER_DAY}, got [{self.start}, {self.end})")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start


FULL_DAY_INTERVAL = Interval(start=0, end=MINUTES_PER_DAY)


class NormalizedCoverage(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: date
    full_day: bool = False
    intervals: tuple[Interval, ...] = ()

    @classmethod
    def whole_day(cls, on: date) -> "NormalizedCoverage":
        return cls(date=on, full_day=True)

    def as_intervals(self) -> tuple[Interval, ...]:
        if self.full_day:
            return (FULL_DAY_INTERVAL,)
        return self.intervals

    @property
    def covered_minutes(self) -> int:
        if self.full_day:
            return MINUTES_PER_DAY
        return sum(i.length for i in self.intervals)
