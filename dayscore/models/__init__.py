from dayscore.models.availability import Availability, AvailabilityType, TimeSlot
from dayscore.models.coverage import MINUTES_PER_DAY, Interval, NormalizedCoverage
from dayscore.models.day_score import DayScore
from dayscore.models.group import GroupMember

__all__ = [
    "Availability",
    "AvailabilityType",
    "TimeSlot",
    "GroupMember",
    "Interval",
    "NormalizedCoverage",
    "MINUTES_PER_DAY",
    "DayScore",
]
