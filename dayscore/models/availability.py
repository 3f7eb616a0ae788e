from datetime import date, datetime
from enum import Enum

from sqlmodel import SQLModel


class AvailabilityType(str, Enum):
    DAY = "day"
    SLOTS = "slots"
    RANGE = "range"


class TimeSlot(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"

    @classmethod
    def _missing_(cls, value: object) -> "TimeSlot | None":
        # Stored slot names from the mobile app
        if isinstance(value, str):
            return _SLOT_ALIASES.get(value.strip().lower())
        return None


_SLOT_ALIASES = {
    "mañana": TimeSlot.MORNING,
    "tarde": TimeSlot.AFTERNOON,
    "noche": TimeSlot.EVENING,
    "morning": TimeSlot.MORNING,
    "afternoon": TimeSlot.AFTERNOON,
    "evening": TimeSlot.EVENING,
}


class Availability(SQLModel):
    """One member's declaration for one date. Consistency of type vs. fields is
    checked by the normalizer, not here."""

    user_id: str
    group_id: str
    date: date
    type: AvailabilityType
    slots: list[TimeSlot] | None = None
    start_time: str | None = None  # HH:MM
    end_time: str | None = None  # HH:MM, "24:00" is end of day
    created_at: datetime | None = None
