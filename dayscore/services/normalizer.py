from dayscore.core.errors import ValidationError
from dayscore.models.availability import Availability, AvailabilityType
from dayscore.models.coverage import Interval, NormalizedCoverage
from dayscore.services.time_service import merge_intervals, parse_clock, slot_to_interval


def _has_times(record: Availability) -> bool:
    return record.start_time is not None or record.end_time is not None


def _fail(record: Availability, reason: str) -> ValidationError:
    return ValidationError(record.user_id, record.date, reason)


def normalize_availability(record: Availability) -> NormalizedCoverage:
    """Collapse a day/slots/range record into canonical coverage for its date.

    This is the only place type/field consistency is checked; anything
    downstream works on NormalizedCoverage alone.
    """
    if record.type == AvailabilityType.DAY:
        if record.slots or _has_times(record):
            raise _fail(record, "'day' availability must not carry slots or times")
        return NormalizedCoverage.whole_day(record.date)

    if record.type == AvailabilityType.SLOTS:
        if not record.slots:
            raise _fail(record, "'slots' availability needs at least one slot")
        if _has_times(record):
            raise _fail(record, "'slots' availability must not carry start/end times")
        merged = merge_intervals(slot_to_interval(slot) for slot in set(record.slots))
        return NormalizedCoverage(date=record.date, intervals=tuple(merged))

    if record.type == AvailabilityType.RANGE:
        if record.slots:
            raise _fail(record, "'range' availability must not carry slots")
        if record.start_time is None or record.end_time is None:
            raise _fail(record, "'range' availability needs both startTime and endTime")
        try:
            start = parse_clock(record.start_time)
            end = parse_clock(record.end_time)
        except ValueError as e:
            raise _fail(record, str(e)) from e
        if start >= end:
            raise _fail(record, f"startTime {record.start_time} must be before endTime {record.end_time}")
        return NormalizedCoverage(date=record.date, intervals=(Interval(start=start, end=end),))

    raise _fail(record, f"Unknown availability type {record.type!r}")
