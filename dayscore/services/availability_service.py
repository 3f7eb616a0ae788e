import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime

from dayscore.core.config import settings
from dayscore.core.errors import InputLimitError
from dayscore.models.availability import Availability
from dayscore.models.group import GroupMember

logger = logging.getLogger(__name__)


def roster_join_dates(group_id: str, members: Iterable[GroupMember]) -> dict[str, date | None]:
    """Distinct users listed as members of the group, mapped to the date they joined.
    None means the join date is unknown and the user counts as a member on every date.
    Duplicate rows keep the earliest join."""
    roster: dict[str, date | None] = {}
    for m in members:
        if m.group_id != group_id:
            continue
        joined = m.joined_at.date() if m.joined_at is not None else None
        if m.user_id not in roster:
            roster[m.user_id] = joined
        elif roster[m.user_id] is not None and (joined is None or joined < roster[m.user_id]):
            roster[m.user_id] = joined
    return roster


def latest_per_member_date(availabilities: Sequence[Availability]) -> list[Availability]:
    """Upsert semantics: keep one record per (user, group, date). A later created_at wins;
    without timestamps (or on equal ones) the later record in input order wins."""
    latest: dict[tuple[str, str, date], tuple[datetime | None, int, Availability]] = {}
    for position, record in enumerate(availabilities):
        key = (record.user_id, record.group_id, record.date)
        current = latest.get(key)
        if current is None or _is_newer(record.created_at, position, current[0], current[1]):
            latest[key] = (record.created_at, position, record)
    return [entry[2] for entry in sorted(latest.values(), key=lambda e: e[1])]


def _is_newer(created_at: datetime | None, position: int, other_created_at: datetime | None, other_position: int) -> bool:
    if created_at is not None and other_created_at is not None and created_at != other_created_at:
        return created_at > other_created_at
    return position > other_position


def filter_for_roster(
    group_id: str, roster: Mapping[str, date | None], availabilities: Iterable[Availability]
) -> list[Availability]:
    """Drop records for other groups, for users not on the roster and for dates before
    the user joined."""
    kept: list[Availability] = []
    for record in availabilities:
        if record.group_id != group_id:
            logger.debug("Skipping availability of %s for group %s (scoring %s)", record.user_id, record.group_id, group_id)
            continue
        if record.user_id not in roster:
            logger.debug("Skipping availability of non-member %s on %s", record.user_id, record.date)
            continue
        joined = roster[record.user_id]
        if joined is not None and record.date < joined:
            logger.debug("Skipping availability of %s on %s, before joining on %s", record.user_id, record.date, joined)
            continue
        kept.append(record)
    return kept


def check_input_limits(member_count: int, date_count: int) -> None:
    if member_count > settings.max_members:
        raise InputLimitError(f"Roster of {member_count} members exceeds limit of {settings.max_members}")
    if date_count > settings.max_dates:
        raise InputLimitError(f"{date_count} candidate dates exceed limit of {settings.max_dates}")
