from datetime import date

import pytest

from dayscore.models.availability import Availability, AvailabilityType
from dayscore.models.group import GroupMember

GROUP_ID = "g-1"
D1 = date(2026, 3, 6)


@pytest.fixture
def make_availability():
    def _make(user_id: str, day: date = D1, type: str = "day", group_id: str = GROUP_ID, **fields) -> Availability:
        return Availability(user_id=user_id, group_id=group_id, date=day, type=AvailabilityType(type), **fields)

    return _make


@pytest.fixture
def make_members():
    def _make(*user_ids: str, group_id: str = GROUP_ID) -> list[GroupMember]:
        return [GroupMember(group_id=group_id, user_id=u) for u in user_ids]

    return _make
