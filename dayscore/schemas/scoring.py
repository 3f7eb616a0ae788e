from pydantic import BaseModel

from dayscore.models.availability import Availability
from dayscore.models.group import GroupMember


class ScoringRequest(BaseModel):
    group_id: str
    members: list[GroupMember]
    availabilities: list[Availability] = []
