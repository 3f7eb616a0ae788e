from datetime import datetime

from sqlmodel import SQLModel


class GroupMember(SQLModel):
    group_id: str
    user_id: str
    joined_at: datetime | None = None
