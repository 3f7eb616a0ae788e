from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class DayScore(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: date
    score: float
    available_count: int = Field(alias="availableCount")
    total_members: int = Field(alias="totalMembers")
