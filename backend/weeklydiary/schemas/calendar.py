"""
Pydantic schemas for the calendar month overview.
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class CalendarDay(BaseModel):
    """Indicators for one day of the month grid."""
    date: str
    schedule_count: int = Field(default=0, serialization_alias="scheduleCount")
    diary_thumbnail: Optional[str] = Field(default=None, serialization_alias="diaryThumbnail")
    has_diary: bool = Field(default=False, serialization_alias="hasDiary")


class CalendarOverview(BaseModel):
    """Dense month overview: one item per calendar day."""
    year: int
    month: int
    days: List[CalendarDay]
