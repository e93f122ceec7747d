"""
Pydantic schemas for Schedule entity.
"""
from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime


class ScheduleCreate(BaseModel):
    """Schema for schedule creation."""
    title: str
    start_at: str
    end_at: Optional[str] = None
    location: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v


class ScheduleUpdate(BaseModel):
    """Schema for partial schedule update; omitted fields keep their value."""
    title: Optional[str] = None
    start_at: Optional[str] = None
    end_at: Optional[str] = None
    location: Optional[str] = None


class ScheduleResponse(BaseModel):
    """Schema for schedule response."""
    id: str
    title: str
    start_at: str
    end_at: Optional[str] = None
    location: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
