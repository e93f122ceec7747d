"""
Pydantic schemas for Diary entity.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime


class DiaryPhotoResponse(BaseModel):
    """Schema for diary photo response."""
    id: str
    date: str
    key: str
    url: str
    mime: str
    bytes: int
    width: Optional[int] = None
    height: Optional[int] = None
    order_index: int
    created_at: datetime

    class Config:
        from_attributes = True


class DiaryEntryBase(BaseModel):
    """Base diary entry schema."""
    date: str
    text: str = ""


class DiaryEntryCreate(DiaryEntryBase):
    """Schema for diary entry creation (upsert by date)."""
    pass


class DiaryEntryUpdate(BaseModel):
    """Schema for diary entry update."""
    text: str


class DiaryEntryResponse(DiaryEntryBase):
    """Schema for diary entry response."""
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class DiaryDayResponse(BaseModel):
    """Schema for one day's diary entry and photos."""
    entry: Optional[DiaryEntryResponse] = None
    photos: List[DiaryPhotoResponse] = []


class GalleryItem(BaseModel):
    """Schema for a photo in a profile gallery."""
    date: str
    url: str
    text: Optional[str] = None
    order_index: int
