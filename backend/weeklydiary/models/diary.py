"""
Diary models for daily entries and their photos.
"""
from sqlalchemy import Column, String, Text, ForeignKey, Integer, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from weeklydiary.db.base import BaseModel, TimestampedModel


class DiaryEntry(TimestampedModel):
    """One diary entry per user per date."""
    __tablename__ = "diary_entries"

    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    text = Column(Text, nullable=False, default="")

    # Relationships
    user = relationship("User", back_populates="diary_entries")

    __table_args__ = (
        UniqueConstraint('user_id', 'date', name='uq_diary_user_date'),
    )


class DiaryPhoto(BaseModel):
    """Photo metadata for an object uploaded to storage, attached to a user's day."""
    __tablename__ = "diary_photos"

    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    date = Column(String(10), nullable=False)  # YYYY-MM-DD
    key = Column(String(500), unique=True, nullable=False)
    mime = Column(String(50), nullable=False)
    bytes = Column(Integer, nullable=False)
    width = Column(Integer, nullable=True)
    height = Column(Integer, nullable=True)
    order_index = Column(Integer, default=0, nullable=False)

    # Relationships
    user = relationship("User", back_populates="diary_photos")

    __table_args__ = (
        Index('idx_photos_user_date', 'user_id', 'date', 'order_index'),
    )
