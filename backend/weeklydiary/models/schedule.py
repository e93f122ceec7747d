"""
Schedule model for calendar events.
"""
from sqlalchemy import Column, String, ForeignKey, Index
from sqlalchemy.orm import relationship
from weeklydiary.db.base import TimestampedModel


class Schedule(TimestampedModel):
    """A user's event; start_at is an ISO-ish timestamp string whose first 10 chars are the day."""
    __tablename__ = "schedules"

    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(120), nullable=False)
    start_at = Column(String(40), nullable=False)
    end_at = Column(String(40), nullable=True)
    location = Column(String(120), nullable=True)

    # Relationships
    user = relationship("User", back_populates="schedules")

    __table_args__ = (
        Index('idx_sched_user_start', 'user_id', 'start_at'),
    )
