"""
Login session model. The row id is the bearer token carried by the session cookie.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from weeklydiary.db.base import BaseModel
from weeklydiary.core.utils import utc_now


class UserSession(BaseModel):
    """Server-side session; expiry is measured from created_at."""
    __tablename__ = "sessions"

    id = Column(String(64), primary_key=True)
    user_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    ip = Column(String(64), nullable=True)
    user_agent = Column(String(255), nullable=True)
    last_seen = Column(DateTime, default=utc_now, nullable=False)

    # Relationships
    user = relationship("User", back_populates="sessions")
