"""
Friend relation model. Stored as a directed request row; lookups check both directions.
"""
from sqlalchemy import Column, String, Enum as SQLEnum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from weeklydiary.db.base import TimestampedModel
import enum


class FriendStatus(str, enum.Enum):
    """Friend request status enumeration."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Friendship(TimestampedModel):
    """Friend request from requester to addressee."""
    __tablename__ = "friends"

    requester_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    addressee_id = Column(String(32), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(
        SQLEnum(FriendStatus, values_callable=lambda e: [m.value for m in e]),
        default=FriendStatus.PENDING,
        nullable=False,
    )

    # Relationships
    requester = relationship("User", foreign_keys=[requester_id])
    addressee = relationship("User", foreign_keys=[addressee_id])

    __table_args__ = (
        UniqueConstraint('requester_id', 'addressee_id', name='uq_friend_pair'),
    )
