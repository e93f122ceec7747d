"""Models package - Import all models for SQLAlchemy registration."""
from weeklydiary.models.user import User
from weeklydiary.models.session import UserSession
from weeklydiary.models.diary import DiaryEntry, DiaryPhoto
from weeklydiary.models.schedule import Schedule
from weeklydiary.models.friend import Friendship, FriendStatus

__all__ = [
    "User",
    "UserSession",
    "DiaryEntry",
    "DiaryPhoto",
    "Schedule",
    "Friendship",
    "FriendStatus",
]
