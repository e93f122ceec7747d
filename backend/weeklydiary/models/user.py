"""
User model for authentication and profiles.
"""
from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship
from weeklydiary.db.base import BaseModel


class User(BaseModel):
    """User model with immutable username."""
    __tablename__ = "users"

    username = Column(String(32), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    nickname = Column(String(24), unique=True, nullable=True, index=True)
    avatar_url = Column(String(500), nullable=True)
    bio = Column(Text, nullable=True)

    # Relationships
    sessions = relationship("UserSession", back_populates="user", cascade="all, delete-orphan")
    diary_entries = relationship("DiaryEntry", back_populates="user", cascade="all, delete-orphan")
    diary_photos = relationship("DiaryPhoto", back_populates="user", cascade="all, delete-orphan")
    schedules = relationship("Schedule", back_populates="user", cascade="all, delete-orphan")
