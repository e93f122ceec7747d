"""
Pydantic schemas for users, authentication and profiles.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class SignupRequest(BaseModel):
    """Schema for user signup."""
    username: str
    password: str
    nickname: Optional[str] = None


class LoginRequest(BaseModel):
    """Schema for user login."""
    username: str
    password: str


class AuthResponse(BaseModel):
    """Schema returned by signup and login."""
    message: str
    user_id: str = Field(serialization_alias="userId")
    nickname: Optional[str] = None


class SessionInfo(BaseModel):
    """Schema for the current session state."""
    logged_in: bool = Field(serialization_alias="loggedIn")
    user_id: Optional[str] = Field(default=None, serialization_alias="userId")
    username: Optional[str] = None
    nickname: Optional[str] = None
    avatar_url: Optional[str] = None


class UserSummary(BaseModel):
    """Schema for a user listed in search results and friend lists."""
    id: str
    username: str
    nickname: Optional[str] = None
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


class UserProfile(UserSummary):
    """Schema for a full user profile."""
    bio: Optional[str] = None
    created_at: datetime


class ProfileUpdate(BaseModel):
    """Schema for nickname and bio update."""
    nickname: str
    bio: Optional[str] = None


class BioUpdate(BaseModel):
    """Schema for bio-only update."""
    bio: Optional[str] = None


class NicknameCheck(BaseModel):
    """Schema for nickname availability check."""
    nickname: Optional[str] = None


class AvatarUpdate(BaseModel):
    """Schema for setting the avatar from an uploaded object key or a direct URL."""
    key: Optional[str] = None
    url: Optional[str] = None
