"""
Pydantic schemas for friend requests.
"""
from pydantic import BaseModel, Field
from typing import Literal, Optional
from weeklydiary.models.friend import FriendStatus


class FriendRequestCreate(BaseModel):
    """Schema for sending a friend request."""
    to_user_id: str = Field(alias="toUserId")

    class Config:
        populate_by_name = True


class FriendRequestRespond(BaseModel):
    """Schema for answering a pending friend request."""
    from_user_id: str = Field(alias="fromUserId")
    action: Literal["accept", "reject"]

    class Config:
        populate_by_name = True


class FriendRelation(BaseModel):
    """Relation between the current user and another user."""
    status: FriendStatus
    requester_id: str
    addressee_id: str

    class Config:
        from_attributes = True
