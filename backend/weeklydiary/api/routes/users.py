"""
User and profile routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from weeklydiary.db.session import get_db
from weeklydiary.schemas.user import (
    UserProfile, UserSummary, ProfileUpdate, BioUpdate, NicknameCheck, AvatarUpdate
)
from weeklydiary.schemas.friend import FriendRelation
from weeklydiary.models.user import User
from weeklydiary.api.dependencies import get_current_user
from weeklydiary.services import auth_service, friend_service, user_service

router = APIRouter(tags=["users"])


@router.get("/me")
def get_me(current_user: User = Depends(get_current_user)):
    """Get current user information."""
    return {"user": UserProfile.model_validate(current_user)}


@router.patch("/users/me")
def update_me(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update nickname and bio."""
    user = user_service.update_profile(current_user, data.nickname, data.bio, db)
    return {"ok": True, "nickname": user.nickname, "bio": user.bio}


@router.post("/users/me/bio")
@router.patch("/users/me/bio")
def update_bio(
    data: BioUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update bio only.

    POST and PATCH behave the same; older clients use POST.
    """
    bio = user_service.update_bio(current_user, data.bio, db)
    return {"ok": True, "bio": bio}


@router.post("/users/check-nickname")
def check_nickname(
    data: NicknameCheck,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Check whether another user already has this nickname."""
    nickname = auth_service.normalize_nickname(data.nickname)
    if not nickname:
        return {"exists": False}
    return {"exists": auth_service.nickname_taken(db, nickname, exclude_user_id=current_user.id)}


@router.post("/users/me/avatar")
@router.post("/profile/avatar")
def update_avatar(
    data: AvatarUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Set the avatar from an uploaded object key or a direct URL."""
    avatar_url = user_service.update_avatar(current_user, data.key, data.url, db)
    return {"ok": True, "avatar_url": avatar_url}


@router.get("/users/search")
def search_users(
    q: str = "",
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Search users by nickname or username prefix."""
    users = user_service.search_users(q, db)
    return {"users": [UserSummary.model_validate(u) for u in users]}


@router.get("/users/{user_id}")
def get_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a user's profile and their relation to the current user."""
    user = user_service.get_user(user_id, db)
    relation = friend_service.relation_between(current_user.id, user.id, db)
    return {
        "user": UserProfile.model_validate(user),
        "relation": FriendRelation.model_validate(relation) if relation else None,
    }
