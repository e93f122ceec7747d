"""
User service: profile lookups and edits.
"""
from sqlalchemy import case, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional
from weeklydiary.core.errors import Conflict, NotFound, ValidationFailed
from weeklydiary.db.retry import run_with_retries
from weeklydiary.models.user import User
from weeklydiary.services import auth_service, upload_service

BIO_MAX = 160
SEARCH_LIMIT = 20


def get_user(user_id: str, db: Session) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("USER_NOT_FOUND", "User not found")
    return user


def update_profile(user: User, nickname: str, bio: Optional[str], db: Session) -> User:
    """Set nickname (unique) and bio (truncated to 160 characters)."""
    nickname = auth_service.validate_nickname(nickname)
    if auth_service.nickname_taken(db, nickname, exclude_user_id=user.id):
        raise Conflict("NICKNAME_TAKEN", "Nickname already taken")

    def _save(db: Session) -> User:
        user.nickname = nickname
        user.bio = (bio or "")[:BIO_MAX]
        db.commit()
        db.refresh(user)
        return user

    try:
        return run_with_retries(db, _save)
    except IntegrityError:
        db.rollback()
        raise Conflict("NICKNAME_TAKEN", "Nickname already taken")


def update_bio(user: User, bio: Optional[str], db: Session) -> str:
    text = (bio or "")
    if len(text) > BIO_MAX:
        raise ValidationFailed("BIO_TOO_LONG", f"Bio must be at most {BIO_MAX} characters")

    def _save(db: Session) -> str:
        user.bio = text
        db.commit()
        return text

    return run_with_retries(db, _save)


def update_avatar(user: User, key: Optional[str], url: Optional[str], db: Session) -> str:
    """Point the avatar at an uploaded object key or at a direct URL."""
    if key:
        if not upload_service.owns_avatar_key(user.id, key):
            raise ValidationFailed("BAD_KEY", "Key is not an avatar upload of this user")
        avatar_url = upload_service.public_url(key)
    elif url and url.startswith(("https://", "http://")):
        avatar_url = url
    else:
        raise ValidationFailed("NO_IMAGE", "No image url or key given")

    def _save(db: Session) -> str:
        user.avatar_url = avatar_url[:500]
        db.commit()
        return user.avatar_url

    return run_with_retries(db, _save)


def search_users(query: str, db: Session) -> List[User]:
    """Prefix match on nickname or username; nickname matches first."""
    q = (query or "").strip()
    if not q:
        return []
    pattern = f"{q}%"
    nickname_match = case((User.nickname.like(pattern), 0), else_=1)
    return db.query(User).filter(
        or_(User.nickname.like(pattern), User.username.like(pattern))
    ).order_by(nickname_match, User.nickname, User.username).limit(SEARCH_LIMIT).all()
