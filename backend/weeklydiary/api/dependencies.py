"""
Request dependencies for authentication.
"""
from typing import Optional
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from weeklydiary.core.errors import AuthRequired
from weeklydiary.db.session import get_db
from weeklydiary.models.user import User
from weeklydiary.services import auth_service


def get_optional_user(request: Request, db: Session = Depends(get_db)) -> Optional[User]:
    """Current user, or None for anonymous requests."""
    user_id = auth_service.authenticate(db, request)
    if not user_id:
        return None
    return db.query(User).filter(User.id == user_id).first()


def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """Current user; anonymous requests get a 401."""
    if user is None:
        raise AuthRequired()
    return user
