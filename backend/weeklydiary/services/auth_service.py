"""
Auth service: signup, login, logout and session validation.
"""
import logging
import re
from datetime import timedelta
from typing import Optional
from fastapi import Request, Response
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from weeklydiary.core.config import settings
from weeklydiary.core.errors import Conflict, InvalidCredentials, ValidationFailed
from weeklydiary.core.security import (
    dummy_password_hash, generate_session_id, get_password_hash,
    sign_session_id, unsign_session_id, verify_password
)
from weeklydiary.core.utils import utc_now
from weeklydiary.db.retry import run_with_retries
from weeklydiary.models.session import UserSession
from weeklydiary.models.user import User

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9._-]{4,32}$")
PASSWORD_MIN, PASSWORD_MAX = 6, 128
NICKNAME_MAX = 24


def normalize_nickname(nickname: Optional[str]) -> str:
    """Collapse runs of whitespace and trim."""
    return re.sub(r"\s+", " ", nickname or "").strip()


def validate_nickname(nickname: str) -> str:
    nickname = normalize_nickname(nickname)
    if not 1 <= len(nickname) <= NICKNAME_MAX:
        raise ValidationFailed("BAD_NICKNAME", f"Nickname must be 1-{NICKNAME_MAX} characters")
    return nickname


def nickname_taken(db: Session, nickname: str, exclude_user_id: Optional[str] = None) -> bool:
    query = db.query(User.id).filter(User.nickname == nickname)
    if exclude_user_id:
        query = query.filter(User.id != exclude_user_id)
    return query.first() is not None


def create_session(db: Session, user_id: str, request: Optional[Request] = None) -> UserSession:
    """Insert a new session row for the user."""
    now = utc_now()
    session = UserSession(
        id=generate_session_id(),
        user_id=user_id,
        ip=request.client.host if request and request.client else None,
        user_agent=(request.headers.get("user-agent", "")[:255] if request else None),
        created_at=now,
        last_seen=now,
    )

    def _insert(db: Session) -> UserSession:
        db.add(session)
        db.commit()
        return session

    return run_with_retries(db, _insert)


def set_session_cookie(response: Response, session_id: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=sign_session_id(session_id),
        max_age=settings.SESSION_TTL_SECONDS,
        path="/",
        domain=settings.COOKIE_DOMAIN,
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        domain=settings.COOKIE_DOMAIN,
        secure=settings.COOKIE_SECURE,
        httponly=True,
        samesite=settings.SESSION_COOKIE_SAMESITE,
    )


def signup(db: Session, username: str, password: str, nickname: Optional[str] = None) -> User:
    """Create a user after validating the username, password and optional nickname."""
    username = (username or "").strip()
    password = password or ""
    if not USERNAME_PATTERN.match(username):
        raise ValidationFailed("BAD_USERNAME", "Username must be 4-32 letters, digits or ._-")
    if not PASSWORD_MIN <= len(password) <= PASSWORD_MAX:
        raise ValidationFailed("BAD_PASSWORD", f"Password must be {PASSWORD_MIN}-{PASSWORD_MAX} characters")

    nickname = validate_nickname(nickname) if normalize_nickname(nickname) else None
    if nickname and nickname_taken(db, nickname):
        raise Conflict("NICKNAME_TAKEN", "Nickname already taken")

    user = User(
        username=username,
        password_hash=get_password_hash(password),
        nickname=nickname,
    )

    def _insert(db: Session) -> User:
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    try:
        return run_with_retries(db, _insert)
    except IntegrityError:
        db.rollback()
        if db.query(User.id).filter(User.username == username).first():
            raise Conflict("USERNAME_TAKEN", "Username already taken")
        raise Conflict("NICKNAME_TAKEN", "Nickname already taken")


def login(db: Session, username: str, password: str) -> User:
    """Return the user for valid credentials; missing user and wrong password fail identically."""
    username = (username or "").strip()
    user = run_with_retries(db, lambda db: db.query(User).filter(User.username == username).first())
    if not user:
        verify_password(password or "", dummy_password_hash())
        raise InvalidCredentials()
    if not verify_password(password or "", user.password_hash):
        raise InvalidCredentials()
    return user


def session_id_from_request(request: Request) -> Optional[str]:
    cookie = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not cookie:
        return None
    return unsign_session_id(cookie)


def logout(db: Session, request: Request) -> None:
    """Delete the current session row, if any."""
    session_id = session_id_from_request(request)
    if not session_id:
        return

    def _delete(db: Session) -> None:
        db.query(UserSession).filter(UserSession.id == session_id).delete()
        db.commit()

    try:
        run_with_retries(db, _delete)
    except SQLAlchemyError as e:
        logger.error(f"Logout deletion error: {e}")


def authenticate(db: Session, request: Request) -> Optional[str]:
    """
    Resolve the session cookie to a user id.

    Returns None for a missing, tampered or expired session. Expiry is fixed
    from created_at, not sliding. Storage errors also yield None.
    """
    session_id = session_id_from_request(request)
    if not session_id:
        return None

    def _lookup(db: Session) -> Optional[str]:
        now = utc_now()
        session = db.query(UserSession).filter(UserSession.id == session_id).first()
        if not session:
            return None
        if session.created_at <= now - timedelta(seconds=settings.SESSION_TTL_SECONDS):
            db.delete(session)
            db.commit()
            return None
        session.last_seen = now
        db.commit()
        return session.user_id

    try:
        return run_with_retries(db, _lookup)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Auth error: {e}")
        return None
