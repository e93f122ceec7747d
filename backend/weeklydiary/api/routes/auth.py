"""
Authentication routes for signup, login, logout and session state.
"""
from typing import Optional
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session
from weeklydiary.db.session import get_db
from weeklydiary.schemas.user import SignupRequest, LoginRequest, AuthResponse, SessionInfo
from weeklydiary.models.user import User
from weeklydiary.api.dependencies import get_optional_user
from weeklydiary.services import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: SignupRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db)
):
    """Register a new user and log them in."""
    user = auth_service.signup(db, user_data.username, user_data.password, user_data.nickname)
    session = auth_service.create_session(db, user.id, request)
    auth_service.set_session_cookie(response, session.id)
    return AuthResponse(message="Signup successful", user_id=user.id, nickname=user.nickname)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db)
):
    """Login and start a new session."""
    user = auth_service.login(db, credentials.username, credentials.password)
    session = auth_service.create_session(db, user.id, request)
    auth_service.set_session_cookie(response, session.id)
    return AuthResponse(message="Login successful", user_id=user.id, nickname=user.nickname)


@router.post("/logout")
def logout(request: Request, response: Response, db: Session = Depends(get_db)):
    """Delete the current session and clear the cookie."""
    auth_service.logout(db, request)
    auth_service.clear_session_cookie(response)
    return {"message": "Logout successful"}


@router.get("/session", response_model=SessionInfo, response_model_exclude_none=True)
def session(user: Optional[User] = Depends(get_optional_user)):
    """Report whether the caller is logged in."""
    if user is None:
        return SessionInfo(logged_in=False)
    return SessionInfo(
        logged_in=True,
        user_id=user.id,
        username=user.username,
        nickname=user.nickname,
        avatar_url=user.avatar_url,
    )
