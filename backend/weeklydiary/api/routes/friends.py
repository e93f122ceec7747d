"""
Friend routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from weeklydiary.db.session import get_db
from weeklydiary.models.user import User
from weeklydiary.schemas.friend import FriendRequestCreate, FriendRequestRespond
from weeklydiary.schemas.user import UserSummary
from weeklydiary.api.dependencies import get_current_user
from weeklydiary.services import friend_service

router = APIRouter(prefix="/friends", tags=["friends"])


@router.post("/request")
def send_request(
    data: FriendRequestCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Send a friend request."""
    new_status = friend_service.send_request(current_user.id, data.to_user_id, db)
    return {"ok": True, "status": new_status.value}


@router.post("/respond")
def respond(
    data: FriendRequestRespond,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Accept or reject a pending friend request."""
    new_status = friend_service.respond(current_user.id, data.from_user_id, data.action, db)
    return {"ok": True, "status": new_status.value}


@router.get("/list")
def list_friends(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List accepted friends."""
    friends = friend_service.list_friends(current_user.id, db)
    return {"friends": [UserSummary.model_validate(u) for u in friends]}


@router.get("/requests")
def list_incoming_requests(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List users waiting for a response to their friend request."""
    users = friend_service.incoming_requests(current_user.id, db)
    return {"requests": [UserSummary.model_validate(u) for u in users]}
