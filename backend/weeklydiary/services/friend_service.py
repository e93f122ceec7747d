"""
Friend service: requests, responses and friend lists.
"""
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session
from typing import List, Optional
from weeklydiary.core.errors import Conflict, NotFound, ValidationFailed
from weeklydiary.db.retry import run_with_retries
from weeklydiary.models.friend import Friendship, FriendStatus
from weeklydiary.models.user import User


def relation_between(user_id: str, other_id: str, db: Session) -> Optional[Friendship]:
    """The relation row between two users, in either direction."""
    return db.query(Friendship).filter(
        or_(
            and_(Friendship.requester_id == user_id, Friendship.addressee_id == other_id),
            and_(Friendship.requester_id == other_id, Friendship.addressee_id == user_id),
        )
    ).first()


def are_friends(user_id: str, other_id: str, db: Session) -> bool:
    relation = relation_between(user_id, other_id, db)
    return relation is not None and relation.status == FriendStatus.ACCEPTED


def send_request(user_id: str, to_user_id: str, db: Session) -> FriendStatus:
    """
    Ask `to_user_id` to become a friend.

    A previously rejected relation is re-opened as pending.
    """
    if not to_user_id or to_user_id == user_id:
        raise ValidationFailed("BAD_TARGET", "Invalid friend request target")
    if not db.query(User.id).filter(User.id == to_user_id).first():
        raise NotFound("USER_NOT_FOUND", "User not found")

    existing = relation_between(user_id, to_user_id, db)
    if existing and existing.status == FriendStatus.ACCEPTED:
        raise Conflict("ALREADY_FRIENDS", "Already friends")
    if existing and existing.status == FriendStatus.PENDING:
        raise Conflict("REQUEST_PENDING", "Friend request already pending")

    def _save(db: Session) -> FriendStatus:
        if existing:
            existing.requester_id = user_id
            existing.addressee_id = to_user_id
            existing.status = FriendStatus.PENDING
        else:
            db.add(Friendship(
                requester_id=user_id,
                addressee_id=to_user_id,
                status=FriendStatus.PENDING
            ))
        db.commit()
        return FriendStatus.PENDING

    return run_with_retries(db, _save)


def respond(user_id: str, from_user_id: str, action: str, db: Session) -> FriendStatus:
    """Accept or reject a pending request addressed to `user_id`."""
    relation = db.query(Friendship).filter(
        Friendship.requester_id == from_user_id,
        Friendship.addressee_id == user_id
    ).first()
    if not relation or relation.status != FriendStatus.PENDING:
        raise NotFound("NO_PENDING_REQUEST", "No pending friend request")

    new_status = FriendStatus.ACCEPTED if action == "accept" else FriendStatus.REJECTED

    def _save(db: Session) -> FriendStatus:
        relation.status = new_status
        db.commit()
        return new_status

    return run_with_retries(db, _save)


def list_friends(user_id: str, db: Session) -> List[User]:
    rows = db.query(Friendship).filter(
        Friendship.status == FriendStatus.ACCEPTED,
        or_(Friendship.requester_id == user_id, Friendship.addressee_id == user_id)
    ).all()
    friend_ids = [
        r.addressee_id if r.requester_id == user_id else r.requester_id
        for r in rows
    ]
    if not friend_ids:
        return []
    return db.query(User).filter(User.id.in_(friend_ids)).order_by(User.username).all()


def incoming_requests(user_id: str, db: Session) -> List[User]:
    """Users with a pending request addressed to `user_id`."""
    return db.query(User).join(
        Friendship, Friendship.requester_id == User.id
    ).filter(
        Friendship.addressee_id == user_id,
        Friendship.status == FriendStatus.PENDING
    ).order_by(Friendship.created_at.desc()).all()
