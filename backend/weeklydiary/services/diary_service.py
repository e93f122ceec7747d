"""
Diary service for diary-related business logic.
"""
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Optional
from weeklydiary.core.errors import NotFound, ValidationFailed
from weeklydiary.core.utils import parse_ymd
from weeklydiary.db.retry import run_with_retries
from weeklydiary.models.diary import DiaryEntry, DiaryPhoto


def require_date(value: str) -> str:
    """Return a valid YYYY-MM-DD string or raise BAD_DATE."""
    ymd = parse_ymd(value)
    if not ymd:
        raise ValidationFailed("BAD_DATE", "Date must be YYYY-MM-DD")
    return ymd


def get_diary_entry_for_date(
    user_id: str,
    entry_date: str,
    db: Session
) -> Optional[DiaryEntry]:
    """Get the user's diary entry for a specific date."""
    return db.query(DiaryEntry).filter(
        DiaryEntry.user_id == user_id,
        DiaryEntry.date == entry_date
    ).first()


def get_owned_entry(entry_id: str, user_id: str, db: Session) -> DiaryEntry:
    """Entries of other users are reported as missing."""
    entry = db.query(DiaryEntry).filter(
        DiaryEntry.id == entry_id,
        DiaryEntry.user_id == user_id
    ).first()
    if not entry:
        raise NotFound("ENTRY_NOT_FOUND", "Diary entry not found")
    return entry


def list_entries(
    user_id: str,
    db: Session,
    year: Optional[int] = None,
    month: Optional[int] = None
) -> List[DiaryEntry]:
    """List the user's entries, newest date first, optionally within one month."""
    query = db.query(DiaryEntry).filter(DiaryEntry.user_id == user_id)
    if year and month:
        query = query.filter(DiaryEntry.date.like(f"{year:04d}-{month:02d}-%"))
    elif year:
        query = query.filter(DiaryEntry.date.like(f"{year:04d}-%"))
    return run_with_retries(db, lambda db: query.order_by(DiaryEntry.date.desc()).all())


def upsert_entry(user_id: str, entry_date: str, text: str, db: Session) -> tuple:
    """
    Create or overwrite the entry for (user, date).

    Returns (entry, created). Concurrent writers race; the last write wins.
    A create that loses the race to another insert becomes an update.
    """
    entry_date = require_date(entry_date)

    def _upsert(db: Session):
        entry = get_diary_entry_for_date(user_id, entry_date, db)
        if entry is None:
            entry = DiaryEntry(user_id=user_id, date=entry_date, text=text)
            db.add(entry)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                entry = get_diary_entry_for_date(user_id, entry_date, db)
                if entry is None:
                    raise
                return _overwrite(entry, db), False
            db.refresh(entry)
            return entry, True
        return _overwrite(entry, db), False

    def _overwrite(entry: DiaryEntry, db: Session) -> DiaryEntry:
        entry.text = text
        db.commit()
        db.refresh(entry)
        return entry

    return run_with_retries(db, _upsert)


def update_entry(entry_id: str, user_id: str, text: str, db: Session) -> DiaryEntry:
    entry = get_owned_entry(entry_id, user_id, db)

    def _update(db: Session) -> DiaryEntry:
        entry.text = text
        db.commit()
        db.refresh(entry)
        return entry

    return run_with_retries(db, _update)


def delete_entry(entry_id: str, user_id: str, db: Session) -> None:
    """Delete an entry together with the photos of its day."""
    entry = get_owned_entry(entry_id, user_id, db)

    def _delete(db: Session) -> None:
        db.query(DiaryPhoto).filter(
            DiaryPhoto.user_id == user_id,
            DiaryPhoto.date == entry.date
        ).delete()
        db.delete(entry)
        db.commit()

    run_with_retries(db, _delete)


def get_photos_for_day(
    user_id: str,
    entry_date: str,
    db: Session
) -> List[DiaryPhoto]:
    """Get all photos for a user's day in display order."""
    return db.query(DiaryPhoto).filter(
        DiaryPhoto.user_id == user_id,
        DiaryPhoto.date == entry_date
    ).order_by(DiaryPhoto.order_index, DiaryPhoto.created_at).all()


def replace_photos_for_day(
    user_id: str,
    entry_date: str,
    photos: List[DiaryPhoto],
    db: Session
) -> List[DiaryPhoto]:
    """Replace the user's photo set for a day wholesale."""

    def _replace(db: Session) -> List[DiaryPhoto]:
        db.query(DiaryPhoto).filter(
            DiaryPhoto.user_id == user_id,
            DiaryPhoto.date == entry_date
        ).delete()
        db.flush()
        db.add_all(photos)
        db.commit()
        return get_photos_for_day(user_id, entry_date, db)

    return run_with_retries(db, _replace)


def delete_photo(photo_id: str, user_id: str, db: Session) -> None:
    photo = db.query(DiaryPhoto).filter(
        DiaryPhoto.id == photo_id,
        DiaryPhoto.user_id == user_id
    ).first()
    if not photo:
        raise NotFound("PHOTO_NOT_FOUND", "Photo not found")

    def _delete(db: Session) -> None:
        db.delete(photo)
        db.commit()

    run_with_retries(db, _delete)


def recent_photos(user_id: str, db: Session, limit: int = 60) -> List[DiaryPhoto]:
    """Newest photos of a user, for galleries."""
    return db.query(DiaryPhoto).filter(
        DiaryPhoto.user_id == user_id
    ).order_by(DiaryPhoto.created_at.desc(), DiaryPhoto.order_index).limit(limit).all()


def gallery(user_id: str, db: Session, limit: int = 60) -> List[tuple]:
    """Photos with their day's diary text, newest day first."""
    return db.query(DiaryPhoto, DiaryEntry.text).outerjoin(
        DiaryEntry,
        (DiaryEntry.user_id == DiaryPhoto.user_id) & (DiaryEntry.date == DiaryPhoto.date)
    ).filter(
        DiaryPhoto.user_id == user_id
    ).order_by(DiaryPhoto.date.desc(), DiaryPhoto.order_index).limit(limit).all()
