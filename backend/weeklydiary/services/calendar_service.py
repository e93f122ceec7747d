"""
Calendar overview: per-day schedule counts and diary thumbnails for one month.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import Callable, Dict, List
from weeklydiary.core.utils import days_in_month
from weeklydiary.db.retry import run_with_retries
from weeklydiary.models.diary import DiaryEntry, DiaryPhoto
from weeklydiary.models.schedule import Schedule
from weeklydiary.schemas.calendar import CalendarDay


def month_dates(year: int, month: int) -> List[str]:
    """Every day of the month as YYYY-MM-DD, first to last."""
    return [
        f"{year:04d}-{month:02d}-{day:02d}"
        for day in range(1, days_in_month(year, month) + 1)
    ]


def schedule_counts(user_id: str, year: int, month: int, db: Session) -> Dict[str, int]:
    day = func.substr(Schedule.start_at, 1, 10)
    rows = db.query(day, func.count(Schedule.id)).filter(
        Schedule.user_id == user_id,
        Schedule.start_at.like(f"{year:04d}-{month:02d}-%")
    ).group_by(day).all()
    return {d: count for d, count in rows}


def diary_thumbnail_keys(user_id: str, year: int, month: int, db: Session) -> Dict[str, str]:
    """Storage key of the lowest order_index photo of each day."""
    rows = db.query(DiaryPhoto.date, DiaryPhoto.key).filter(
        DiaryPhoto.user_id == user_id,
        DiaryPhoto.date.like(f"{year:04d}-{month:02d}-%")
    ).order_by(DiaryPhoto.date, DiaryPhoto.order_index, DiaryPhoto.created_at).all()
    thumbnails = {}
    for d, key in rows:
        thumbnails.setdefault(d, key)
    return thumbnails


def diary_dates(user_id: str, year: int, month: int, db: Session) -> set:
    rows = db.query(DiaryEntry.date).filter(
        DiaryEntry.user_id == user_id,
        DiaryEntry.date.like(f"{year:04d}-{month:02d}-%")
    ).all()
    return {d for (d,) in rows}


def overview(
    user_id: str,
    year: int,
    month: int,
    db: Session,
    url_for_key: Callable[[str], str]
) -> List[CalendarDay]:
    """
    Dense day grid for the month. Days without data default to zero schedules
    and no thumbnail. Read-only.
    """
    counts = run_with_retries(db, lambda db: schedule_counts(user_id, year, month, db))
    thumbnails = run_with_retries(db, lambda db: diary_thumbnail_keys(user_id, year, month, db))
    entries = run_with_retries(db, lambda db: diary_dates(user_id, year, month, db))

    days = []
    for d in month_dates(year, month):
        key = thumbnails.get(d)
        days.append(CalendarDay(
            date=d,
            schedule_count=counts.get(d, 0),
            diary_thumbnail=url_for_key(key) if key else None,
            has_diary=d in entries or key is not None,
        ))
    return days
