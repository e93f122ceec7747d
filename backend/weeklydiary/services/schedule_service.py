"""
Schedule service for calendar events.
"""
from sqlalchemy import func
from sqlalchemy.orm import Session
from typing import List
from weeklydiary.core.errors import NotFound, ValidationFailed
from weeklydiary.core.utils import parse_ymd
from weeklydiary.db.retry import run_with_retries
from weeklydiary.models.schedule import Schedule
from weeklydiary.schemas.schedule import ScheduleCreate, ScheduleUpdate

TITLE_MAX = 120
LOCATION_MAX = 120


def _day_of(start_at: str) -> str:
    """The calendar day of a timestamp string, which must begin with YYYY-MM-DD."""
    day = parse_ymd((start_at or "")[:10])
    if not day:
        raise ValidationFailed("BAD_START_AT", "start_at must begin with a YYYY-MM-DD date")
    return day


def get_owned_schedule(schedule_id: str, user_id: str, db: Session) -> Schedule:
    schedule = db.query(Schedule).filter(
        Schedule.id == schedule_id,
        Schedule.user_id == user_id
    ).first()
    if not schedule:
        raise NotFound("SCHEDULE_NOT_FOUND", "Schedule not found")
    return schedule


def create_schedule(user_id: str, data: ScheduleCreate, db: Session) -> Schedule:
    _day_of(data.start_at)
    schedule = Schedule(
        user_id=user_id,
        title=data.title.strip()[:TITLE_MAX],
        start_at=data.start_at,
        end_at=data.end_at or None,
        location=(data.location or "")[:LOCATION_MAX] or None,
    )

    def _insert(db: Session) -> Schedule:
        db.add(schedule)
        db.commit()
        db.refresh(schedule)
        return schedule

    return run_with_retries(db, _insert)


def schedules_for_day(user_id: str, day: str, db: Session) -> List[Schedule]:
    """Schedules whose start_at falls on `day`, earliest first."""
    return run_with_retries(db, lambda db: db.query(Schedule).filter(
        Schedule.user_id == user_id,
        func.substr(Schedule.start_at, 1, 10) == day
    ).order_by(Schedule.start_at).all())


def schedules_in_range(user_id: str, start: str, end: str, db: Session) -> List[Schedule]:
    """Schedules starting on any day from `start` to `end` inclusive."""
    return run_with_retries(db, lambda db: db.query(Schedule).filter(
        Schedule.user_id == user_id,
        func.substr(Schedule.start_at, 1, 10) >= start,
        func.substr(Schedule.start_at, 1, 10) <= end
    ).order_by(Schedule.start_at).all())


def update_schedule(schedule_id: str, user_id: str, data: ScheduleUpdate, db: Session) -> Schedule:
    """Apply the provided fields; empty values leave the stored value unchanged."""
    schedule = get_owned_schedule(schedule_id, user_id, db)
    if data.start_at:
        _day_of(data.start_at)

    def _update(db: Session) -> Schedule:
        if data.title and data.title.strip():
            schedule.title = data.title.strip()[:TITLE_MAX]
        if data.start_at:
            schedule.start_at = data.start_at
        if data.end_at:
            schedule.end_at = data.end_at
        if data.location:
            schedule.location = data.location[:LOCATION_MAX]
        db.commit()
        db.refresh(schedule)
        return schedule

    return run_with_retries(db, _update)


def delete_schedule(schedule_id: str, user_id: str, db: Session) -> None:
    schedule = get_owned_schedule(schedule_id, user_id, db)

    def _delete(db: Session) -> None:
        db.delete(schedule)
        db.commit()

    run_with_retries(db, _delete)
