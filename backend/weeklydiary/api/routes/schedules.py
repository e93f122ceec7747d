"""
Schedule routes.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from weeklydiary.db.session import get_db
from weeklydiary.models.user import User
from weeklydiary.schemas.schedule import ScheduleCreate, ScheduleUpdate, ScheduleResponse
from weeklydiary.core.errors import ValidationFailed
from weeklydiary.api.dependencies import get_current_user
from weeklydiary.services import diary_service, schedule_service

router = APIRouter(prefix="/schedules", tags=["schedules"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_schedule(
    schedule_data: ScheduleCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a schedule."""
    schedule = schedule_service.create_schedule(current_user.id, schedule_data, db)
    return {"ok": True, "id": schedule.id}


@router.get("/day/{date}")
def get_schedules_for_day(
    date: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get schedules starting on a date."""
    day = diary_service.require_date(date)
    items = schedule_service.schedules_for_day(current_user.id, day, db)
    return {"items": [ScheduleResponse.model_validate(s) for s in items]}


@router.get("/range")
def get_schedules_in_range(
    start: str,
    end: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get schedules starting between two dates, inclusive."""
    start_day = diary_service.require_date(start)
    end_day = diary_service.require_date(end)
    if start_day > end_day:
        raise ValidationFailed("BAD_RANGE", "start must not be after end")
    items = schedule_service.schedules_in_range(current_user.id, start_day, end_day, db)
    return {"items": [ScheduleResponse.model_validate(s) for s in items]}


@router.patch("/{schedule_id}", response_model=ScheduleResponse)
def update_schedule(
    schedule_id: str,
    schedule_data: ScheduleUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the given fields of a schedule."""
    return schedule_service.update_schedule(schedule_id, current_user.id, schedule_data, db)


@router.delete("/{schedule_id}")
def delete_schedule(
    schedule_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a schedule."""
    schedule_service.delete_schedule(schedule_id, current_user.id, db)
    return {"ok": True}
