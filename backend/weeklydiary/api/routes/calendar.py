"""
Calendar routes for the month overview and day images.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from weeklydiary.db.session import get_db
from weeklydiary.models.user import User
from weeklydiary.schemas.calendar import CalendarOverview
from weeklydiary.schemas.diary import DiaryPhotoResponse
from weeklydiary.core.errors import ValidationFailed
from weeklydiary.core.utils import utc_now
from weeklydiary.api.dependencies import get_current_user
from weeklydiary.api.routes.diary import photo_response
from weeklydiary.services import calendar_service, diary_service, upload_service

router = APIRouter(tags=["calendar"])


@router.get("/calendar/overview", response_model=CalendarOverview)
def get_overview(
    year: Optional[int] = None,
    month: Optional[int] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get per-day schedule counts and diary thumbnails for a month.

    Defaults to the current month when year or month is missing.
    """
    if year is None or month is None:
        today = utc_now()
        year, month = today.year, today.month
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        raise ValidationFailed("BAD_MONTH", "year/month out of range")

    days = calendar_service.overview(current_user.id, year, month, db, upload_service.public_url)
    return CalendarOverview(year=year, month=month, days=days)


@router.get("/calendar/images")
def get_day_images(
    date: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the photos of one day in display order."""
    day = diary_service.require_date(date)
    photos = diary_service.get_photos_for_day(current_user.id, day, db)
    return {"items": [photo_response(p) for p in photos]}


@router.get("/images/recent")
def get_recent_images(
    limit: int = Query(60, ge=1, le=200),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the newest photos of the current user."""
    photos = diary_service.recent_photos(current_user.id, db, limit)
    return {"items": [photo_response(p) for p in photos]}
