"""
Diary routes for daily entries and photos.
"""
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import Optional
from weeklydiary.db.session import get_db
from weeklydiary.models.user import User
from weeklydiary.models.diary import DiaryPhoto
from weeklydiary.schemas.diary import (
    DiaryEntryResponse, DiaryEntryCreate, DiaryEntryUpdate,
    DiaryDayResponse, DiaryPhotoResponse, GalleryItem
)
from weeklydiary.core.errors import NotFound
from weeklydiary.api.dependencies import get_current_user
from weeklydiary.services import diary_service, friend_service, upload_service

router = APIRouter(prefix="/diary", tags=["diary"])


def photo_response(photo: DiaryPhoto) -> DiaryPhotoResponse:
    """Build a photo response with its public URL."""
    return DiaryPhotoResponse(
        id=photo.id,
        date=photo.date,
        key=photo.key,
        url=upload_service.public_url(photo.key),
        mime=photo.mime,
        bytes=photo.bytes,
        width=photo.width,
        height=photo.height,
        order_index=photo.order_index,
        created_at=photo.created_at
    )


@router.get("")
def list_entries(
    year: Optional[int] = None,
    month: Optional[int] = None,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List own diary entries, newest first."""
    entries = diary_service.list_entries(current_user.id, db, year, month)
    return {"items": [DiaryEntryResponse.model_validate(e) for e in entries]}


@router.post("", response_model=DiaryEntryResponse, status_code=status.HTTP_201_CREATED)
def create_entry(
    entry_data: DiaryEntryCreate,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create the entry for a date, or overwrite its text if one exists."""
    entry, created = diary_service.upsert_entry(current_user.id, entry_data.date, entry_data.text, db)
    if not created:
        response.status_code = status.HTTP_200_OK
    return entry


@router.get("/day/{date}", response_model=DiaryDayResponse)
def get_day(
    date: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the entry and photos for one day."""
    day = diary_service.require_date(date)
    entry = diary_service.get_diary_entry_for_date(current_user.id, day, db)
    photos = diary_service.get_photos_for_day(current_user.id, day, db)
    return DiaryDayResponse(
        entry=DiaryEntryResponse.model_validate(entry) if entry else None,
        photos=[photo_response(p) for p in photos]
    )


@router.delete("/photo/{photo_id}")
def delete_photo(
    photo_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a single photo."""
    diary_service.delete_photo(photo_id, current_user.id, db)
    return {"ok": True}


@router.get("/{user_id}/photos")
def get_gallery(
    user_id: str,
    limit: int = Query(60, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Photo gallery of a user. Visible to the user and their friends only."""
    if user_id != current_user.id and not friend_service.are_friends(current_user.id, user_id, db):
        raise NotFound("USER_NOT_FOUND", "User not found")

    rows = diary_service.gallery(user_id, db, limit)
    items = [
        GalleryItem(
            date=photo.date,
            url=upload_service.public_url(photo.key),
            text=text,
            order_index=photo.order_index
        )
        for photo, text in rows
    ]
    return {"items": items}


@router.get("/{entry_id}", response_model=DiaryEntryResponse)
def get_entry(
    entry_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get a single diary entry."""
    return diary_service.get_owned_entry(entry_id, current_user.id, db)


@router.put("/{entry_id}", response_model=DiaryEntryResponse)
def update_entry(
    entry_id: str,
    entry_data: DiaryEntryUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Replace the text of a diary entry."""
    return diary_service.update_entry(entry_id, current_user.id, entry_data.text, db)


@router.delete("/{entry_id}")
def delete_entry(
    entry_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a diary entry and its day's photos."""
    diary_service.delete_entry(entry_id, current_user.id, db)
    return {"ok": True, "id": entry_id}
