"""
Upload routes: presign direct-to-storage PUTs and record completed uploads.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from weeklydiary.db.session import get_db
from weeklydiary.models.user import User
from weeklydiary.schemas.upload import PresignBatchRequest, PresignBatchResponse, UploadCompleteRequest
from weeklydiary.api.dependencies import get_current_user
from weeklydiary.api.routes.diary import photo_response
from weeklydiary.services import upload_service

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("/presign-batch", response_model=PresignBatchResponse)
def presign_batch(
    body: PresignBatchRequest,
    current_user: User = Depends(get_current_user)
):
    """Validate the requested files and return one presigned PUT URL per file."""
    items = upload_service.presign_batch(
        current_user.id, body.category, body.calendar_date, body.items, body.count
    )
    return PresignBatchResponse(items=items)


@router.post("/complete")
def complete_upload(
    body: UploadCompleteRequest,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Persist photo metadata after the client PUT the files, replacing the day's set."""
    photos = upload_service.complete_upload(current_user.id, body.calendar_date, body.files, db)
    return {"ok": True, "items": [photo_response(p) for p in photos]}
