"""
Upload service: validates requested files, presigns direct-to-storage PUTs and
records photo metadata once the client has uploaded.
"""
import logging
import re
import uuid
from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional
from sqlalchemy.orm import Session
from weeklydiary.core.config import settings
from weeklydiary.core.errors import StorageNotConfigured, ValidationFailed
from weeklydiary.core.signer import R2Presigner
from weeklydiary.core.utils import utc_now
from weeklydiary.models.diary import DiaryPhoto
from weeklydiary.schemas.upload import CompletedFile, PresignItem, PresignedUpload
from weeklydiary.services import diary_service

logger = logging.getLogger(__name__)

MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/avif": "avif",
    "image/gif": "gif",
}


@dataclass(frozen=True)
class UploadRejection:
    """Why a requested upload was refused."""
    code: str
    message: str


@lru_cache(maxsize=4)
def _build_presigner(
    account_id: str,
    bucket: str,
    access_key_id: str,
    secret_access_key: str,
    region: str,
    public_base_url: str,
) -> R2Presigner:
    return R2Presigner(
        account_id=account_id,
        bucket=bucket,
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        region=region,
        public_base_url=public_base_url,
    )


def get_presigner() -> R2Presigner:
    """Presigner built from settings; fails when R2 credentials are missing."""
    if not all([settings.R2_ACCOUNT_ID, settings.R2_BUCKET,
                settings.R2_ACCESS_KEY_ID, settings.R2_SECRET_ACCESS_KEY]):
        raise StorageNotConfigured()
    return _build_presigner(
        settings.R2_ACCOUNT_ID,
        settings.R2_BUCKET,
        settings.R2_ACCESS_KEY_ID,
        settings.R2_SECRET_ACCESS_KEY,
        settings.R2_REGION,
        settings.R2_PUBLIC_URL,
    )


def public_url(key: str) -> str:
    """Public URL for a stored key, falling back to the bare key when storage is unset."""
    if settings.R2_PUBLIC_URL:
        return f"{settings.R2_PUBLIC_URL.rstrip('/')}/{key}"
    if settings.R2_BUCKET:
        return f"https://{settings.R2_BUCKET}.r2.cloudflarestorage.com/{key}"
    return key


def check_upload_item(mime: str, size: int) -> Optional[UploadRejection]:
    """Return a rejection for a disallowed MIME type or size, or None if acceptable."""
    if mime not in settings.ALLOWED_IMAGE_TYPES:
        return UploadRejection("MIME_NOT_ALLOWED", str(mime))
    if not 0 < size <= settings.MAX_UPLOAD_SIZE:
        return UploadRejection("FILE_TOO_LARGE", str(size))
    return None


def _extension(item: PresignItem) -> str:
    ext = re.sub(r"[^a-zA-Z0-9]", "", item.ext or "") or MIME_EXTENSIONS.get(item.mime, "")
    return ext.lower() or "bin"


def key_prefix(user_id: str, category: str, day: str) -> str:
    return f"uploads/{user_id}/{category}/{day}/"


def build_key(user_id: str, category: str, day: str, ext: str) -> str:
    """Object key following uploads/<user>/<category>/<date>/<uuid>.<ext>."""
    return f"{key_prefix(user_id, category, day)}{uuid.uuid4()}.{ext}"


def presign_batch(
    user_id: str,
    category: str,
    calendar_date: Optional[str],
    items: List[PresignItem],
    count: Optional[int] = None,
) -> List[PresignedUpload]:
    """
    Validate every item, then presign one PUT URL per item.

    Nothing is signed unless all items pass validation.
    """
    if category == "diary":
        day = diary_service.require_date(calendar_date)
    else:
        day = utc_now().strftime("%Y-%m-%d")

    items = items[:count] if count else items
    if not items:
        raise ValidationFailed("NO_ITEMS", "At least one item is required")
    if len(items) > settings.MAX_UPLOAD_ITEMS:
        raise ValidationFailed("TOO_MANY_ITEMS", f"At most {settings.MAX_UPLOAD_ITEMS} items per batch")

    for item in items:
        rejection = check_upload_item(item.mime, item.bytes)
        if rejection:
            raise ValidationFailed(rejection.code, rejection.message)

    presigner = get_presigner()
    results = []
    for item in items:
        key = build_key(user_id, category, day, _extension(item))
        results.append(PresignedUpload(
            key=key,
            upload_url=presigner.sign(key, item.mime, expires=settings.PRESIGN_EXPIRES),
            cdn_url=presigner.public_url(key),
            headers={"Content-Type": item.mime},
            max_bytes=settings.MAX_UPLOAD_SIZE,
        ))
    logger.info(f"Presigned {len(results)} {category} upload(s) for user {user_id}")
    return results


def complete_upload(
    user_id: str,
    calendar_date: Optional[str],
    files: List[CompletedFile],
    db: Session
) -> List[DiaryPhoto]:
    """
    Record uploaded diary photos for a day, replacing that day's previous set.

    Every key must sit under the caller's own diary prefix for that day and
    appear only once.
    """
    day = diary_service.require_date(calendar_date)
    prefix = key_prefix(user_id, "diary", day)

    photos = []
    seen = set()
    for index, f in enumerate(files):
        if f.key in seen:
            raise ValidationFailed("DUPLICATE_KEY", f"Key listed more than once: {f.key}")
        seen.add(f.key)
        if not f.key.startswith(prefix) or ".." in f.key:
            raise ValidationFailed("BAD_KEY", f"Key is not an upload of this user and date: {f.key}")
        rejection = check_upload_item(f.mime, f.bytes)
        if rejection:
            raise ValidationFailed(rejection.code, rejection.message)
        photos.append(DiaryPhoto(
            user_id=user_id,
            date=day,
            key=f.key,
            mime=f.mime,
            bytes=f.bytes,
            width=f.width or None,
            height=f.height or None,
            order_index=f.order if f.order else index,
        ))
    return diary_service.replace_photos_for_day(user_id, day, photos, db)


def owns_avatar_key(user_id: str, key: str) -> bool:
    return key.startswith(f"uploads/{user_id}/avatar/") and ".." not in key
