"""
Pydantic schemas for presigned uploads.
"""
from pydantic import BaseModel, Field
from typing import Dict, List, Literal, Optional


class PresignItem(BaseModel):
    """One file the client intends to upload."""
    mime: str
    bytes: int
    ext: Optional[str] = None


class PresignBatchRequest(BaseModel):
    """Schema for a presign batch request."""
    category: Literal["diary", "avatar"] = "diary"
    calendar_date: Optional[str] = Field(default=None, alias="calendarDate")
    items: List[PresignItem] = []
    count: Optional[int] = None

    class Config:
        populate_by_name = True


class PresignedUpload(BaseModel):
    """A signed upload target handed to the client."""
    key: str
    upload_url: str = Field(serialization_alias="uploadUrl")
    cdn_url: str = Field(serialization_alias="cdnUrl")
    headers: Dict[str, str] = {}
    max_bytes: int = Field(serialization_alias="maxBytes")


class PresignBatchResponse(BaseModel):
    ok: bool = True
    items: List[PresignedUpload]


class CompletedFile(BaseModel):
    """Metadata for a file the client finished uploading."""
    key: str
    mime: str
    bytes: int
    width: Optional[int] = None
    height: Optional[int] = None
    order: int = 0


class UploadCompleteRequest(BaseModel):
    """Schema for upload completion."""
    calendar_date: Optional[str] = Field(default=None, alias="calendarDate")
    files: List[CompletedFile] = []

    class Config:
        populate_by_name = True
