from __future__ import annotations
from pydantic import BaseModel, ConfigDict
from uuid import UUID
from datetime import datetime


class SubmissionRecord(BaseModel):
    """One water-butt claim as read back from the submission store."""
    model_config = ConfigDict(frozen=True)

    id: UUID
    litres: int | None = None
    postcode: str
    photo_ref: str
    approved: bool = False
    created_at: datetime


class NewSubmission(BaseModel):
    """Fields handed to the store on create; the store assigns the id."""
    litres: int
    postcode: str
    photo_ref: str
    approved: bool = False
    created_at: datetime


class PhotoUpload(BaseModel):
    filename: str | None = None
    content_type: str | None = None
    data: bytes = b""


class SubmissionPublic(BaseModel):
    id: UUID
    litres: int | None = None
    postcode: str
    approved: bool
    created_at: datetime
    # 🔒 do not expose storage keys
    photo_url: str   # served via proxy endpoint
