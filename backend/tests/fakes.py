"""In-memory stand-ins for the submission table and the photo bucket."""
from __future__ import annotations
import io
import uuid
from datetime import datetime, timezone
from PIL import Image
from reservoir.schemas.submission import NewSubmission, SubmissionRecord
from reservoir.services.errors import NotFoundError

GOAL = 43000030
NOW = datetime(2025, 6, 15, 9, 30, tzinfo=timezone.utc)


class MemoryStore:
    def __init__(self, rows: list[SubmissionRecord] | None = None):
        self.rows: dict[uuid.UUID, SubmissionRecord] = {r.id: r for r in rows or []}
        self.fail_list = False
        self.fail_create = False
        self.fail_update = False
        self.list_calls = 0
        self.create_calls = 0
        self.updates: list[uuid.UUID] = []

    async def list(self) -> list[SubmissionRecord]:
        self.list_calls += 1
        if self.fail_list:
            raise ConnectionError("store unreachable")
        return list(self.rows.values())

    async def create(self, fields: NewSubmission) -> uuid.UUID:
        self.create_calls += 1
        if self.fail_create:
            raise ConnectionError("insert failed")
        sid = uuid.uuid4()
        self.rows[sid] = SubmissionRecord(id=sid, **fields.model_dump())
        return sid

    async def update_approved(self, submission_id: uuid.UUID) -> None:
        if self.fail_update:
            raise ConnectionError("update failed")
        if submission_id not in self.rows:
            raise NotFoundError(submission_id)
        self.updates.append(submission_id)
        self.rows[submission_id] = self.rows[submission_id].model_copy(update={"approved": True})


class MemoryBlobs:
    def __init__(self):
        self.objects: dict[str, tuple[bytes, str]] = {}
        self.fail_upload = False
        self.fail_delete = False
        self.upload_calls = 0
        self.deleted: list[str] = []

    async def upload(self, key: str, data: bytes, content_type: str) -> None:
        self.upload_calls += 1
        if self.fail_upload:
            raise ConnectionError("bucket unreachable")
        self.objects[key] = (data, content_type)

    async def get(self, key: str) -> tuple[bytes, str]:
        if key not in self.objects:
            raise FileNotFoundError(key)
        return self.objects[key]

    async def delete(self, key: str) -> None:
        if self.fail_delete:
            raise ConnectionError("delete failed")
        self.objects.pop(key, None)
        self.deleted.append(key)


def record(litres, postcode: str, approved: bool = False, created_at: datetime | None = None, photo_ref: str = "waterbutt_photos/x.jpg") -> SubmissionRecord:
    return SubmissionRecord(
        id=uuid.uuid4(),
        litres=litres,
        postcode=postcode,
        photo_ref=photo_ref,
        approved=approved,
        created_at=created_at or datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc),
    )


def png_bytes(color=(30, 90, 200)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (4, 4), color).save(buf, format="PNG")
    return buf.getvalue()
