from __future__ import annotations
import re
import secrets
from datetime import datetime
from typing import Sequence
import structlog

from reservoir.models.submission import LITRES_MAX, POSTCODE_MAX
from reservoir.schemas.submission import NewSubmission, PhotoUpload, SubmissionRecord
from reservoir.services.errors import DuplicatePendingError, PersistError, UploadError, ValidationError
from reservoir.services.media import photo_extension, sniff_image
from reservoir.services.reservoir import Outcome, Reservoir

log = structlog.get_logger()

SUCCESS_MESSAGE = "Submission received! Awaiting moderation."

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def normalize_postcode(raw: str | None) -> str:
    return (raw or "").strip().upper()


def parse_litres(raw: str | int | None) -> int | None:
    """Leading integer of the input ("1500", " 200 l", "12.5" -> 12); None if there is none."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    m = _LEADING_INT.match(str(raw))
    return int(m.group(1)) if m else None


def validate_claim(litres, postcode, photo: PhotoUpload | None) -> tuple[int, str, tuple[str, str]]:
    """
    Check the three form fields together so the error names every bad one.
    Returns (litres, normalized postcode, (mime, extension of the sniffed photo)).
    """
    bad: list[str] = []
    litres_num = parse_litres(litres)
    if litres_num is None or not 0 < litres_num <= LITRES_MAX:
        bad.append("litres")
    code = normalize_postcode(postcode)
    if not code or len(code) > POSTCODE_MAX:
        bad.append("postcode")
    sniffed = sniff_image(photo.data) if photo is not None else None
    if sniffed is None:
        bad.append("photo")
    if bad:
        raise ValidationError(bad)
    return litres_num, code, sniffed


def photo_key(prefix: str, now: datetime, ext: str) -> str:
    # millisecond timestamp plus a random suffix keeps same-millisecond uploads apart
    millis = int(now.timestamp() * 1000)
    return f"{prefix.strip('/')}/{millis}-{secrets.token_hex(4)}.{ext}"


async def _discard_photo(reservoir: Reservoir, key: str) -> None:
    try:
        await reservoir.blobs.delete(key)
    except Exception as e:
        log.warning("orphan_photo_cleanup_failed", key=key, error=repr(e))
        return
    log.info("orphan_photo_deleted", key=key)


async def submit(
    reservoir: Reservoir,
    litres,
    postcode: str | None,
    photo: PhotoUpload | None,
    current_pending: Sequence[SubmissionRecord] | None = None,
) -> Outcome:
    """
    Validate a claim, upload its photo, then create the pending record.

    current_pending defaults to the reservoir's last snapshot; the duplicate
    check only sees what that snapshot holds.
    """
    try:
        litres_num, code, (mime, sniffed_ext) = validate_claim(litres, postcode, photo)
    except ValidationError as e:
        log.info("submission_rejected", reason=e.kind, fields=e.fields)
        return Outcome(state=reservoir.state, error=e)

    pending = reservoir.state.pending if current_pending is None else current_pending
    if any(normalize_postcode(p.postcode) == code for p in pending):
        err = DuplicatePendingError(code)
        log.info("submission_rejected", reason=err.kind, postcode=code)
        return Outcome(state=reservoir.state, error=err)

    now = reservoir.clock()
    key = photo_key(reservoir.photo_prefix, now, photo_extension(photo.filename, sniffed_ext))
    try:
        await reservoir.blobs.upload(key, photo.data, mime)
    except Exception as e:
        log.warning("photo_upload_failed", key=key, error=repr(e))
        return Outcome(state=reservoir.state, error=UploadError(key))

    # No transaction spans the upload and the insert
    try:
        submission_id = await reservoir.store.create(
            NewSubmission(litres=litres_num, postcode=code, photo_ref=key, approved=False, created_at=now)
        )
    except Exception as e:
        log.error("submission_persist_failed", key=key, postcode=code, error=repr(e))
        if reservoir.cleanup_orphan_photos:
            await _discard_photo(reservoir, key)
        return Outcome(state=reservoir.state, error=PersistError(key))

    log.info("submission_created", submission_id=str(submission_id), postcode=code, litres=litres_num, key=key)
    refreshed = await reservoir.refresh()
    return Outcome(
        state=refreshed.state,
        submission_id=submission_id,
        message=SUCCESS_MESSAGE,
        stale=refreshed.stale,
    )
