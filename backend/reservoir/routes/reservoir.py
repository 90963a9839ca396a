from __future__ import annotations
from fastapi import APIRouter, Depends, File, Form, HTTPException, Response, UploadFile
from uuid import UUID

from reservoir.deps import get_reservoir
from reservoir.schemas.reservoir import ReservoirPublic, ReservoirState, SubmitResponse
from reservoir.schemas.submission import PhotoUpload, SubmissionPublic, SubmissionRecord
from reservoir.services.errors import ValidationError
from reservoir.services.reservoir import Outcome, Reservoir
from reservoir.services.submissions import submit

router = APIRouter(prefix="/reservoir", tags=["reservoir"])

STATUS_FOR_ERROR = {
    "validation": 422,
    "duplicate_pending": 409,
    "upload": 502,
    "persist": 502,
    "not_found": 404,
    "fetch": 503,
}

def to_public(s: SubmissionRecord) -> SubmissionPublic:
    return SubmissionPublic(
        id=s.id,
        litres=s.litres,
        postcode=s.postcode,
        approved=s.approved,
        created_at=s.created_at,
        photo_url=f"/reservoir/submissions/{s.id}/photo",
    )

def public_state(state: ReservoirState, stale: bool = False) -> ReservoirPublic:
    return ReservoirPublic(
        approved=[to_public(s) for s in state.approved],
        pending=[to_public(s) for s in state.pending],
        total_litres=state.total_litres,
        fill_percentage=state.fill_percentage,
        goal_litres=state.goal_litres,
        stale=stale,
    )

def raise_for_outcome(outcome: Outcome) -> None:
    err = outcome.error
    if err is None:
        return
    detail = {"error": err.kind, "message": err.message}
    if isinstance(err, ValidationError):
        detail["fields"] = err.fields
    raise HTTPException(status_code=STATUS_FOR_ERROR.get(err.kind, 500), detail=detail)

@router.get("", response_model=ReservoirPublic)
async def get_reservoir_state(reservoir: Reservoir = Depends(get_reservoir)):
    # A failed read still answers with the last good totals
    outcome = await reservoir.refresh()
    return public_state(outcome.state, outcome.stale)

@router.post("/submissions", response_model=SubmitResponse, status_code=201)
async def create_submission(
    litres: str | None = Form(default=None, description="water butt size in litres"),
    postcode: str | None = Form(default=None),
    photo: UploadFile | None = File(default=None, description="photo of the installed water butt"),
    reservoir: Reservoir = Depends(get_reservoir),
):
    upload = None
    if photo is not None:
        upload = PhotoUpload(filename=photo.filename, content_type=photo.content_type, data=await photo.read())
    outcome = await submit(reservoir, litres, postcode, upload)
    raise_for_outcome(outcome)
    return SubmitResponse(
        message=outcome.message,
        submission_id=outcome.submission_id,
        state=public_state(outcome.state, outcome.stale),
    )

@router.get("/submissions/{submission_id}/photo")
async def get_submission_photo(submission_id: UUID, reservoir: Reservoir = Depends(get_reservoir)):
    """Serve the stored photo of a submission without exposing its storage key."""
    outcome = await reservoir.refresh()
    state = outcome.state
    record = next((s for s in [*state.approved, *state.pending] if s.id == submission_id), None)
    if record is None:
        raise HTTPException(status_code=404, detail="Submission not found")
    try:
        data, content_type = await reservoir.blobs.get(record.photo_ref)
    except FileNotFoundError:
        raise HTTPException(status_code=404, detail="Photo not found in storage")
    return Response(content=data, media_type=content_type)
