from __future__ import annotations
from fastapi import APIRouter, Depends
from uuid import UUID

from reservoir.deps import get_reservoir
from reservoir.routes.reservoir import public_state, raise_for_outcome, to_public
from reservoir.schemas.reservoir import ApproveResponse
from reservoir.schemas.submission import SubmissionPublic
from reservoir.services.moderation import approve
from reservoir.services.reservoir import Reservoir

# No access control: anyone who can reach these routes can approve
router = APIRouter(prefix="/moderation", tags=["moderation"])

@router.get("/pending", response_model=list[SubmissionPublic])
async def list_pending(reservoir: Reservoir = Depends(get_reservoir)):
    outcome = await reservoir.refresh()
    return [to_public(s) for s in outcome.state.pending]

@router.post("/submissions/{submission_id}/approve", response_model=ApproveResponse)
async def approve_submission(submission_id: UUID, reservoir: Reservoir = Depends(get_reservoir)):
    outcome = await approve(reservoir, submission_id)
    raise_for_outcome(outcome)
    return ApproveResponse(submission_id=submission_id, state=public_state(outcome.state, outcome.stale))
