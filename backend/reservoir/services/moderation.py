from __future__ import annotations
from uuid import UUID
import structlog

from reservoir.services.errors import NotFoundError, PersistError
from reservoir.services.reservoir import Outcome, Reservoir

log = structlog.get_logger()


async def approve(reservoir: Reservoir, submission_id: UUID) -> Outcome:
    """
    Mark one submission approved and re-read the reservoir.
    Approving twice is a plain success; totals come from the fresh read.
    No caller check happens here.
    """
    try:
        await reservoir.store.update_approved(submission_id)
    except NotFoundError as e:
        log.info("approval_rejected", submission_id=str(submission_id), reason=e.kind)
        return Outcome(state=reservoir.state, error=e)
    except Exception as e:
        log.error("approval_persist_failed", submission_id=str(submission_id), error=repr(e))
        return Outcome(state=reservoir.state, error=PersistError(message="Could not save the approval."))

    log.info("submission_approved", submission_id=str(submission_id))
    refreshed = await reservoir.refresh()
    return Outcome(state=refreshed.state, submission_id=submission_id, stale=refreshed.stale)
