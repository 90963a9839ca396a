from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone as dt_tz
from typing import Callable
from uuid import UUID
import structlog

from reservoir.schemas.reservoir import ReservoirState
from reservoir.services.aggregation import aggregate
from reservoir.services.errors import FetchError, ReservoirError
from reservoir.services.storage import BlobStore
from reservoir.services.store import SubmissionStore

log = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(dt_tz.utc)


@dataclass
class Outcome:
    """What a workflow hands back to its caller; errors are values, not raised."""
    state: ReservoirState
    error: ReservoirError | None = None
    submission_id: UUID | None = None
    message: str | None = None
    stale: bool = False   # state is the retained snapshot, the last read failed

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class Reservoir:
    """
    Handle shared by the workflows: both backends, the deployment constants,
    and the last aggregate that was read successfully.
    Built once at startup and passed in, never looked up globally.
    """
    store: SubmissionStore
    blobs: BlobStore
    goal_litres: int
    photo_prefix: str = "waterbutt_photos"
    cleanup_orphan_photos: bool = False
    clock: Callable[[], datetime] = _utcnow
    state: ReservoirState = field(init=False)

    def __post_init__(self):
        self.state = aggregate([], self.goal_litres)

    async def refresh(self) -> Outcome:
        # Always a full re-read; on failure the previous snapshot stays in place
        try:
            rows = await self.store.list()
        except Exception as e:
            log.warning("reservoir_refresh_failed", error=repr(e))
            return Outcome(state=self.state, error=FetchError(), stale=True)
        self.state = aggregate(rows, self.goal_litres)
        return Outcome(state=self.state)
