from __future__ import annotations
from typing import Protocol
from uuid import UUID
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from reservoir.models.submission import WaterButt
from reservoir.schemas.submission import NewSubmission, SubmissionRecord
from reservoir.services.errors import NotFoundError


class SubmissionStore(Protocol):
    async def list(self) -> list[SubmissionRecord]: ...
    async def create(self, fields: NewSubmission) -> UUID: ...
    async def update_approved(self, submission_id: UUID) -> None: ...


def _record(row: WaterButt) -> SubmissionRecord:
    return SubmissionRecord(
        id=row.id,
        litres=row.litres,
        postcode=row.postcode,
        photo_ref=row.photo_url,
        approved=bool(row.approved),
        created_at=row.created_at,
    )


class SqlSubmissionStore:
    """water_butts table through the async SQLAlchemy ORM; one session per call."""

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]):
        self._sessionmaker = sessionmaker

    async def list(self) -> list[SubmissionRecord]:
        async with self._sessionmaker() as session:
            rows = (await session.execute(select(WaterButt))).scalars().all()
        return [_record(r) for r in rows]

    async def create(self, fields: NewSubmission) -> UUID:
        async with self._sessionmaker() as session:
            row = WaterButt(
                litres=fields.litres,
                postcode=fields.postcode,
                photo_url=fields.photo_ref,
                approved=fields.approved,
                created_at=fields.created_at,
            )
            session.add(row)
            await session.commit()
            return row.id

    async def update_approved(self, submission_id: UUID) -> None:
        # Touches only the approved column of one row
        async with self._sessionmaker() as session:
            result = await session.execute(
                update(WaterButt).where(WaterButt.id == submission_id).values(approved=True)
            )
            if result.rowcount == 0:
                await session.rollback()
                raise NotFoundError(submission_id)
            await session.commit()
