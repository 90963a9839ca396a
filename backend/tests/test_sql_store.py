from __future__ import annotations
import uuid
from datetime import datetime, timedelta, timezone
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from reservoir.db import Base, make_sessionmaker
from reservoir.schemas.submission import NewSubmission
from reservoir.services.errors import NotFoundError
from reservoir.services.store import SqlSubmissionStore


@pytest_asyncio.fixture
async def sql_store(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'reservoir.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield SqlSubmissionStore(make_sessionmaker(engine))
    await engine.dispose()


def _fields(litres=500, postcode="AB1 2CD", minutes=0) -> NewSubmission:
    return NewSubmission(
        litres=litres,
        postcode=postcode,
        photo_ref=f"waterbutt_photos/{uuid.uuid4().hex}.jpg",
        approved=False,
        created_at=datetime(2025, 6, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes),
    )


@pytest.mark.asyncio
async def test_create_and_list(sql_store):
    f = _fields()
    sid = await sql_store.create(f)
    rows = await sql_store.list()
    assert [r.id for r in rows] == [sid]
    row = rows[0]
    assert row.litres == 500
    assert row.postcode == "AB1 2CD"
    assert row.photo_ref == f.photo_ref
    assert row.approved is False


@pytest.mark.asyncio
async def test_update_approved_targets_one_row(sql_store):
    a = await sql_store.create(_fields(postcode="AA1"))
    b = await sql_store.create(_fields(postcode="BB2", minutes=1))
    await sql_store.update_approved(a)
    by_id = {r.id: r for r in await sql_store.list()}
    assert by_id[a].approved is True
    assert by_id[b].approved is False
    assert by_id[a].litres == 500 and by_id[a].postcode == "AA1"


@pytest.mark.asyncio
async def test_update_approved_is_idempotent(sql_store):
    a = await sql_store.create(_fields())
    await sql_store.update_approved(a)
    await sql_store.update_approved(a)
    assert (await sql_store.list())[0].approved is True


@pytest.mark.asyncio
async def test_update_unknown_id_raises_not_found(sql_store):
    await sql_store.create(_fields())
    with pytest.raises(NotFoundError):
        await sql_store.update_approved(uuid.uuid4())
    assert all(not r.approved for r in await sql_store.list())
