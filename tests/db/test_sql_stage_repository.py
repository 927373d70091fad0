"""Tests for SqlStageRepository against PostgreSQL.

Requires TEST_DATABASE_URL (postgresql+asyncpg://...); skipped otherwise.
"""

import os
from datetime import UTC, datetime

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from construction_stages.db.base import Base
from construction_stages.services.stage_repository import SqlStageRepository, StageRepository

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(not os.getenv("TEST_DATABASE_URL"), reason="TEST_DATABASE_URL not set"),
]


@pytest.fixture
async def sql_repository():
    """Repository over freshly created tables, dropped afterwards."""
    engine = create_async_engine(os.environ["TEST_DATABASE_URL"], echo=False)

    import construction_stages.db.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield SqlStageRepository(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


def _values(**overrides) -> dict:
    values = {
        "name": "Concrete pour",
        "start_date": datetime(2024, 1, 1, tzinfo=UTC),
        "end_date": datetime(2024, 1, 8, tzinfo=UTC),
        "duration": 1.0,
        "duration_unit": "WEEKS",
        "color": "#aabbcc",
        "external_id": "EXT-1",
        "status": "NEW",
    }
    values.update(overrides)
    return values


def test_sql_repository_satisfies_protocol():
    assert isinstance(SqlStageRepository(None), StageRepository)


async def test_insert_and_read_formats_dates(sql_repository):
    stage_id = await sql_repository.insert(_values())

    stage = await sql_repository.get(stage_id)

    assert stage.id == stage_id
    assert stage.start_date == "2024-01-01T00:00:00Z"
    assert stage.end_date == "2024-01-08T00:00:00Z"
    assert stage.duration == 1.0
    assert stage.duration_unit == "WEEKS"


async def test_get_unknown_returns_none(sql_repository):
    assert await sql_repository.get(12345) is None


async def test_update_sets_only_given_columns(sql_repository):
    stage_id = await sql_repository.insert(_values())

    assert await sql_repository.update(stage_id, {"color": "#fff"}) is True

    stage = await sql_repository.get(stage_id)
    assert stage.color == "#fff"
    assert stage.name == "Concrete pour"
    assert stage.status == "NEW"


async def test_update_unknown_returns_false(sql_repository):
    assert await sql_repository.update(999, {"name": "nobody"}) is False


async def test_soft_delete_keeps_row(sql_repository):
    stage_id = await sql_repository.insert(_values(end_date=None, duration=None))

    assert await sql_repository.soft_delete(stage_id) is True

    stages = await sql_repository.list_all()
    assert [(s.id, s.status, s.end_date) for s in stages] == [(stage_id, "DELETED", None)]
