"""StageRepository — persistence for construction stages.

Defines the repository protocol the StageService depends on and the async
SQLAlchemy implementation used in production. Values handed in are keyed by
column name; everything handed out is a StageRead with dates rendered as
YYYY-MM-DDTHH:MM:SSZ.
"""

from typing import Any, Protocol, runtime_checkable

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from construction_stages.db.models.construction_stage import ConstructionStage
from construction_stages.domain.dates import format_iso8601
from construction_stages.domain.enums import StageStatus
from construction_stages.schemas.stages import StageRead


def stage_to_read(stage: ConstructionStage) -> StageRead:
    """Map an ORM row to the API record."""
    return StageRead(
        id=stage.id,
        name=stage.name,
        start_date=format_iso8601(stage.start_date),
        end_date=format_iso8601(stage.end_date),
        duration=stage.duration,
        duration_unit=stage.duration_unit,
        color=stage.color,
        external_id=stage.external_id,
        status=stage.status,
    )


@runtime_checkable
class StageRepository(Protocol):
    """Storage collaborator for construction stages."""

    async def list_all(self) -> list[StageRead]:
        """Every stored stage, soft-deleted ones included, ordered by id."""
        ...

    async def get(self, stage_id: int) -> StageRead | None:
        """One stage, or None when the id is unknown."""
        ...

    async def insert(self, values: dict[str, Any]) -> int:
        """Insert a row from column values and return its new id."""
        ...

    async def update(self, stage_id: int, values: dict[str, Any]) -> bool:
        """Set exactly the given columns on one row. False when the id is unknown."""
        ...

    async def soft_delete(self, stage_id: int) -> bool:
        """Set status to DELETED. False when the id is unknown."""
        ...


class SqlStageRepository:
    """StageRepository backed by the construction_stages table.

    Uses dependency injection (takes session_factory) for testability. Each
    write runs in its own session and commits once, so a failed statement
    leaves the row untouched.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def list_all(self) -> list[StageRead]:
        async with self.session_factory() as session:
            result = await session.execute(select(ConstructionStage).order_by(ConstructionStage.id))
            return [stage_to_read(stage) for stage in result.scalars().all()]

    async def get(self, stage_id: int) -> StageRead | None:
        async with self.session_factory() as session:
            result = await session.execute(select(ConstructionStage).where(ConstructionStage.id == stage_id))
            stage = result.scalar_one_or_none()
            return stage_to_read(stage) if stage is not None else None

    async def insert(self, values: dict[str, Any]) -> int:
        async with self.session_factory() as session:
            stage = ConstructionStage(**values)
            session.add(stage)
            await session.commit()
            await session.refresh(stage)
            return stage.id

    async def update(self, stage_id: int, values: dict[str, Any]) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                update(ConstructionStage).where(ConstructionStage.id == stage_id).values(**values)
            )
            await session.commit()
            return result.rowcount > 0

    async def soft_delete(self, stage_id: int) -> bool:
        return await self.update(stage_id, {"status": StageStatus.DELETED.value})
