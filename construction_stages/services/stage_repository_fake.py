"""InMemoryStageRepository — deterministic StageRepository for tests.

Keeps transient ConstructionStage objects in a dict so rows are rendered by
the same mapping the SQL repository uses.
"""

from typing import Any

from construction_stages.db.models.construction_stage import ConstructionStage
from construction_stages.domain.enums import StageStatus
from construction_stages.schemas.stages import StageRead
from construction_stages.services.stage_repository import stage_to_read

_COLUMNS = frozenset(column.key for column in ConstructionStage.__table__.columns)


class InMemoryStageRepository:
    """StageRepository that never touches a database."""

    def __init__(self) -> None:
        self._rows: dict[int, ConstructionStage] = {}
        self._next_id = 1
        self.writes: list[tuple[str, int, dict[str, Any]]] = []

    async def list_all(self) -> list[StageRead]:
        return [stage_to_read(self._rows[stage_id]) for stage_id in sorted(self._rows)]

    async def get(self, stage_id: int) -> StageRead | None:
        stage = self._rows.get(stage_id)
        return stage_to_read(stage) if stage is not None else None

    async def insert(self, values: dict[str, Any]) -> int:
        self._check_columns(values)
        stage_id = self._next_id
        self._next_id += 1
        self._rows[stage_id] = ConstructionStage(id=stage_id, **values)
        self.writes.append(("insert", stage_id, dict(values)))
        return stage_id

    async def update(self, stage_id: int, values: dict[str, Any]) -> bool:
        self._check_columns(values)
        stage = self._rows.get(stage_id)
        if stage is None:
            return False
        for column, value in values.items():
            setattr(stage, column, value)
        self.writes.append(("update", stage_id, dict(values)))
        return True

    async def soft_delete(self, stage_id: int) -> bool:
        return await self.update(stage_id, {"status": StageStatus.DELETED.value})

    @staticmethod
    def _check_columns(values: dict[str, Any]) -> None:
        unknown = set(values) - _COLUMNS
        if unknown:
            raise KeyError(f"Unknown construction_stages columns: {sorted(unknown)}")
