"""StageService — construction stage lifecycle on top of the pure domain rules.

Every operation either returns the current record(s) or raises a
ConstructionStagesError; the HTTP boundary decides status codes.
"""

import structlog

from construction_stages.core.config import Settings, get_settings
from construction_stages.core.exceptions import ConstructionStagesError, StageNotFoundError
from construction_stages.domain.dates import parse_iso8601
from construction_stages.domain.duration import calculate_duration
from construction_stages.domain.updates import plan_update
from construction_stages.domain.validation import validate_stage_data
from construction_stages.schemas.stages import StageCreate, StageDeleteResponse, StageRead, StageUpdate
from construction_stages.services.stage_repository import StageRepository

logger = structlog.get_logger(__name__)

CREATE_REQUIRED_FIELDS = ("startDate",)


class StageService:
    """Service layer for construction stage operations.

    Orchestrates validation, duration derivation, the partial-update merge
    policy and persistence through an injected StageRepository.
    """

    def __init__(self, repository: StageRepository, settings: Settings | None = None):
        """Initialize with dependency injection.

        Args:
            repository: Storage collaborator
            settings: Lifecycle settings; defaults to the cached application settings
        """
        self.repository = repository
        self.settings = settings or get_settings()

    async def list_stages(self) -> list[StageRead]:
        return await self.repository.list_all()

    async def get_stage(self, stage_id: int) -> StageRead:
        """Raises StageNotFoundError for an unknown id."""
        stage = await self.repository.get(stage_id)
        if stage is None:
            raise StageNotFoundError(stage_id)
        return stage

    async def create_stage(self, request: StageCreate) -> StageRead:
        """Create a stage with a duration derived from its dates.

        Any duration in the request is ignored. Status falls back to
        settings.default_stage_status.

        Raises:
            ValidationError: field rules failed (startDate is required)
            InvalidDateFormat: a date failed re-parsing during derivation
            NoDurationDerivable: no endDate, or endDate not after startDate
        """
        payload = request.to_payload()
        try:
            validate_stage_data(payload, required=CREATE_REQUIRED_FIELDS)
            duration = calculate_duration(payload["startDate"], payload["endDate"], payload["durationUnit"])
        except ConstructionStagesError as e:
            logger.info("stage_create_rejected", error_type=type(e).__name__, error=e.to_payload())
            raise

        stage_id = await self.repository.insert(
            {
                "name": payload["name"],
                "start_date": parse_iso8601(payload["startDate"]),
                "end_date": parse_iso8601(payload["endDate"]),
                "duration": duration.value,
                "duration_unit": duration.unit.value,
                "color": payload["color"],
                "external_id": payload["externalId"],
                "status": payload["status"] or self.settings.default_stage_status.value,
            }
        )
        logger.info("stage_created", stage_id=stage_id, duration=duration.value, duration_unit=duration.unit.value)
        return await self.get_stage(stage_id)

    async def update_stage(self, stage_id: int, request: StageUpdate) -> StageRead:
        """Apply a partial update and return the full current record.

        Only the fields present in the request are written, in a single
        statement. Duration fields are stored as sent.

        Raises:
            StageNotFoundError: unknown id
            ValidationError: field rules failed or merged dates are inverted
            InvalidStatusTransition: status change not allowed
        """
        current = await self.get_stage(stage_id)
        changes = request.to_changes()

        try:
            values = plan_update(current.to_current(), changes, self.settings.deleted_is_terminal)
        except ConstructionStagesError as e:
            logger.info("stage_update_rejected", stage_id=stage_id, error_type=type(e).__name__, error=e.to_payload())
            raise

        if values:
            if not await self.repository.update(stage_id, values):
                raise StageNotFoundError(stage_id)
            logger.info("stage_updated", stage_id=stage_id, columns=sorted(values))

        return await self.get_stage(stage_id)

    async def delete_stage(self, stage_id: int) -> StageDeleteResponse:
        """Soft-delete: set status to DELETED and nothing else."""
        if not await self.repository.soft_delete(stage_id):
            raise StageNotFoundError(stage_id)
        logger.info("stage_deleted", stage_id=stage_id)
        return StageDeleteResponse()
