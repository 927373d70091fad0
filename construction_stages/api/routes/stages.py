"""Construction stage API routes."""

from fastapi import APIRouter, Depends

from construction_stages.db.base import get_session_factory
from construction_stages.schemas.stages import StageCreate, StageDeleteResponse, StageRead, StageUpdate
from construction_stages.services.stage_repository import SqlStageRepository, StageRepository
from construction_stages.services.stage_service import StageService

router = APIRouter()


def get_stage_repository() -> StageRepository:
    """Dependency that provides the StageRepository.

    Override this dependency in tests via app.dependency_overrides.
    """
    return SqlStageRepository(get_session_factory())


def get_stage_service(repository: StageRepository = Depends(get_stage_repository)) -> StageService:
    return StageService(repository)


@router.get("", response_model=list[StageRead])
async def list_stages(service: StageService = Depends(get_stage_service)):
    """List every construction stage, soft-deleted ones included."""
    return await service.list_stages()


@router.get("/{stage_id}", response_model=StageRead)
async def get_stage(stage_id: int, service: StageService = Depends(get_stage_service)):
    """Get a single construction stage.

    Raises:
        StageNotFoundError (404): unknown id
    """
    return await service.get_stage(stage_id)


@router.post("", response_model=StageRead, status_code=201)
async def create_stage(request: StageCreate, service: StageService = Depends(get_stage_service)):
    """Create a construction stage; duration is derived from startDate/endDate.

    Raises:
        ValidationError (400): body is the field -> message mapping
        InvalidDateFormat, NoDurationDerivable (400)
    """
    return await service.create_stage(request)


@router.patch("/{stage_id}", response_model=StageRead)
async def update_stage(stage_id: int, request: StageUpdate, service: StageService = Depends(get_stage_service)):
    """Partially update a construction stage and return the full record.

    Raises:
        StageNotFoundError (404): unknown id
        ValidationError, InvalidStatusTransition (400): nothing is written
    """
    return await service.update_stage(stage_id, request)


@router.delete("/{stage_id}", response_model=StageDeleteResponse)
async def delete_stage(stage_id: int, service: StageService = Depends(get_stage_service)):
    """Soft-delete a construction stage (status becomes DELETED, the row stays)."""
    return await service.delete_stage(stage_id)
