"""Shared test fixtures for all test groups."""

import pytest

from construction_stages.core.config import Settings
from construction_stages.services.stage_repository_fake import InMemoryStageRepository
from construction_stages.services.stage_service import StageService


@pytest.fixture
def settings():
    """Settings with source-compatible lifecycle defaults."""
    return Settings(default_stage_status="NEW", deleted_is_terminal=False)


@pytest.fixture
def repository():
    """Fresh in-memory repository."""
    return InMemoryStageRepository()


@pytest.fixture
def service(repository, settings):
    """StageService over the in-memory repository."""
    return StageService(repository, settings)


@pytest.fixture
def stage_payload():
    """A complete, valid create payload as a client would send it."""
    return {
        "name": "Foundations",
        "startDate": "2024-01-01T00:00:00Z",
        "endDate": "2024-01-08T00:00:00Z",
        "durationUnit": "WEEKS",
        "color": "#A1B2C3",
        "externalId": "EXT-001",
        "status": "PLANNED",
    }
