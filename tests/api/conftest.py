"""API-specific test fixtures."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from construction_stages.api.routes import api_router
from construction_stages.api.routes.stages import get_stage_repository
from construction_stages.main import register_exception_handlers
from construction_stages.middleware.correlation import setup_correlation_middleware


@pytest.fixture
def api_app(repository) -> FastAPI:
    """FastAPI app wired like create_app(), minus the database lifespan.

    The StageRepository dependency is overridden with the in-memory fake so
    route handlers never touch PostgreSQL.
    """
    app = FastAPI(title="Construction Stages - Test Client")
    setup_correlation_middleware(app)
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")
    app.dependency_overrides[get_stage_repository] = lambda: repository
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(api_app):
    with TestClient(api_app) as client:
        yield client
