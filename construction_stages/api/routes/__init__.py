from fastapi import APIRouter

from construction_stages.api.routes import health, stages

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(stages.router, prefix="/constructionStages", tags=["construction-stages"])
