from fastapi import APIRouter

from offboarding.api.endpoints import health, offboarding

api_router = APIRouter(prefix="/api")
api_router.include_router(health.router)
api_router.include_router(offboarding.router)
