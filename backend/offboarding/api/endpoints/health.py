from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from offboarding.core.dependencies import get_store_handle
from offboarding.models.offboarding import HealthResponse
from offboarding.services.record_store import RecordStore

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(store: RecordStore | None = Depends(get_store_handle)):  # noqa: B008
    connected = store is not None and await store.health_check()
    return HealthResponse(
        status="healthy" if connected else "degraded",
        timestamp=datetime.now(timezone.utc),
        database="connected" if connected else "disconnected",
    )
