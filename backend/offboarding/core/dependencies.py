from __future__ import annotations

import logging

from fastapi import Depends, Request

from offboarding.core.errors import StoreUnavailableError
from offboarding.services.record_store import RecordStore

logger = logging.getLogger(__name__)


async def get_store_handle(request: Request) -> RecordStore | None:
    """The record store, or ``None`` while the service is not ready."""
    lifecycle = getattr(request.app.state, "lifecycle", None)
    if lifecycle is None or not lifecycle.ready:
        return None
    return lifecycle.store


async def get_record_store(
    store: RecordStore | None = Depends(get_store_handle),  # noqa: B008
) -> RecordStore:
    if store is None:
        logger.error("Request received while the service is not ready")
        raise StoreUnavailableError()
    return store
