from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, status

from offboarding.core.dependencies import get_record_store
from offboarding.core.errors import (
    DuplicateKeyError,
    InvalidFieldError,
    OffboardingError,
    StoreUnavailableError,
)
from offboarding.models.offboarding import ErrorResponse, OffboardingRecordOut, SubmitResponse
from offboarding.services.record_store import RecordStore
from offboarding.services.validator import validate_submission

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/offboarding", tags=["offboarding"])


@router.post(
    "/submit",
    response_model=SubmitResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def submit_offboarding(
    payload: dict[str, Any] = Body(...),  # noqa: B008
    store: RecordStore = Depends(get_record_store),  # noqa: B008
):
    logger.info("Received offboarding submission for %s", payload.get("empId"))

    try:
        record = validate_submission(payload)
    except InvalidFieldError as err:
        logger.info("Rejected submission: %s (%s)", err.message, err.field)
        raise

    try:
        record_id = await store.insert(record)
    except DuplicateKeyError:
        logger.warning("Duplicate employee ID: %s", record.employee_id)
        raise
    except StoreUnavailableError:
        logger.exception("Database unavailable while inserting %s", record.employee_id)
        raise
    except OffboardingError:
        raise
    except Exception as err:
        logger.exception("Error inserting offboarding record %s", record.employee_id)
        raise OffboardingError() from err

    return SubmitResponse(message="Offboarding form submitted successfully", id=record_id)


@router.get("", response_model=list[OffboardingRecordOut], responses={500: {"model": ErrorResponse}})
async def list_offboarding(
    store: RecordStore = Depends(get_record_store),  # noqa: B008
):
    try:
        records = await store.list_all()
    except OffboardingError:
        logger.exception("Failed to fetch offboarding records")
        raise
    except Exception as err:
        logger.exception("Failed to fetch offboarding records")
        raise OffboardingError() from err

    logger.info("Fetched %d offboarding records", len(records))
    return [OffboardingRecordOut(**record.model_dump()) for record in records]
