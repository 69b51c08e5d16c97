from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from offboarding.api.router import api_router
from offboarding.core.config import settings
from offboarding.core.errors import INTERNAL_ERROR_MESSAGE, OffboardingError
from offboarding.services.lifecycle import ServiceLifecycle
from offboarding.services.record_store import RecordStore

logger = logging.getLogger(__name__)

INVALID_BODY_MESSAGE = "Invalid request body"


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    store = RecordStore.from_settings(settings)
    lifecycle = ServiceLifecycle.from_settings(store, settings)
    application.state.lifecycle = lifecycle
    # StartupError propagates and aborts server startup.
    await lifecycle.start()
    try:
        yield
    finally:
        await lifecycle.shutdown()


app = FastAPI(
    title="Offboarding API",
    description="Employee offboarding form intake",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def unhandled_error_middleware(request: Request, call_next):
    # Registered before CORSMiddleware so the 500 still carries CORS headers.
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(api_router)


@app.exception_handler(OffboardingError)
async def offboarding_error_handler(request: Request, exc: OffboardingError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": INVALID_BODY_MESSAGE})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = INVALID_BODY_MESSAGE if exc.status_code == 400 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)
