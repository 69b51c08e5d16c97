"""Startup and shutdown of the service around its record store."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Awaitable, Callable

from offboarding.core.config import Settings
from offboarding.core.errors import StartupError, StoreUnavailableError
from offboarding.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class ServiceState(str, enum.Enum):
    STARTING = "starting"
    READY = "ready"
    SHUTTING_DOWN = "shutting_down"
    STOPPED = "stopped"


class ServiceLifecycle:
    def __init__(
        self,
        store: RecordStore,
        *,
        max_attempts: int = 5,
        retry_delay: float = 5.0,
        backoff: float = 1.0,
        shutdown_timeout: float = 10.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.store = store
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay
        self.backoff = backoff
        self.shutdown_timeout = shutdown_timeout
        self._sleep = sleep
        self.state = ServiceState.STARTING

    @classmethod
    def from_settings(cls, store: RecordStore, settings: Settings) -> ServiceLifecycle:
        return cls(
            store,
            max_attempts=settings.DB_CONNECT_ATTEMPTS,
            retry_delay=settings.DB_CONNECT_RETRY_DELAY,
            backoff=settings.DB_CONNECT_BACKOFF,
            shutdown_timeout=settings.SHUTDOWN_TIMEOUT,
        )

    @property
    def ready(self) -> bool:
        return self.state is ServiceState.READY

    async def connect_with_retry(self) -> None:
        delay = self.retry_delay
        for attempt in range(1, self.max_attempts + 1):
            try:
                await self.store.connect()
            except StoreUnavailableError as err:
                logger.warning(
                    "Connection attempt %d/%d failed: %s",
                    attempt,
                    self.max_attempts,
                    err.__cause__ or err,
                )
                if attempt == self.max_attempts:
                    raise StartupError(
                        f"Database unreachable after {self.max_attempts} attempts"
                    ) from err
                logger.info("Retrying in %.1f seconds...", delay)
                await self._sleep(delay)
                delay *= self.backoff
            else:
                logger.info("Successfully connected to the database")
                return

    async def start(self) -> None:
        """Connect with bounded retries, make sure the table exists, then go ready.

        Raises:
            StartupError: if the store never became reachable. The service is
                left ``STOPPED`` and must not serve traffic.
        """
        self.state = ServiceState.STARTING
        try:
            await self.connect_with_retry()
            await self.store.ensure_schema()
        except StoreUnavailableError as err:
            self.state = ServiceState.STOPPED
            await self.store.close(0)
            raise StartupError("Database initialization failed") from err
        except StartupError:
            self.state = ServiceState.STOPPED
            await self.store.close(0)
            raise
        self.state = ServiceState.READY
        logger.info("Service ready")

    async def shutdown(self) -> None:
        if self.state is ServiceState.STOPPED:
            return
        self.state = ServiceState.SHUTTING_DOWN
        logger.info("Shutting down gracefully...")
        try:
            await self.store.close(self.shutdown_timeout)
        finally:
            self.state = ServiceState.STOPPED
        logger.info("Service stopped")
