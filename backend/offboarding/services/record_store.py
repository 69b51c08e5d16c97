"""Relational persistence for offboarding records."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy import select, text
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from offboarding.core.config import Settings
from offboarding.core.errors import DuplicateKeyError, StoreUnavailableError
from offboarding.models.db import Base, OffboardingORM
from offboarding.models.offboarding import OffboardingRecord, StoredOffboardingRecord

logger = logging.getLogger(__name__)

# Raised when the database is unreachable, the pool is exhausted or a query times out.
_UNAVAILABLE_ERRORS = (DBAPIError, PoolTimeoutError, OSError, asyncio.TimeoutError)


def create_store_engine(settings: Settings) -> AsyncEngine:
    url = settings.database_url
    if url.startswith("sqlite"):
        return create_async_engine(url)

    return create_async_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=0,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_IDLE_TIMEOUT,
        pool_pre_ping=True,
        connect_args={
            "timeout": settings.DB_CONNECT_TIMEOUT,
            "command_timeout": settings.DB_COMMAND_TIMEOUT,
        },
    )


class RecordStore:
    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.sessionmaker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        self._inflight = 0
        self._idle = asyncio.Event()
        self._idle.set()
        self._closing = False
        self.closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> RecordStore:
        return cls(create_store_engine(settings))

    @asynccontextmanager
    async def _operation(self) -> AsyncIterator[None]:
        if self._closing:
            raise StoreUnavailableError()
        self._inflight += 1
        self._idle.clear()
        try:
            yield
        finally:
            self._inflight -= 1
            if self._inflight == 0:
                self._idle.set()

    async def connect(self) -> None:
        """Run one round trip against the database."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except _UNAVAILABLE_ERRORS as err:
            raise StoreUnavailableError() from err

    async def ensure_schema(self) -> None:
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        except _UNAVAILABLE_ERRORS as err:
            raise StoreUnavailableError() from err
        logger.info("Offboarding table verified/created")

    async def insert(self, record: OffboardingRecord) -> int:
        row = OffboardingORM(**record.model_dump())
        async with self._operation():
            try:
                async with self.sessionmaker() as session:
                    session.add(row)
                    await session.commit()
            except IntegrityError as err:
                raise DuplicateKeyError(record.employee_id) from err
            except _UNAVAILABLE_ERRORS as err:
                raise StoreUnavailableError() from err
        logger.info("Offboarding record %s stored for %s", row.id, record.employee_id)
        return row.id

    async def list_all(self) -> list[StoredOffboardingRecord]:
        query = select(OffboardingORM).order_by(
            OffboardingORM.created_at.desc(),
            OffboardingORM.id.desc(),
        )
        async with self._operation():
            try:
                async with self.sessionmaker() as session:
                    result = await session.execute(query)
                    rows = result.scalars().all()
            except _UNAVAILABLE_ERRORS as err:
                raise StoreUnavailableError() from err

        return [
            StoredOffboardingRecord(
                id=row.id,
                employee_name=row.employee_name,
                position=row.position,
                department=row.department,
                employee_id=row.employee_id,
                feedback=row.feedback,
                final_salary=row.final_salary,
                bonus=row.bonus,
                acknowledgment=row.acknowledgment,
                created_at=row.created_at,
            )
            for row in rows
        ]

    async def health_check(self) -> bool:
        try:
            async with self._operation():
                await self.connect()
        except StoreUnavailableError:
            logger.warning("Database health check failed", exc_info=True)
            return False
        except SQLAlchemyError:
            logger.exception("Database health check failed")
            return False
        return True

    async def close(self, timeout: float | None = None) -> None:
        """Stop taking operations, wait for running ones, then release the pool."""
        if self.closed:
            return
        self._closing = True
        if self._inflight:
            logger.info("Waiting for %d in-flight store operations", self._inflight)
            try:
                await asyncio.wait_for(self._idle.wait(), timeout)
            except asyncio.TimeoutError:
                logger.warning("Shutdown timeout reached with %d store operations running", self._inflight)
        await self.engine.dispose()
        self.closed = True
        logger.info("Database connection pool closed")
