#!/usr/bin/env python3
"""Create the offboarding table ahead of the API.

The API creates the table on startup as well; this script is for deployments
that prepare the database first. Run from the backend/ directory:

    python3 scripts/init_db.py [--attempts N] [--delay SECONDS] [--verbose]

Connection settings come from the same DB_* / DATABASE_URL environment
variables the service reads. Exits non-zero if the database stays unreachable.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys

_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from offboarding.core.config import Settings  # noqa: E402
from offboarding.core.errors import StartupError  # noqa: E402
from offboarding.core.logging import configure_logging  # noqa: E402
from offboarding.services.lifecycle import ServiceLifecycle  # noqa: E402
from offboarding.services.record_store import RecordStore  # noqa: E402

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Wait for the database and create the offboarding table",
    )
    parser.add_argument(
        "--attempts",
        type=int,
        default=None,
        help="Connection attempts before giving up (default: DB_CONNECT_ATTEMPTS)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds between attempts (default: DB_CONNECT_RETRY_DELAY)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )
    return parser.parse_args(argv)


async def init_db(args: argparse.Namespace, settings: Settings | None = None) -> None:
    settings = settings or Settings()
    store = RecordStore.from_settings(settings)
    lifecycle = ServiceLifecycle(
        store,
        max_attempts=args.attempts if args.attempts is not None else settings.DB_CONNECT_ATTEMPTS,
        retry_delay=args.delay if args.delay is not None else settings.DB_CONNECT_RETRY_DELAY,
        backoff=settings.DB_CONNECT_BACKOFF,
        shutdown_timeout=settings.SHUTDOWN_TIMEOUT,
    )
    await lifecycle.start()
    await lifecycle.shutdown()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    try:
        asyncio.run(init_db(args))
    except StartupError:
        logger.exception("Database initialization failed")
        return 1
    logger.info("Database ready")
    return 0


if __name__ == "__main__":
    sys.exit(main())
