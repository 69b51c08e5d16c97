from __future__ import annotations

import uvicorn

from offboarding.core.config import settings
from offboarding.core.logging import configure_logging


def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    uvicorn.run(
        "offboarding.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
        timeout_graceful_shutdown=int(settings.SHUTDOWN_TIMEOUT),
    )


if __name__ == "__main__":
    main()
