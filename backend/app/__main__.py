"""
Run the product catalog with uvicorn: `python -m app` (from backend/).

Host, port and log level come from the same settings the app uses
(BACKEND_HOST, PORT, LOG_LEVEL).
"""

import logging

import uvicorn

from app.config import settings
from app.main import app, setup_logging

logger = logging.getLogger("app")


def main() -> None:
    setup_logging()
    logger.info(
        "Server running in %s mode at http://%s:%d",
        settings.app_env,
        settings.backend_host,
        settings.port,
    )
    uvicorn.run(
        app,
        host=settings.backend_host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
