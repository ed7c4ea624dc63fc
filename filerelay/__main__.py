"""
FileRelay: Process Entry Point
================================

What:  `python -m filerelay` (or the `filerelay` console script).
How:   Configures logging, validates settings and serves the app with
       uvicorn on settings.host:settings.port.

Exits with status 1 before binding the port when the API key is missing.
"""

import logging
import sys

import uvicorn

from filerelay.config import settings
from filerelay.exceptions import ConfigurationError
from filerelay.main import setup_logging

logger = logging.getLogger("filerelay")


def main() -> int:
    setup_logging()
    try:
        settings.validate_required()
    except ConfigurationError as e:
        logger.error("%s", e.message)
        return 1

    uvicorn.run(
        "filerelay.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
