import logging

import uvicorn

from bugtracker.core.config import get_settings
from bugtracker.core.logging_config import setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(level=getattr(logging, settings.log_level, logging.INFO))
    uvicorn.run(
        "bugtracker.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
