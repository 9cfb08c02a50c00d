import logging
import sys
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"

logger = logging.getLogger("bugtracker.http")


def setup_logging(level=logging.INFO):
    """Setup centralized logging configuration."""
    root_logger = logging.getLogger()

    # Clear existing handlers to prevent duplicate logs
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)

    # stderr keeps us in line with uvicorn's own output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root_logger.addHandler(console_handler)

    for logger_name in ["bugtracker", "uvicorn", "uvicorn.error", "uvicorn.access"]:
        named = logging.getLogger(logger_name)
        named.setLevel(level)
        named.propagate = True

    root_logger.debug("Logging initialized at level %s", logging.getLevelName(level))


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status and elapsed time."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000
        logger.info(
            "%s %s - Status: %s - Time: %.2fms",
            request.method,
            request.url.path,
            response.status_code,
            process_time,
        )
        return response
