"""
api/middleware.py -- Logging setup and request logging shared by both services.

Pattern: Interceptor. Every request passes through log_requests before
reaching a route handler; wall-clock time around call_next gives the latency
reported on each line.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

_LOG_FORMAT = "%(asctime)s %(levelname)-5s %(name)s %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT, datefmt=_DATE_FORMAT)


def install_request_logging(app: FastAPI, logger: logging.Logger) -> None:
    """Log method, path, status, latency and client address for every request.

    Register after install_error_handling() so this middleware sits outside
    the catch-all and logs the translated status.
    """

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %d %.1fms %s",
            request.method,
            request.url.path,
            response.status_code,
            ms,
            request.client.host if request.client else "unknown",
        )
        return response
