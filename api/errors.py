"""
api/errors.py -- Error translation for both services.

translate_error() is the only place an error becomes an HTTP response. It
reads the ErrorKind tag on AppError and looks up the status code; anything
that is not an AppError collapses to a generic 400 so internals never leak.

install_error_handling() wires translate_error() into an app:
  - AppError raised by handlers or dependencies
  - FastAPI RequestValidationError (typed body/path parameter failures)
  - Starlette HTTPException (unmatched routes, wrong methods)
  - any other exception, via an innermost HTTP middleware

The catch-all is a middleware rather than @app.exception_handler(Exception)
because Starlette re-raises after running an Exception handler; the
middleware returns the 400 and the request ends there.

Envelope (all branches): {"errors": [{"message": str, "field"?: str}]}
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.errors import AppError, ErrorKind, FieldError, not_found, request_validation_error

logger = logging.getLogger("blogstack.api.errors")

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.REQUEST_VALIDATION: 400,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NOT_AUTHORIZED: 401,
}

GENERIC_MESSAGE = "Something went wrong"


def translate_error(exc: Exception) -> JSONResponse:
    """Map any exception onto the uniform error envelope."""
    if isinstance(exc, AppError):
        return JSONResponse(
            status_code=_STATUS_BY_KIND[exc.kind],
            content={"errors": exc.serialize()},
        )
    return JSONResponse(status_code=400, content={"errors": [{"message": GENERIC_MESSAGE}]})


def _from_request_validation(exc: RequestValidationError) -> AppError:
    entries = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "path", "query")]
        entries.append(FieldError(err.get("msg", "Invalid value"), ".".join(loc) or None))
    return request_validation_error(entries)


def install_error_handling(app: FastAPI) -> None:
    """Register the translator for every error source on the given app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return translate_error(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return translate_error(_from_request_validation(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code in (404, 405):
            return translate_error(not_found())
        return JSONResponse(
            status_code=exc.status_code,
            content={"errors": [{"message": str(exc.detail)}]},
        )

    @app.middleware("http")
    async def catch_unrecognized(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
            return translate_error(exc)
