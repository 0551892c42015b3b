"""FastAPI exception handlers for the access error taxonomy."""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from workspace_access.common.logging import log_context
from workspace_access.core.errors import (
    AccessError,
    NotFoundError,
    RoleValidationError,
    UnauthenticatedError,
)

_UNHANDLED_LOGGER = logging.getLogger("workspace_access.errors")
_HTTP_LOGGER = logging.getLogger("workspace_access.http")


def _status_for(exc: AccessError) -> int:
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, UnauthenticatedError):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, RoleValidationError):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_400_BAD_REQUEST


async def access_error_handler(request: Request, exc: AccessError) -> JSONResponse:
    """Translate :class:`AccessError` subclasses into JSON error responses."""

    status_code = _status_for(exc)
    _HTTP_LOGGER.info(
        "access_error",
        extra=log_context(
            path=str(request.url.path),
            method=request.method,
            status_code=status_code,
            exception_type=type(exc).__name__,
        ),
    )
    headers = {"WWW-Authenticate": "X-User-Id"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content={"detail": str(exc)}, headers=headers)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """4xx responses pass through silently; 5xx responses are logged."""

    if exc.status_code >= 500:
        _HTTP_LOGGER.error(
            "http_exception",
            extra=log_context(
                path=str(request.url.path),
                method=request.method,
                status_code=exc.status_code,
                detail=exc.detail,
            ),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: HTTP 500 plus an ERROR log with the stack trace."""

    _UNHANDLED_LOGGER.exception(
        "unhandled_exception",
        extra=log_context(
            path=str(request.url.path),
            method=request.method,
            exception_type=type(exc).__name__,
            detail=str(exc),
        ),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AccessError, access_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "access_error_handler",
    "http_exception_handler",
    "register_exception_handlers",
    "unhandled_exception_handler",
]
