"""
Error types raised by handlers and clients, plus their HTTP mapping.

Clients are never told which failure occurred: every ``CopyPasteError`` becomes
a plain ``Internal Server Error`` response and the cause is logged server-side.
"""

from __future__ import annotations

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class CopyPasteError(Exception):
    """Base class for failures surfaced as a generic server error."""


class MalformedInputError(CopyPasteError):
    """Raised when request input cannot be used."""


class InvalidStateError(MalformedInputError):
    """Raised when the anti-forgery state token is missing or does not match."""


class MalformedTokenError(MalformedInputError):
    """Raised when an ID token cannot be decoded."""


class NotConnectedError(MalformedInputError):
    """Raised when the session holds no signed-in user."""


class TokenValidationError(CopyPasteError):
    """Raised when a bearer token was not issued to the expected client."""


class ExternalServiceError(CopyPasteError):
    """Raised when a call to the identity provider fails."""


class StorageError(CopyPasteError):
    """Raised when the datastore cannot be read or written."""


class MessageNotFoundError(StorageError):
    """Raised when no record is stored for an identifier."""


async def _handle_copypaste_error(request: Request, exc: CopyPasteError) -> PlainTextResponse:
    logger.error("%s %s failed: %s: %s", request.method, request.url.path, type(exc).__name__, exc)
    return PlainTextResponse("Internal Server Error", status_code=HTTPStatus.INTERNAL_SERVER_ERROR)


async def _handle_http_error(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
    if exc.status_code == HTTPStatus.NOT_FOUND:
        return PlainTextResponse("404: Not Found", status_code=HTTPStatus.NOT_FOUND)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)


def install_error_handlers(app: FastAPI) -> None:
    """Register the generic error responses on ``app``."""
    app.add_exception_handler(CopyPasteError, _handle_copypaste_error)
    app.add_exception_handler(StarletteHTTPException, _handle_http_error)


__all__ = [
    "CopyPasteError",
    "ExternalServiceError",
    "InvalidStateError",
    "MalformedInputError",
    "MalformedTokenError",
    "MessageNotFoundError",
    "NotConnectedError",
    "StorageError",
    "TokenValidationError",
    "install_error_handlers",
]
