"""Interface layer error mapping.

Translates domain and adapter errors that escape a route into JSON
responses. Routes that must keep their writes (a rejected login still
records the attempt) handle those errors inline instead, so the request
transaction is committed.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from sso.adapter.error import ClientError, ProviderError, TokenError
from sso.domain.error import (
    AccountDisabledError,
    ConflictError,
    DomainError,
    LoginRequiredError,
    MalformedInputError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[Exception], int]] = [
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (AccountDisabledError, status.HTTP_403_FORBIDDEN),
    (LoginRequiredError, status.HTTP_401_UNAUTHORIZED),
    (MalformedInputError, status.HTTP_400_BAD_REQUEST),
    (TokenError, status.HTTP_401_UNAUTHORIZED),
    (ClientError, status.HTTP_400_BAD_REQUEST),
    (ProviderError, status.HTTP_502_BAD_GATEWAY),
]


def status_for(error: Exception) -> int:
    """HTTP status for a domain or adapter error."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(error: Exception) -> JSONResponse:
    """JSON body ``{"error": <type>, "detail": <message>}`` with mapped status."""
    return JSONResponse(
        status_code=status_for(error),
        content={"error": type(error).__name__, "detail": str(error)},
    )


async def _handle(request: Request, exc: Exception) -> JSONResponse:
    logger.warning(f"{type(exc).__name__} on {request.url.path}: {exc}")
    return error_response(exc)


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers for domain and adapter errors."""
    app.add_exception_handler(DomainError, _handle)
    app.add_exception_handler(TokenError, _handle)
    app.add_exception_handler(ProviderError, _handle)
    app.add_exception_handler(ClientError, _handle)
