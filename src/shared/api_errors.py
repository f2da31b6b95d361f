"""Translate failure kinds into HTTP responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError

from shared.errors import (
    AuthenticationFailure,
    AuthorizationFailure,
    ConcurrentUpdateConflict,
    DependencyFailure,
    DependencyTimeout,
    NotFound,
    ShopCartError,
    UsernameTaken,
)

logger = structlog.get_logger(__name__)

# Most specific first; the first isinstance match wins.
_STATUS_BY_FAILURE = (
    (AuthenticationFailure, 401),
    (AuthorizationFailure, 403),
    (NotFound, 404),
    (ConcurrentUpdateConflict, 409),
    (UsernameTaken, 409),
    (DependencyTimeout, 504),
    (DependencyFailure, 503),
)


def status_for(exc: ShopCartError) -> int:
    for failure_cls, status in _STATUS_BY_FAILURE:
        if isinstance(exc, failure_cls):
            return status
    return 500


async def _handle_shopcart_error(request: Request, exc: ShopCartError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error("Request failed", path=request.url.path, **exc.to_dict())
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    return JSONResponse(status_code=status, content={"error": exc.to_dict()}, headers=headers)


async def _handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": {"kind": "validation", "messages": exc.messages}},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShopCartError, _handle_shopcart_error)
    app.add_exception_handler(ValidationError, _handle_validation_error)
