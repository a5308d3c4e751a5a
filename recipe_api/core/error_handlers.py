"""
Error translation: the single place that turns failures into HTTP error responses.

Every error body is {"success": false, "error": <message>}, plus a "stack"
field in the development environment. Unmatched routes get
{"success": false, "message": "Route not found"}.
"""

import logging
import traceback
from typing import Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_api import config
from recipe_api.errors import ErrorKind, RecipeAPIError
from recipe_api.services.metrics import record_error

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Server Error"
ROUTE_NOT_FOUND_MESSAGE = "Route not found"


def error_kind(exc: BaseException) -> ErrorKind:
    if isinstance(exc, RecipeAPIError):
        return exc.kind
    if isinstance(exc, RequestValidationError):
        return ErrorKind.VALIDATION
    return ErrorKind.UNEXPECTED


def _request_validation_message(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return ", ".join(messages)


def translate_error(exc: BaseException) -> Tuple[int, str]:
    """Map a failure to (status code, client message). First matching kind wins."""
    kind = error_kind(exc)

    if kind in (ErrorKind.MALFORMED_ID, ErrorKind.DUPLICATE_KEY):
        return 400, exc.message
    if kind == ErrorKind.VALIDATION:
        if isinstance(exc, RequestValidationError):
            return 400, _request_validation_message(exc)
        return 400, exc.message

    status: Optional[int] = getattr(exc, "status_code", None)
    if isinstance(exc, StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else None
    else:
        message = getattr(exc, "message", None) or str(exc)
    return status or 500, message or DEFAULT_ERROR_MESSAGE


def error_response(exc: BaseException) -> JSONResponse:
    """Log the failure, then build the error envelope for it."""
    status, message = translate_error(exc)
    kind = error_kind(exc)

    if status >= 500:
        logger.error("Error (%s): %s", kind.value, message, exc_info=exc)
    else:
        logger.warning("Error (%s, %d): %s", kind.value, status, message)
    record_error(kind.value, status)

    body = {"success": False, "error": message}
    if config.settings.is_development:
        body["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
    return JSONResponse(status_code=status, content=body)


async def recipe_error_handler(request: Request, exc: RecipeAPIError) -> JSONResponse:
    return error_response(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(exc)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == 404:
        logger.warning("Route not found: %s %s", request.method, request.url.path)
        record_error(ErrorKind.NOT_FOUND.value, 404)
        return JSONResponse(
            status_code=404,
            content={"success": False, "message": ROUTE_NOT_FOUND_MESSAGE},
        )
    return error_response(exc)


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return error_response(exc)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RecipeAPIError, recipe_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
