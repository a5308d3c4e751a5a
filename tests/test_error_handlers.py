"""
Tests for error translation (status/message mapping per failure kind).
"""

import pytest
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_api.core.error_handlers import error_kind, translate_error
from recipe_api.errors import (
    DuplicateKeyError,
    ErrorKind,
    MalformedIdentifierError,
    RecipeAPIError,
    RecipeNotFoundError,
    RecipeValidationError,
)


class UnavailableError(Exception):
    status_code = 503


@pytest.mark.parametrize(
    "exc,expected",
    [
        (MalformedIdentifierError("id", "abc"), (400, "Invalid id: abc")),
        (
            DuplicateKeyError("name"),
            (400, "Duplicate field value for name. Please use another value."),
        ),
        (
            RecipeValidationError(["Recipe name is required", "Servings must be at least 1"]),
            (400, "Recipe name is required, Servings must be at least 1"),
        ),
        (RecipeNotFoundError("abc"), (404, "Recipe not found with id: abc")),
        (RecipeAPIError("Teapot", status_code=418), (418, "Teapot")),
        (RecipeAPIError(), (500, "Server Error")),
        (UnavailableError("store unavailable"), (503, "store unavailable")),
        (ValueError("boom"), (500, "boom")),
        (StarletteHTTPException(405), (405, "Method Not Allowed")),
    ],
)
def test_translate_error(exc, expected):
    assert translate_error(exc) == expected


def test_request_validation_is_a_validation_failure():
    exc = RequestValidationError(
        [{"loc": ("body", 1), "msg": "JSON decode error", "type": "json_invalid"}]
    )
    assert error_kind(exc) == ErrorKind.VALIDATION
    assert translate_error(exc) == (400, "body.1: JSON decode error")


def test_unknown_exceptions_are_unexpected():
    assert error_kind(KeyError("x")) == ErrorKind.UNEXPECTED
