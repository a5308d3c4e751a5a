"""
Error taxonomy for the recipe API.

Every failure a handler or the store can raise on purpose is a RecipeAPIError
tagged with an ErrorKind. Anything else reaching the translator is treated as
ErrorKind.UNEXPECTED.
"""

from enum import Enum
from typing import Any, List, Optional


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    MALFORMED_ID = "malformed_id"
    NOT_FOUND = "not_found"
    DUPLICATE_KEY = "duplicate_key"
    UNEXPECTED = "unexpected"


class RecipeAPIError(Exception):
    """Base class: a message, a kind tag and an optional HTTP status."""

    kind: ErrorKind = ErrorKind.UNEXPECTED
    status_code: Optional[int] = None

    def __init__(self, message: str = "", status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class RecipeValidationError(RecipeAPIError):
    """One or more field rule violations."""

    kind = ErrorKind.VALIDATION

    def __init__(self, messages: List[str]) -> None:
        self.messages = list(messages)
        super().__init__(", ".join(self.messages))


class MalformedIdentifierError(RecipeAPIError):
    """Identifier is not in the store's addressing format."""

    kind = ErrorKind.MALFORMED_ID

    def __init__(self, field: str, value: Any) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field}: {value}")


class RecipeNotFoundError(RecipeAPIError):
    kind = ErrorKind.NOT_FOUND
    status_code = 404

    def __init__(self, recipe_id: str) -> None:
        self.recipe_id = recipe_id
        super().__init__(f"Recipe not found with id: {recipe_id}")


class DuplicateKeyError(RecipeAPIError):
    kind = ErrorKind.DUPLICATE_KEY

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            f"Duplicate field value for {field}. Please use another value."
        )
