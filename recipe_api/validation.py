"""
Recipe validation utilities.

Pure functions over candidate field mappings, independent of storage.
Used by the API write handlers.
"""

from typing import Any, List, Optional, Tuple

from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from recipe_api.errors import RecipeValidationError
from recipe_api.models import REQUIRED_MESSAGES, RULE_ERROR_TYPE, RecipeFields

BODY_NOT_OBJECT = "Request body must be a JSON object"


def _error_message(err: dict) -> str:
    """Turn one pydantic error into a client-facing message."""
    loc = err.get("loc") or ()
    field = str(loc[0]) if loc else "body"
    if err["type"] == "missing":
        return REQUIRED_MESSAGES.get(_snake_field(field), f"{field} is required")
    if err["type"] == RULE_ERROR_TYPE:
        return err["msg"]
    return f"{'.'.join(str(part) for part in loc) or field}: {err['msg']}"


def _snake_field(alias: str) -> str:
    for name in RecipeFields.model_fields:
        if to_camel(name) == alias or name == alias:
            return name
    return alias


def validate_recipe_fields(data: Any) -> Tuple[Optional[RecipeFields], List[str]]:
    """
    Validate a candidate field set.

    Returns:
        Tuple of (normalized RecipeFields or None, list of violation messages).
        At most one message is reported per field.
    """
    if not isinstance(data, dict):
        return None, [BODY_NOT_OBJECT]

    try:
        return RecipeFields.model_validate(data), []
    except ValidationError as e:
        messages: List[str] = []
        seen_fields = set()
        for err in e.errors():
            loc = err.get("loc") or ("body",)
            if loc[0] in seen_fields:
                continue
            seen_fields.add(loc[0])
            messages.append(_error_message(err))
        return None, messages


def validate_or_raise(data: Any) -> RecipeFields:
    """Validate a candidate field set, raising RecipeValidationError on failure."""
    fields, messages = validate_recipe_fields(data)
    if fields is None:
        raise RecipeValidationError(messages)
    return fields

