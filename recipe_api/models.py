from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional
import uuid

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

# Constants
MAX_NAME_LENGTH = 100
MIN_INSTRUCTIONS_LENGTH = 10

# Error type for rule violations whose message is shown to the client verbatim
RULE_ERROR_TYPE = "recipe_rule"

REQUIRED_MESSAGES = {
    "name": "Recipe name is required",
    "ingredients": "At least one ingredient is required",
    "instructions": "Cooking instructions are required",
}

_MINIMUMS = {
    "prep_time": (0, "Preparation time cannot be negative"),
    "cook_time": (0, "Cooking time cannot be negative"),
    "servings": (1, "Servings must be at least 1"),
}


class Category(str, Enum):
    APPETIZER = "appetizer"
    MAIN_COURSE = "main course"
    DESSERT = "dessert"
    BEVERAGE = "beverage"
    SALAD = "salad"
    SOUP = "soup"
    SNACK = "snack"
    BREAKFAST = "breakfast"
    OTHER = "other"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def _rule_error(message: str, **context: Any) -> PydanticCustomError:
    return PydanticCustomError(RULE_ERROR_TYPE, message, context or None)


def _normalize_choice(value: Any, choices: type, label: str) -> Any:
    """Lower-case and trim an enum value, rejecting anything outside the set."""
    if not isinstance(value, str):
        return value
    normalized = value.strip().lower()
    if normalized not in {c.value for c in choices}:
        raise _rule_error("{value} is not a valid " + label, value=normalized)
    return normalized


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RecipeFields(BaseModel):
    """Writable recipe fields. Absent (or null) fields take their defaults."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    name: str
    ingredients: List[str]
    instructions: str
    prep_time: StrictInt = 0
    cook_time: StrictInt = 0
    servings: StrictInt = 1
    category: Category = Category.OTHER
    difficulty: Difficulty = Difficulty.MEDIUM
    image_url: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def drop_null_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise _rule_error(REQUIRED_MESSAGES["name"])
        if len(value) > MAX_NAME_LENGTH:
            raise _rule_error(
                f"Recipe name cannot exceed {MAX_NAME_LENGTH} characters"
            )
        return value

    @field_validator("ingredients")
    @classmethod
    def check_ingredients(cls, value: List[str]) -> List[str]:
        if not value:
            raise _rule_error("Recipe must have at least one ingredient")
        return value

    @field_validator("instructions")
    @classmethod
    def check_instructions(cls, value: str) -> str:
        if len(value) < MIN_INSTRUCTIONS_LENGTH:
            raise _rule_error(
                f"Instructions must be at least {MIN_INSTRUCTIONS_LENGTH} characters long"
            )
        return value

    @field_validator("prep_time", "cook_time", "servings")
    @classmethod
    def check_minimum(cls, value: int, info) -> int:
        minimum, message = _MINIMUMS[info.field_name]
        if value < minimum:
            raise _rule_error(message)
        return value

    @field_validator("category", mode="before")
    @classmethod
    def normalize_category(cls, value: Any) -> Any:
        return _normalize_choice(value, Category, "category")

    @field_validator("difficulty", mode="before")
    @classmethod
    def normalize_difficulty(cls, value: Any) -> Any:
        return _normalize_choice(value, Difficulty, "difficulty level")

    @field_validator("image_url")
    @classmethod
    def trim_image_url(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None


class Recipe(RecipeFields):
    """A stored recipe: writable fields plus store-managed id and timestamps."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @computed_field(alias="totalTime")
    @property
    def total_time(self) -> int:
        return self.prep_time + self.cook_time

    def to_document(self) -> dict:
        """Serialize with camelCase keys and the derived totalTime."""
        return self.model_dump(mode="json", by_alias=True)
