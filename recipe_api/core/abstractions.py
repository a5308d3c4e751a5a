"""
Abstractions for recipe data access.
Enables swapping the document store and testability via dependency injection.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol

from recipe_api.models import Recipe, RecipeFields


def _normalize(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class RecipeFilter:
    """List filter. Fields left as None impose no constraint."""

    category: Optional[str] = None
    difficulty: Optional[str] = None
    search: Optional[str] = None

    @classmethod
    def from_params(
        cls,
        category: Optional[str] = None,
        difficulty: Optional[str] = None,
        search: Optional[str] = None,
    ) -> "RecipeFilter":
        category = _normalize(category)
        difficulty = _normalize(difficulty)
        return cls(
            category=category.lower() if category else None,
            difficulty=difficulty.lower() if difficulty else None,
            search=search or None,
        )

    def matches(self, recipe: Recipe) -> bool:
        if self.category is not None and recipe.category.value != self.category:
            return False
        if self.difficulty is not None and recipe.difficulty.value != self.difficulty:
            return False
        if self.search is not None and self.search.lower() not in recipe.name.lower():
            return False
        return True


class RecipeStore(Protocol):
    """Document store for recipes. Ids the store cannot address raise MalformedIdentifierError."""

    def insert(self, fields: RecipeFields) -> Recipe:
        """Persist a new recipe, assigning id and timestamps."""
        ...

    def find(self, recipe_filter: RecipeFilter) -> List[Recipe]:
        """Return matching recipes, newest first."""
        ...

    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """Get a recipe by ID, or None if absent."""
        ...

    def update_by_id(self, recipe_id: str, fields: RecipeFields) -> Optional[Recipe]:
        """Replace all writable fields. Returns the updated recipe, or None if absent."""
        ...

    def delete_by_id(self, recipe_id: str) -> Optional[Recipe]:
        """Delete a recipe. Returns the removed recipe, or None if absent."""
        ...
