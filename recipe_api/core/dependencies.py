"""
FastAPI dependency injection providers.
Use Depends(get_recipe_store) in route handlers.
"""

from typing import Optional

from recipe_api.config import settings
from recipe_api.core.abstractions import RecipeStore
from recipe_api.services.storage import SQLiteRecipeStore

# --- Singleton (lazy-initialized) ---

_recipe_store: Optional[SQLiteRecipeStore] = None


def get_recipe_store() -> RecipeStore:
    """Provide RecipeStore. Used as Depends(get_recipe_store)."""
    global _recipe_store
    if _recipe_store is None:
        _recipe_store = SQLiteRecipeStore(db_path=settings.db_path)
    return _recipe_store


def close_recipe_store() -> None:
    """Close the shared store, if it was opened. Called on application shutdown."""
    global _recipe_store
    if _recipe_store is not None:
        _recipe_store.close()
        _recipe_store = None


# --- Factory for test overrides ---


def create_fresh_recipe_store() -> SQLiteRecipeStore:
    """Create new in-memory SQLiteRecipeStore. Use in tests for clean state."""
    return SQLiteRecipeStore()
