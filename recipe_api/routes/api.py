from typing import Any, Optional

from fastapi import APIRouter, Body, Depends

from recipe_api.core.abstractions import RecipeFilter, RecipeStore
from recipe_api.core.dependencies import get_recipe_store
from recipe_api.errors import RecipeNotFoundError
from recipe_api.models import Recipe
from recipe_api.services.metrics import record_request
from recipe_api.validation import validate_or_raise

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


def _build_response(**data: Any) -> dict:
    """Wrap response fields in the success envelope."""
    return {"success": True, **data}


def _recipe_or_404(store: RecipeStore, recipe_id: str) -> Recipe:
    recipe = store.find_by_id(recipe_id)
    if recipe is None:
        raise RecipeNotFoundError(recipe_id)
    return recipe


@router.post("", status_code=201)
@router.post("/", status_code=201, include_in_schema=False)
def create_recipe(
    payload: Any = Body(None),
    store: RecipeStore = Depends(get_recipe_store),
):
    """Create a new recipe"""
    record_request("create")
    fields = validate_or_raise(payload)
    recipe = store.insert(fields)
    return _build_response(
        message="Recipe created successfully", data=recipe.to_document()
    )


@router.get("")
@router.get("/", include_in_schema=False)
def get_recipes(
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    search: Optional[str] = None,
    store: RecipeStore = Depends(get_recipe_store),
):
    """Get all recipes, newest first, optionally filtered by category, difficulty and name search."""
    record_request("list")
    recipe_filter = RecipeFilter.from_params(
        category=category, difficulty=difficulty, search=search
    )
    recipes = store.find(recipe_filter)
    return _build_response(
        count=len(recipes), data=[r.to_document() for r in recipes]
    )


@router.get("/{recipe_id}")
def get_recipe(
    recipe_id: str,
    store: RecipeStore = Depends(get_recipe_store),
):
    """Get a recipe by ID"""
    record_request("get")
    recipe = _recipe_or_404(store, recipe_id)
    return _build_response(data=recipe.to_document())


@router.put("/{recipe_id}")
def update_recipe(
    recipe_id: str,
    payload: Any = Body(None),
    store: RecipeStore = Depends(get_recipe_store),
):
    """Replace all writable fields of an existing recipe. Unsupplied fields revert to defaults."""
    record_request("update")
    _recipe_or_404(store, recipe_id)
    fields = validate_or_raise(payload)
    recipe = store.update_by_id(recipe_id, fields)
    if recipe is None:
        raise RecipeNotFoundError(recipe_id)
    return _build_response(
        message="Recipe updated successfully", data=recipe.to_document()
    )


@router.delete("/{recipe_id}")
def delete_recipe(
    recipe_id: str,
    store: RecipeStore = Depends(get_recipe_store),
):
    """Delete a recipe"""
    record_request("delete")
    _recipe_or_404(store, recipe_id)
    if store.delete_by_id(recipe_id) is None:
        raise RecipeNotFoundError(recipe_id)
    return _build_response(message="Recipe deleted successfully", data={})
