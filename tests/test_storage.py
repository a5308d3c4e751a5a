"""
Tests for the SQLite recipe store.
"""

import uuid

import pytest

from recipe_api.core.abstractions import RecipeFilter
from recipe_api.errors import DuplicateKeyError, MalformedIdentifierError
from recipe_api.models import Category
from recipe_api.services.storage import SQLiteRecipeStore
from recipe_api.validation import validate_or_raise


def make_fields(**overrides):
    data = {
        "name": "Lentil Soup",
        "ingredients": ["lentils", "carrot", "onion"],
        "instructions": "Simmer everything for forty minutes.",
        "category": "soup",
    }
    data.update(overrides)
    return validate_or_raise(data)


def test_insert_assigns_id_and_timestamps(store):
    recipe = store.insert(make_fields())
    assert uuid.UUID(recipe.id)
    assert recipe.created_at == recipe.updated_at
    assert store.find_by_id(recipe.id) == recipe


def test_find_by_id_accepts_uppercase_uuid(store):
    recipe = store.insert(make_fields())
    assert store.find_by_id(recipe.id.upper()).id == recipe.id


def test_find_by_id_missing_returns_none(store):
    assert store.find_by_id(str(uuid.uuid4())) is None


@pytest.mark.parametrize("bad_id", ["abc", "12345", "", "3f2b8c1e-9d4a-4b7e-8f21"])
def test_malformed_id_raises(store, bad_id):
    with pytest.raises(MalformedIdentifierError) as exc_info:
        store.find_by_id(bad_id)
    assert exc_info.value.message == f"Invalid id: {bad_id}"


def test_find_orders_newest_first(store):
    first = store.insert(make_fields(name="First"))
    second = store.insert(make_fields(name="Second"))
    third = store.insert(make_fields(name="Third"))
    assert [r.id for r in store.find(RecipeFilter())] == [third.id, second.id, first.id]


def test_find_applies_filters(store):
    store.insert(make_fields(name="Gazpacho", difficulty="easy"))
    store.insert(make_fields(name="Bouillabaisse", difficulty="hard"))
    store.insert(make_fields(name="Green Salad", category="salad", difficulty="easy"))

    soups = store.find(RecipeFilter.from_params(category="Soup"))
    assert {r.name for r in soups} == {"Gazpacho", "Bouillabaisse"}

    easy_soups = store.find(RecipeFilter.from_params(category="soup", difficulty="EASY"))
    assert [r.name for r in easy_soups] == ["Gazpacho"]

    searched = store.find(RecipeFilter.from_params(search="SALAD"))
    assert [r.name for r in searched] == ["Green Salad"]


def test_update_replaces_fields(store):
    recipe = store.insert(make_fields(servings=4, difficulty="hard"))
    updated = store.update_by_id(recipe.id, make_fields(name="Red Lentil Soup"))

    assert updated.id == recipe.id
    assert updated.name == "Red Lentil Soup"
    assert updated.servings == 1
    assert updated.difficulty.value == "medium"
    assert updated.created_at == recipe.created_at
    assert updated.updated_at >= recipe.updated_at
    assert store.find_by_id(recipe.id) == updated


def test_update_missing_returns_none(store):
    assert store.update_by_id(str(uuid.uuid4()), make_fields()) is None


def test_delete(store):
    recipe = store.insert(make_fields())
    assert store.delete_by_id(recipe.id) == recipe
    assert store.find_by_id(recipe.id) is None
    assert store.delete_by_id(recipe.id) is None


def test_delete_malformed_id_raises(store):
    with pytest.raises(MalformedIdentifierError):
        store.delete_by_id("nope")


def test_duplicate_id_raises_duplicate_key(store, monkeypatch):
    fixed = uuid.UUID("3f2b8c1e-9d4a-4b7e-8f21-6a5c0d9e1b72")
    monkeypatch.setattr(uuid, "uuid4", lambda: fixed)
    store.insert(make_fields())
    with pytest.raises(DuplicateKeyError) as exc_info:
        store.insert(make_fields(name="Another"))
    assert exc_info.value.message == (
        "Duplicate field value for id. Please use another value."
    )
    assert len(store.find(RecipeFilter())) == 1


def test_store_persists_to_file(tmp_path):
    db_path = str(tmp_path / "recipes.db")
    store = SQLiteRecipeStore(db_path=db_path)
    recipe = store.insert(make_fields(category="SOUP"))
    store.close()

    reopened = SQLiteRecipeStore(db_path=db_path)
    loaded = reopened.find_by_id(recipe.id)
    reopened.close()
    assert loaded == recipe
    assert loaded.category == Category.SOUP
    assert loaded.total_time == 0


def test_clear(store):
    store.insert(make_fields())
    store.clear()
    assert store.find(RecipeFilter()) == []
