"""
Test fixtures for Recipe API tests.
Uses FastAPI dependency overrides for an isolated in-memory store per test.
"""

import pytest
from fastapi.testclient import TestClient

from recipe_api.core.dependencies import create_fresh_recipe_store, get_recipe_store
from recipe_api.main import app


@pytest.fixture
def store():
    """Fresh in-memory SQLiteRecipeStore for each test."""
    s = create_fresh_recipe_store()
    yield s
    s.close()


@pytest.fixture
def client(store):
    """Test client with the store dependency overridden."""
    app.dependency_overrides[get_recipe_store] = lambda: store

    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def sample_recipe_data():
    """Sample recipe for testing"""
    return {
        "name": "Test Recipe",
        "ingredients": ["ingredient 1", "ingredient 2"],
        "instructions": "First do step 1, then do step 2.",
        "prepTime": 15,
        "cookTime": 30,
        "servings": 4,
        "category": "main course",
        "difficulty": "hard",
        "imageUrl": "https://example.com/test.jpg",
    }


@pytest.fixture
def create_recipe(client, sample_recipe_data):
    """Create a recipe through the API and return its document."""

    def _create(**overrides):
        response = client.post("/api/recipes", json={**sample_recipe_data, **overrides})
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _create
