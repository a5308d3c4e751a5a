"""
Recipe storage implementation.
SQLite-backed document store, in-memory by default for tests.
"""

import json
import logging
import sqlite3
import threading
import uuid
from typing import List, Optional

from recipe_api.core.abstractions import RecipeFilter
from recipe_api.errors import DuplicateKeyError, MalformedIdentifierError
from recipe_api.models import Recipe, RecipeFields, utcnow
from recipe_api.services.metrics import timed_store

logger = logging.getLogger(__name__)

_SELECT_DOCUMENT = "SELECT document FROM recipes"


def _init_schema(conn: sqlite3.Connection) -> None:
    """Create recipes table and indexes if not exists."""
    # seq is AUTOINCREMENT so row numbers are never reused; it breaks created_at ties.
    conn.executescript("""
        CREATE TABLE IF NOT EXISTS recipes (
            seq INTEGER PRIMARY KEY AUTOINCREMENT,
            id TEXT NOT NULL UNIQUE,
            name TEXT NOT NULL,
            category TEXT NOT NULL,
            difficulty TEXT NOT NULL,
            document TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        );
        CREATE INDEX IF NOT EXISTS idx_recipes_name ON recipes (name);
        CREATE INDEX IF NOT EXISTS idx_recipes_category ON recipes (category);
        CREATE INDEX IF NOT EXISTS idx_recipes_created_at ON recipes (created_at);
    """)
    conn.commit()


def _parse_id(recipe_id: str) -> str:
    """Canonical form of a recipe id, or MalformedIdentifierError."""
    try:
        return str(uuid.UUID(recipe_id))
    except (ValueError, TypeError, AttributeError):
        raise MalformedIdentifierError("id", recipe_id)


def _recipe_from_document(document: str) -> Recipe:
    return Recipe.model_validate(json.loads(document))


def _recipe_to_row(recipe: Recipe) -> tuple:
    """Convert Recipe to the column values following seq."""
    document = recipe.model_dump(mode="json", exclude={"total_time"})
    return (
        recipe.id,
        recipe.name,
        recipe.category.value,
        recipe.difficulty.value,
        json.dumps(document),
        recipe.created_at.isoformat(),
        recipe.updated_at.isoformat(),
    )


class SQLiteRecipeStore:
    """SQLite-backed recipe store implementing RecipeStore."""

    def __init__(self, db_path: Optional[str] = None) -> None:
        self._db_path = db_path or ":memory:"
        self._conn = sqlite3.connect(self._db_path, check_same_thread=False)
        self._lock = threading.Lock()
        _init_schema(self._conn)
        logger.debug("Opened recipe store at %s", self._db_path)

    @property
    def db_path(self) -> str:
        return self._db_path

    def close(self) -> None:
        self._conn.close()

    def clear(self) -> None:
        """Remove all recipes. Used by tests."""
        with self._lock:
            self._conn.execute("DELETE FROM recipes")
            self._conn.commit()

    def insert(self, fields: RecipeFields) -> Recipe:
        now = utcnow()
        recipe = Recipe(**fields.model_dump(), created_at=now, updated_at=now)
        with timed_store("insert"), self._lock:
            try:
                self._conn.execute(
                    "INSERT INTO recipes (id, name, category, difficulty, document, "
                    "created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?, ?)",
                    _recipe_to_row(recipe),
                )
            except sqlite3.IntegrityError:
                self._conn.rollback()
                raise DuplicateKeyError("id")
            self._conn.commit()
        return recipe

    def find(self, recipe_filter: RecipeFilter) -> List[Recipe]:
        clauses = []
        params = []
        if recipe_filter.category is not None:
            clauses.append("category = ?")
            params.append(recipe_filter.category)
        if recipe_filter.difficulty is not None:
            clauses.append("difficulty = ?")
            params.append(recipe_filter.difficulty)
        query = _SELECT_DOCUMENT
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY created_at DESC, seq DESC"

        with timed_store("find"), self._lock:
            rows = self._conn.execute(query, params).fetchall()

        # Substring search runs in Python: SQLite's lower() only folds ASCII.
        recipes = [_recipe_from_document(row[0]) for row in rows]
        return [r for r in recipes if recipe_filter.matches(r)]

    def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        key = _parse_id(recipe_id)
        with timed_store("find_by_id"), self._lock:
            row = self._conn.execute(
                f"{_SELECT_DOCUMENT} WHERE id = ?", (key,)
            ).fetchone()
        if row is None:
            return None
        return _recipe_from_document(row[0])

    def update_by_id(self, recipe_id: str, fields: RecipeFields) -> Optional[Recipe]:
        existing = self.find_by_id(recipe_id)
        if existing is None:
            return None
        recipe = Recipe(
            **fields.model_dump(),
            id=existing.id,
            created_at=existing.created_at,
            updated_at=utcnow(),
        )
        row = _recipe_to_row(recipe)
        with timed_store("update_by_id"), self._lock:
            cur = self._conn.execute(
                "UPDATE recipes SET name=?, category=?, difficulty=?, document=?, "
                "updated_at=? WHERE id=?",
                (row[1], row[2], row[3], row[4], row[6], recipe.id),
            )
            self._conn.commit()
        if cur.rowcount == 0:
            return None
        return recipe

    def delete_by_id(self, recipe_id: str) -> Optional[Recipe]:
        existing = self.find_by_id(recipe_id)
        if existing is None:
            return None
        with timed_store("delete_by_id"), self._lock:
            cur = self._conn.execute("DELETE FROM recipes WHERE id = ?", (existing.id,))
            self._conn.commit()
        if cur.rowcount == 0:
            return None
        return existing
