"""
Application settings read from environment variables.
Import `settings` from other modules; values are read once at import time.
"""

import os
from dataclasses import dataclass

APP_NAME = "Recipe CRUD API"
VERSION = "1.0.0"


@dataclass(frozen=True)
class Settings:
    environment: str = os.environ.get("RECIPE_API_ENV", "production")
    db_path: str = os.environ.get("RECIPE_API_DB_PATH", ":memory:")
    host: str = os.environ.get("HOST", "0.0.0.0")
    port: int = int(os.environ.get("PORT", "5000"))
    log_level: str = os.environ.get("LOG_LEVEL", "INFO").upper()

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"


settings = Settings()
