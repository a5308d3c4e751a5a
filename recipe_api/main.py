import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from recipe_api.config import APP_NAME, VERSION, settings
from recipe_api.core.dependencies import close_recipe_store, get_recipe_store
from recipe_api.core.error_handlers import register_error_handlers
from recipe_api.routes import api

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Apply LOG_LEVEL to the package loggers; add a root handler if none is set."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("recipe_api").setLevel(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging, open the recipe store on startup and close it on shutdown."""
    configure_logging()
    store = get_recipe_store()
    logger.info(
        "%s %s starting in %s mode (store: %s)",
        APP_NAME,
        VERSION,
        settings.environment,
        getattr(store, "db_path", type(store).__name__),
    )

    yield

    close_recipe_store()


# Create FastAPI app
app = FastAPI(title=APP_NAME, version=VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(api.router)


@app.get("/")
def welcome():
    return {
        "message": f"Welcome to {APP_NAME}",
        "version": VERSION,
        "endpoints": {"recipes": api.router.prefix},
    }


# Basic health check
@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.get("/metrics", include_in_schema=False)
def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
