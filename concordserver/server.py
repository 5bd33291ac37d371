"""
FastAPI application for the public concordances API.

Run with: uvicorn concordserver.server:app --host 0.0.0.0 --port 8080
or through the ``public-concordances-api`` command, which also accepts flags.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

import concordances

from .routers import concordances_api, health
from .service_factory import close_service, get_logger, get_settings, get_store, load_concepts_at_startup
from .transaction import transaction_id_middleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Opens the graph store on startup, loads concepts if configured, and closes on shutdown.
    """
    settings = get_settings()
    log = get_logger()
    log.info(
        {
            "APP_SYSTEM_CODE": settings.app_system_code,
            "CACHE_DURATION": settings.cache_duration,
            "DATABASE_URL": settings.database_url,
            "LOG_LEVEL": settings.log_level,
            "PORT": settings.app_port,
            "PUBLIC_API_URL": settings.public_api_url,
        }
    )
    get_store()
    load_concepts_at_startup(log)
    yield
    log.info("Shutting down, closing the concordance store")
    close_service()


def create_app() -> FastAPI:
    """Build the application with all routers mounted."""
    app = FastAPI(
        title="Public Concordances API",
        description="A read-only API for resolving equivalent concept identifiers across authorities.",
        version=concordances.__version__,
        lifespan=lifespan,
    )
    app.middleware("http")(transaction_id_middleware)
    app.include_router(concordances_api.router)
    app.include_router(health.router)
    return app


app = create_app()
