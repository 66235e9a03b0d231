"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from talentbook.config import get_settings
from talentbook.infrastructure.database import engine, initialize_database
from talentbook.interfaces.api.error_handlers import register_error_handlers
from talentbook.interfaces.api.routes import register_routes
from talentbook.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release the pool on shutdown."""

    initialize_database()
    logger.info("Talent booking notification service started")
    yield
    engine.dispose()


def create_app(*, manage_database: bool = True) -> FastAPI:
    """Create and configure the FastAPI application.

    ``manage_database=False`` skips the startup table creation, for callers
    that bind their own engine (the test-suite does).
    """

    settings = get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Talent booking notifications",
        lifespan=lifespan if manage_database else None,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    register_routes(app)
    return app
