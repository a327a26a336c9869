"""Landscaper scheduling — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from landscaper.adapters.persistence.database import engine
from landscaper.config import settings
from landscaper.infrastructure.api.routes_health import router as health_router
from landscaper.infrastructure.api.routes_routing import router as routing_router
from landscaper.infrastructure.api.routes_schedule import router as schedule_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except Exception as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="Landscaper — scheduling service",
        description="Schedule conflict detection and crew route optimization",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS for the CRM frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(schedule_router, prefix="/api")
    app.include_router(routing_router, prefix="/api")

    return app


app = create_app()
