"""Assignment Desk — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from assignment_desk.adapters.persistence.database import engine
from assignment_desk.config import settings
from assignment_desk.infrastructure.api.routes_analytics import router as analytics_router
from assignment_desk.infrastructure.api.routes_assignment import router as assignment_router
from assignment_desk.infrastructure.api.routes_health import router as health_router
from assignment_desk.infrastructure.api.routes_processing import router as processing_router
from assignment_desk.infrastructure.api.routes_queries import router as queries_router
from assignment_desk.infrastructure.api.routes_staff import router as staff_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        async with engine.begin():
            pass  # Connection pool warmed up
        logger.info("Database connection established")
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Database not available on startup: %s", e)
    yield
    await engine.dispose()


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    app = FastAPI(
        title="Assignment Desk",
        description="Rule-based routing of travel queries to back-office staff",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health_router, prefix="/api")
    app.include_router(queries_router, prefix="/api")
    app.include_router(assignment_router, prefix="/api")
    app.include_router(staff_router, prefix="/api")
    app.include_router(analytics_router, prefix="/api")
    app.include_router(processing_router, prefix="/api")

    return app


app = create_app()
