"""
Video API — FastAPI Application

This is the entry point for the service. It:
1. Creates the FastAPI app instance
2. Configures logging and CORS
3. Registers error handlers and route handlers
4. Sets up startup/shutdown lifecycle events

Run with:
    uvicorn video_api.main:app --reload --port 8080
or:
    python -m video_api
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from video_api.config import settings
from video_api.database import AsyncSessionLocal, init_db
from video_api.errors import register_exception_handlers
from video_api.routers import videos

# IMPORTANT: Import models so SQLAlchemy registers them with Base.metadata
# before init_db() calls create_all(). Without this, no tables get created.
import video_api.models  # noqa: F401

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic.

    Code before 'yield' runs on startup.
    Code after 'yield' runs on shutdown.
    """
    configure_logging()
    logger.info("Starting Video API (env=%s)", settings.APP_ENV)
    await init_db()  # Create tables if they don't exist
    logger.info("Database tables created/verified")

    yield  # App is running, handling requests

    logger.info("Shutting down")


app = FastAPI(
    title="Video API",
    description="CRUD over YouTube video records with search, pagination and soft delete",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(videos.router, prefix="/api/v1")
# Unversioned alias for older clients
app.include_router(videos.router, include_in_schema=False)


@app.get("/", response_class=PlainTextResponse, tags=["health"])
async def root():
    """Root endpoint — confirms the API is alive."""
    return "Hello world!"


@app.get("/health", tags=["health"])
async def health_check():
    """Detailed health check — verifies database connectivity."""
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
        db_status = "connected"
    except SQLAlchemyError as e:
        logger.warning("Health check could not reach the database: %s", e)
        db_status = "unreachable"

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "database": db_status,
        "environment": settings.APP_ENV,
    }


def run() -> None:
    """Console entry point: serve on SERVER_HOST:SERVER_PORT."""
    import uvicorn

    uvicorn.run(
        "video_api.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
    )
