"""
Main application package initialization.
This package contains the FastAPI application and all its components.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.staticfiles import StaticFiles

from profile_service.core.config import settings
from profile_service.core.database import init_db
from profile_service.core.errors import register_exception_handlers
from profile_service.routes import auth, profile


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-5s %(name)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create missing database tables before the first request is served."""
    if settings.CREATE_TABLES:
        await run_in_threadpool(init_db)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="User accounts and profiles with bearer token authentication",
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

register_exception_handlers(app)

# Include routers
app.include_router(auth.router)
app.include_router(profile.router)

# Serve locally stored uploads
if settings.STORAGE_BASE_URL.startswith("/"):
    app.mount(
        settings.STORAGE_BASE_URL,
        StaticFiles(directory=settings.STORAGE_DIR, check_dir=False),
        name="media",
    )
