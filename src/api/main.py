"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance and wires the
data source, image store and session state during lifespan startup.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from src.adapters.images import InMemoryImageStore
from src.api.dependencies import build_directory, build_user_service
from src.api.state import UserSession
from src.api.v1 import router as v1_router
from src.config.settings import get_settings
from src.domain.exceptions import DataSourceError

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "User Management API v1 - Search users and register new ones",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Builds the user directory and domain service on startup
    - Loads the initial user collection (a failure starts the list empty)
    - Closes the HTTP client on shutdown
    """
    settings = get_settings()
    logging.getLogger("src").setLevel(settings.log_level.upper())

    logger.info("Starting application...")
    directory, http_client = build_directory(settings)
    service = build_user_service(settings, directory)

    session = UserSession()
    try:
        session.users = service.load_users()
    except DataSourceError:
        logger.warning("Initial user load failed, starting with an empty list")
        session.load_failed = True

    # Store collaborators in app state for dependency injection
    app.state.user_service = service
    app.state.session = session
    app.state.image_store = InMemoryImageStore()
    app.state.page_size = settings.page_size

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    if http_client is not None:
        http_client.close()
        logger.info("Data source client closed")


app = FastAPI(
    title="userdesk",
    description="User Management API - Searchable user list and validated registration form",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
async def health_check(request: Request) -> dict[str, str | int | bool]:
    """
    Health check endpoint.

    Reports the size of the in-memory user collection and whether the
    initial load from the data source failed.
    """
    session: UserSession = request.app.state.session
    return {"status": "healthy", "users": len(session.users), "load_failed": session.load_failed}
