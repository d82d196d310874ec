"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting the domain service,
the image store and the session state into routes. All of them are built
once during app lifespan startup and stored in app.state.
"""

import logging

import httpx
from fastapi import Request

from src.adapters.dummyjson import DummyJsonUserDirectory, build_http_client
from src.adapters.memory import InMemoryUserDirectory
from src.api.state import UserSession
from src.config.settings import Settings
from src.domain.ports import ImageStore, UserDirectory
from src.domain.users import UserManagementService
from src.domain.validation import FormValidator

logger = logging.getLogger(__name__)


def build_directory(settings: Settings) -> tuple[UserDirectory, httpx.Client | None]:
    """
    Create the configured user directory.

    Returns:
        Tuple of (directory, http client to close on shutdown or None)
    """
    if settings.data_source == "memory":
        logger.info("Using in-memory user directory")
        return InMemoryUserDirectory(), None

    logger.info("Using dummyjson user directory at %s", settings.data_source_url)
    client = build_http_client(settings.data_source_url, settings.request_timeout_seconds)
    directory = DummyJsonUserDirectory(
        client,
        fetch_limit=settings.fetch_limit,
        placeholder_image=settings.placeholder_image_url,
    )
    return directory, client


def build_user_service(settings: Settings, directory: UserDirectory) -> UserManagementService:
    """Wire the directory and a validator configured from settings."""
    validator = FormValidator(
        require_profile_image=settings.require_profile_image,
        max_image_bytes=settings.max_image_bytes,
    )
    return UserManagementService(directory=directory, validator=validator)


def get_user_service(request: Request) -> UserManagementService:
    """Get the user management service from app state."""
    return request.app.state.user_service


def get_session(request: Request) -> UserSession:
    """Get the session state from app state."""
    return request.app.state.session


def get_image_store(request: Request) -> ImageStore:
    """Get the local image store from app state."""
    return request.app.state.image_store


def get_page_size(request: Request) -> int:
    """Get the list view page size from app state."""
    return request.app.state.page_size
