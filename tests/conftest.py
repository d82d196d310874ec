"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- User records and a seeded collection
- A registration draft that passes validation
- Fresh settings per test (the get_settings cache is cleared)
"""

from collections.abc import Callable, Generator

import pytest

from src.config.settings import get_settings
from src.domain.models import Gender, RegistrationDraft, User


def make_user(
    user_id: int,
    first_name: str,
    last_name: str = "Smith",
    email: str | None = None,
    gender: str = "female",
) -> User:
    """Build a User with plausible defaults for the remaining fields."""
    return User(
        id=user_id,
        first_name=first_name,
        last_name=last_name,
        gender=gender,
        email=email or f"{first_name.lower()}.{last_name.lower()}@example.com",
        phone="+1-5550000000",
    )


@pytest.fixture
def user_factory() -> Callable[..., User]:
    return make_user


@pytest.fixture
def valid_draft() -> RegistrationDraft:
    """Draft that passes every validation rule."""
    return RegistrationDraft(
        first_name="Ann",
        last_name="Lee",
        gender=Gender.FEMALE,
        email="a@b.c",
        phone="+1-1234567890",
    )


@pytest.fixture
def twelve_users() -> list[User]:
    """
    12 users, newest first; exactly 7 match "an" (case-insensitive).

    Matches are at positions 0, 2, 3, 5, 7, 9, 11.
    """
    return [
        make_user(12, "Anna", "Berg"),
        make_user(11, "Bob", "Tull", email="bob@example.com"),
        make_user(10, "Brian", "Moss"),
        make_user(9, "Carl", "Jordan"),
        make_user(8, "Eve", "Holt", email="eve@example.com"),
        make_user(7, "Dora", "Smith", email="dora@ANYWHERE.io"),
        make_user(6, "Otto", "Kim", email="otto@example.com"),
        make_user(5, "Diana", "Ross"),
        make_user(4, "Kurt", "Wolf", email="kurt@example.com"),
        make_user(3, "Ivan", "Petrov"),
        make_user(2, "Lou", "Reed", email="lou@example.com"),
        make_user(1, "Zed", "Hanson"),
    ]


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Drop the cached Settings so env changes in one test do not leak."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
