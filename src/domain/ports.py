"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from its collaborators. Adapters implement these protocols.
"""

from dataclasses import dataclass
from typing import Protocol

from .models import RegistrationDraft, User


@dataclass(frozen=True)
class HeldImage:
    """Image bytes held locally for preview under an opaque handle."""

    content: bytes
    media_type: str


class UserDirectory(Protocol):
    """Port interface for the user data source."""

    def list_users(self) -> list[User]:
        """
        Fetch the users currently offered by the source.

        Returns:
            Users in source order

        Raises:
            DataSourceError: If the source cannot be reached or answers
                with an unusable payload
        """
        ...

    def add_user(self, draft: RegistrationDraft) -> User:
        """
        Register a new user from a validated draft.

        Args:
            draft: Draft that already passed FormValidator.validate

        Returns:
            The record as stored by the source

        Raises:
            DataSourceError: If the source rejects or fails the request
        """
        ...


class ImageStore(Protocol):
    """Port interface for transient local image handles."""

    def hold(self, content: bytes, media_type: str) -> str:
        """Keep image bytes in memory and return a fresh local handle."""
        ...

    def get(self, ref: str) -> HeldImage | None:
        """Return the image held under ref, or None if unknown."""
        ...

    def release(self, ref: str) -> None:
        """Forget the image held under ref. Unknown handles are ignored."""
        ...
