"""
User management domain service.

Orchestrates the registration flow (validate, then hand the draft to the
data source) and the list view (search and paginate the in-memory
collection). The service holds no session state: the caller passes in its
current draft and collection and stores whatever comes back.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .exceptions import RegistrationRejected
from .models import RegistrationDraft, User
from .ports import UserDirectory
from .query import QueryState, UserPage
from .validation import FormValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrationOutcome:
    """Stored user and the collection with that user prepended."""

    user: User
    users: tuple[User, ...]


@dataclass
class UserManagementService:
    """
    Domain service for registering and listing users.

    Failures from the directory propagate as DataSourceError. Because the
    service only ever returns new values, a failed registration leaves the
    caller's draft and collection exactly as they were.
    """

    directory: UserDirectory
    validator: FormValidator

    def load_users(self) -> tuple[User, ...]:
        """
        Fetch the initial collection from the directory.

        Raises:
            DataSourceError: If the directory cannot list users
        """
        users = tuple(self.directory.list_users())
        logger.info("Loaded %d users from data source", len(users))
        return users

    def register(self, draft: RegistrationDraft, users: Sequence[User]) -> RegistrationOutcome:
        """
        Validate a draft and register it with the directory.

        Args:
            draft: Registration draft to submit
            users: Caller's current collection, newest first

        Returns:
            RegistrationOutcome with the stored user at the front

        Raises:
            RegistrationRejected: If validation fails; the directory is not called
            DataSourceError: If the directory fails to store the user
        """
        errors = self.validator.validate(draft)
        if errors:
            raise RegistrationRejected(errors)

        user = self.directory.add_user(draft)
        logger.info("Registered user %s (id=%s)", user.email, user.id)
        return RegistrationOutcome(user=user, users=(user, *users))

    def search(self, users: Sequence[User], state: QueryState) -> UserPage:
        return state.apply(users)
