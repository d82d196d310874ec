"""
In-memory user directory adapter - Implements UserDirectory protocol.

Used for offline runs (DATA_SOURCE=memory) and tests. Records live only
for the lifetime of the instance.
"""

import logging
import threading
from collections.abc import Iterable

from src.domain.models import DEFAULT_PROFILE_IMAGE, RegistrationDraft, User

logger = logging.getLogger(__name__)


class InMemoryUserDirectory:
    """
    Implements UserDirectory protocol with a plain list.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Newly added users get the next integer id and are stored at the front,
    matching how the list view orders them.
    """

    def __init__(self, seed: Iterable[User] = ()) -> None:
        self._users = list(seed)
        self._next_id = max((user.id or 0 for user in self._users), default=0) + 1
        self._lock = threading.Lock()

    def list_users(self) -> list[User]:
        with self._lock:
            return list(self._users)

    def add_user(self, draft: RegistrationDraft) -> User:
        with self._lock:
            user = User(
                id=self._next_id,
                first_name=draft.first_name,
                last_name=draft.last_name,
                gender=draft.gender.value if draft.gender else "",
                email=draft.email,
                phone=draft.phone,
                profile_image=draft.profile_image_ref or DEFAULT_PROFILE_IMAGE,
            )
            self._next_id += 1
            self._users.insert(0, user)

        logger.info("Stored user %s in memory (id=%s)", user.email, user.id)
        return user
