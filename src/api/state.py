"""
Session state - Caller-owned state driven through the domain.

The domain functions are pure; this is where the API keeps the values they
return between requests: the user collection, the registration draft and
the errors currently shown for it.
"""

import threading
from dataclasses import dataclass, field

from src.domain.models import RegistrationDraft, User
from src.domain.validation import ValidationResult


@dataclass
class UserSession:
    """
    Mutable state of the single user-management screen.

    submission_lock guards the one registration allowed in flight at a
    time; it is a UI affordance, the domain does not rely on it.
    """

    users: tuple[User, ...] = ()
    draft: RegistrationDraft = field(default_factory=RegistrationDraft)
    errors: ValidationResult = field(default_factory=dict)
    load_failed: bool = False
    submission_lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def reset_draft(self) -> None:
        self.draft = RegistrationDraft()
        self.errors = {}
