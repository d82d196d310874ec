"""
Domain exceptions - Semantic error types for user management.

Validation failures are returned as values, not raised. These exceptions
cover the cases where an operation cannot produce a result at all.
"""


class UserManagementError(Exception):
    """Base class for user management domain errors."""

    pass


class DataSourceError(UserManagementError):
    """The user data source failed to list or store users."""

    pass


class RegistrationRejected(UserManagementError):
    """Submission blocked because the draft failed validation."""

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(", ".join(sorted(errors)))
        self.errors = dict(errors)
