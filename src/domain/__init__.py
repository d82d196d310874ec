"""
Domain layer - Pure business logic with zero framework imports.

This package contains form validation and the user list query engine,
plus the port interfaces its collaborators (data source, image store)
implement.
"""

from .exceptions import DataSourceError, RegistrationRejected, UserManagementError
from .models import DEFAULT_PROFILE_IMAGE, FieldError, Gender, ImageAsset, RegistrationDraft, User
from .ports import HeldImage, ImageStore, UserDirectory
from .query import QueryState, UserPage, query
from .users import RegistrationOutcome, UserManagementService
from .validation import FormValidator, ImageSelection, ValidationResult, field_errors

__all__ = [
    "DEFAULT_PROFILE_IMAGE",
    "DataSourceError",
    "FieldError",
    "FormValidator",
    "Gender",
    "HeldImage",
    "ImageAsset",
    "ImageSelection",
    "ImageStore",
    "QueryState",
    "RegistrationDraft",
    "RegistrationOutcome",
    "RegistrationRejected",
    "User",
    "UserDirectory",
    "UserManagementError",
    "UserManagementService",
    "UserPage",
    "ValidationResult",
    "field_errors",
    "query",
]
