"""
Domain models - Records exchanged between the core and its collaborators.

All records are frozen dataclasses. The core never mutates a draft or a
user collection in place; it returns new values for the caller to store.
"""

from dataclasses import dataclass
from enum import Enum

# Shown for users whose source record carries no profile image.
DEFAULT_PROFILE_IMAGE = (
    "https://images.unsplash.com/photo-1494790108377-be9c29b29330"
    "?w=600&auto=format&fit=crop&q=60"
)


class Gender(str, Enum):
    """Gender options offered by the registration form."""

    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


@dataclass(frozen=True)
class RegistrationDraft:
    """
    In-progress registration record, owned by the caller.

    profile_image_ref is a transient local handle to a selected image,
    never a URL to persisted storage.
    """

    first_name: str = ""
    last_name: str = ""
    gender: Gender | None = None
    email: str = ""
    phone: str = ""
    profile_image_ref: str | None = None


@dataclass(frozen=True)
class User:
    """A user as supplied by the data source. Read-only to the core."""

    id: int | None
    first_name: str
    last_name: str
    gender: str
    email: str
    phone: str
    profile_image: str = DEFAULT_PROFILE_IMAGE

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class ImageAsset:
    """Metadata of a locally selected image, as reported by the picker."""

    size_bytes: int
    media_type: str


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""

    field: str
    message: str
